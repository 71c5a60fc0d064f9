"""Validators for caller-supplied identifiers."""

import re
from typing import Final

MAX_KEY_LENGTH: Final[int] = 100
KEY_REGEX: Final[str] = r"^[A-Za-z0-9][A-Za-z0-9._:-]*$"

_KEY_PATTERN: Final[re.Pattern[str]] = re.compile(KEY_REGEX)


def validate_natural_key(value: str, label: str = "Identifier") -> str:
    """Validate a scope (srid) or natural key (assignment_id, task_id, ...).

    Keys must:
    - Not be blank (surrounding whitespace is stripped first)
    - Not exceed MAX_KEY_LENGTH characters
    - Start with a letter or digit and contain only letters, digits, '.', '_', ':' or '-'

    Args:
        value: The raw identifier
        label: Name used in the error message

    Returns:
        The stripped identifier

    Raises:
        ValueError: If the identifier is invalid

    Examples:
        >>> validate_natural_key("PRJ1")
        'PRJ1'
        >>> validate_natural_key("SET-1700000000000")
        'SET-1700000000000'
        >>> validate_natural_key("a/b")  # Invalid - slash
    """
    value = value.strip()
    if not value:
        raise ValueError(f"{label} cannot be empty or whitespace only")
    if len(value) > MAX_KEY_LENGTH:
        raise ValueError(f"{label} exceeds {MAX_KEY_LENGTH} characters")
    if not _KEY_PATTERN.match(value):
        raise ValueError(
            f"{label} must start with a letter or digit and contain only letters, digits, "
            "'.', '_', ':' or '-'"
        )
    return value


def normalize_filter(value: str | None) -> str | None:
    """Treat blank filter values exactly like absent ones.

    Present values pass through untouched; matching is exact equality.
    """
    if value is None or not value.strip():
        return None
    return value
