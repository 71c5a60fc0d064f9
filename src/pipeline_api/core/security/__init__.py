"""Security utilities - token verification and identifier validators.

Re-exports all security-related functions for convenience.
"""

from src.pipeline_api.core.security.tokens import (
    ROLE_ADMIN,
    ROLE_USER,
    Principal,
    authenticate_token,
    decode_token,
    extract_roles,
    principal_from_payload,
)
from src.pipeline_api.core.security.validators import normalize_filter, validate_natural_key

__all__ = [
    # Tokens
    "ROLE_ADMIN",
    "ROLE_USER",
    "Principal",
    "authenticate_token",
    "decode_token",
    "extract_roles",
    "principal_from_payload",
    # Validators
    "normalize_filter",
    "validate_natural_key",
]
