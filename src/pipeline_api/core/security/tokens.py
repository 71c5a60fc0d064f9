"""JWT verification for tokens issued by the external identity provider."""

from dataclasses import dataclass, field
from typing import Any

from jose import JWTError, jwt

from src.pipeline_api.core.config import get_settings

ROLE_PREFIX = "ROLE_"
ROLE_USER = "ROLE_USER"
ROLE_ADMIN = "ROLE_ADMIN"


@dataclass(frozen=True)
class Principal:
    """The verified caller of a request."""

    username: str
    roles: frozenset[str] = field(default_factory=frozenset)

    def has_role(self, role: str) -> bool:
        return role in self.roles

    def has_any_role(self, *roles: str) -> bool:
        return any(role in self.roles for role in roles)


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and validate JWT token. Returns None on any error."""
    settings = get_settings()
    options = {"verify_aud": settings.jwt_audience is not None}
    try:
        return jwt.decode(  # type: ignore[no-any-return]
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            options=options,
        )
    except JWTError:
        return None


def extract_roles(payload: dict[str, Any]) -> frozenset[str]:
    """Collect role authorities from Keycloak-style claims.

    Realm roles (``realm_access.roles``) are kept only when already prefixed
    with ``ROLE_``. Client roles (``resource_access.<client>.roles``) are all
    kept, upper-cased and prefixed.
    """
    roles: set[str] = set()

    realm_access = payload.get("realm_access") or {}
    if isinstance(realm_access, dict):
        for role in realm_access.get("roles") or []:
            if isinstance(role, str) and role.startswith(ROLE_PREFIX):
                roles.add(role)

    resource_access = payload.get("resource_access") or {}
    if isinstance(resource_access, dict):
        for resource in resource_access.values():
            if not isinstance(resource, dict):
                continue
            for role in resource.get("roles") or []:
                if isinstance(role, str):
                    roles.add(f"{ROLE_PREFIX}{role.upper()}")

    return frozenset(roles)


def principal_from_payload(payload: dict[str, Any]) -> Principal | None:
    """Build a Principal from a decoded token, or None if it names nobody."""
    settings = get_settings()
    username = payload.get(settings.jwt_username_claim) or payload.get("sub")
    if not username or not isinstance(username, str):
        return None
    return Principal(username=username, roles=extract_roles(payload))


def authenticate_token(token: str) -> Principal | None:
    """Verify a bearer token and return its Principal, or None if invalid."""
    payload = decode_token(token)
    if payload is None:
        return None
    return principal_from_payload(payload)
