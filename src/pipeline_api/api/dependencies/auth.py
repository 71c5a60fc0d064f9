"""Authentication and authorization dependencies.

Tokens are issued by the external identity provider; this service only
verifies them and trusts the role claims they carry.
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from src.pipeline_api.core.logging import bind_principal_context
from src.pipeline_api.core.security import ROLE_ADMIN, ROLE_USER, Principal, authenticate_token

_BEARER_PREFIX = "Bearer "


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_principal(
    authorization: Annotated[str | None, Header()] = None,
) -> Principal:
    """Verify the bearer token and return the caller."""
    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        raise _unauthorized("Missing or invalid authorization header")

    principal = authenticate_token(authorization[len(_BEARER_PREFIX) :])
    if principal is None:
        raise _unauthorized("Invalid or expired token")

    # Bind caller to logs
    bind_principal_context(principal.username, principal.roles)
    return principal


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]


def require_roles(*roles: str) -> Callable[[Principal], Awaitable[Principal]]:
    """Build a dependency that admits callers holding any of ``roles``."""

    async def dependency(principal: CurrentPrincipal) -> Principal:
        if not principal.has_any_role(*roles):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role: {' or '.join(roles)}",
            )
        return principal

    return dependency


UserPrincipal = Annotated[Principal, Depends(require_roles(ROLE_USER))]
AdminPrincipal = Annotated[Principal, Depends(require_roles(ROLE_ADMIN))]
