"""API Dependencies — principal resolution, role gate, and handler wiring.

Invariants:
    - get_current_user raises AuthenticationError (401) without a valid bearer token
    - RoleChecker runs before the route body: a 403 means the repository was never called
    - Handlers get a repository bound to the request's own DB session

Design Decisions:
    - Callable-class role gate (RoleChecker) so each route declares its role in one place
    - HTTPBearer(auto_error=False): missing credentials produce our envelope, not FastAPI's default
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from villa_api.config import Settings, get_settings
from villa_api.core.errors import (
    AuthenticationError, AuthorizationError, ErrorContext,
)
from villa_api.infrastructure.database import get_db
from villa_api.infrastructure.security import decode_access_token
from villa_api.repositories.villa_number import SqlAlchemyVillaNumberRepository
from villa_api.schemas.auth import CurrentUser
from villa_api.services.handle_villa_numbers import VillaNumberHandlers

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> CurrentUser:
    """Resolve the caller from the Authorization header or raise 401."""
    if credentials is None:
        raise AuthenticationError()
    user = decode_access_token(credentials.credentials, settings)
    request.state.user = user
    return user


class RoleChecker:
    """Dependency that admits only principals holding one of the given roles."""

    def __init__(self, *roles: str):
        self.roles = roles

    async def __call__(
        self,
        request: Request,
        user: CurrentUser = Depends(get_current_user),
        settings: Settings = Depends(get_settings),
    ) -> CurrentUser:
        required = self.roles or (settings.privileged_role,)
        if not any(user.has_role(role) for role in required):
            raise AuthorizationError(
                ", ".join(required),
                ErrorContext(username=user.username, operation=request.method),
            )
        return user


# No explicit role: falls back to settings.privileged_role at request time
require_privileged = RoleChecker()


async def get_villa_number_handlers(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> VillaNumberHandlers:
    return VillaNumberHandlers(
        SqlAlchemyVillaNumberRepository(db),
        strict_conflict_status=settings.strict_conflict_status,
    )
