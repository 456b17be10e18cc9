"""FastAPI dependencies for request validation and common operations.

This module provides reusable FastAPI dependencies for:
- Settings, Unit of Work factory and object storage from app state
- Bearer token authentication and admin authorization
"""

from dataclasses import dataclass
from typing import Annotated, Callable
from uuid import UUID

import structlog
from fastapi import Depends, Header, Request

from galerie.api.errors import Forbidden, Unauthorized
from galerie.core.config import Settings
from galerie.core.config import get_settings as load_settings
from galerie.core.security import InvalidToken, decode_access_token
from galerie.models.user import UserRole
from galerie.services.storage import ObjectStorage
from galerie.uow import UnitOfWork

logger = structlog.get_logger()

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class AuthUser:
    """Identity of the caller, as asserted by their token."""

    id: UUID
    email: str
    role: str


def get_settings() -> Settings:
    """Get application settings instance.

    Returns:
        Process-wide Settings loaded from environment variables.
    """
    return load_settings()


def get_uow_factory(request: Request) -> Callable[[], UnitOfWork]:
    """Get UnitOfWork factory from app state.

    Example:
        >>> @router.post("/endpoint")
        >>> async def endpoint(uow_factory=Depends(get_uow_factory)):
        ...     async with await uow_factory() as uow:
        ...         await uow.artists.get_by_id(artist_id)
    """
    return request.app.state.uow_factory


def get_storage(request: Request) -> ObjectStorage:
    """Get the object storage gateway from app state."""
    return request.app.state.storage


async def require_authenticated(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
    settings: Settings = Depends(get_settings),
) -> AuthUser:
    """Authenticate the caller from the Authorization header.

    On success the identity is also stored on ``request.state.user``.

    Raises:
        Unauthorized: Missing header, missing "Bearer " prefix, or a token that
            is invalid or expired
    """
    if not authorization:
        raise Unauthorized("Missing authorization header")
    if not authorization.startswith(BEARER_PREFIX):
        raise Unauthorized("Invalid authorization header")

    token = authorization[len(BEARER_PREFIX) :].strip()
    try:
        claims = decode_access_token(token, settings)
    except InvalidToken as e:
        logger.info("auth.token_rejected", reason=str(e), path=request.url.path)
        raise Unauthorized(str(e)) from e

    user = AuthUser(id=claims.user_id, email=claims.email, role=claims.role)
    request.state.user = user
    return user


async def require_admin(user: AuthUser = Depends(require_authenticated)) -> AuthUser:
    """Require an authenticated caller whose token carries the admin role.

    Raises:
        Forbidden: Authenticated but not an admin
    """
    if user.role != UserRole.ADMIN.value:
        logger.info("auth.forbidden", user_id=str(user.id), role=user.role)
        raise Forbidden("Admin access required")
    return user
