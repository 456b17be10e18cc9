"""Authentication endpoints.

- POST /api/auth/login - Exchange email and password for a bearer token
- GET /api/auth/me - Identity carried by the presented token
"""

import structlog
from fastapi import APIRouter, Depends, status

from galerie.api.dependencies import AuthUser, get_settings, get_uow_factory, require_authenticated
from galerie.api.errors import Unauthorized
from galerie.api.schemas import LoginRequest, LoginResponse, UserRead
from galerie.core.config import Settings
from galerie.services.auth import authenticate
from galerie.services.exceptions import AuthenticationError

logger = structlog.get_logger()
router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse, status_code=status.HTTP_200_OK)
async def login(
    request: LoginRequest,
    uow_factory=Depends(get_uow_factory),
    settings: Settings = Depends(get_settings),
) -> LoginResponse:
    """Log in with email and password.

    Unknown emails and wrong passwords get the same 401 response.

    Example:
        POST /api/auth/login
        {"email": "admin@example.com", "password": "..."}

        Response 200:
        {"token": "eyJ...", "user": {"id": "...", "email": "admin@example.com", "role": "admin"}}
    """
    async with await uow_factory() as uow:
        try:
            user, token = await authenticate(uow, request.email, request.password, settings)
        except AuthenticationError as e:
            raise Unauthorized(str(e)) from e

        return LoginResponse(token=token, user=UserRead.model_validate(user))


@router.get("/me", response_model=UserRead)
async def me(user: AuthUser = Depends(require_authenticated)) -> UserRead:
    """Return the identity asserted by the bearer token (no database lookup)."""
    return UserRead(id=user.id, email=user.email, role=user.role)
