"""Login and first-run admin account creation."""

import structlog

from galerie.core.config import Settings
from galerie.core.security import create_access_token, hash_password, verify_password
from galerie.models.user import User, UserRole
from galerie.services.exceptions import AuthenticationError
from galerie.uow import UnitOfWork

logger = structlog.get_logger()

INVALID_CREDENTIALS = "Invalid credentials"


async def authenticate(
    uow: UnitOfWork, email: str, password: str, settings: Settings
) -> tuple[User, str]:
    """Check credentials and issue an access token.

    Args:
        uow: Active Unit of Work
        email: Login email (matched case-insensitively)
        password: Plain-text password
        settings: Token signing configuration

    Returns:
        (user, token) pair

    Raises:
        AuthenticationError: Unknown email or wrong password, same message for both
    """
    user = await uow.users.get_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("auth.login_failed", email=email)
        raise AuthenticationError(INVALID_CREDENTIALS)

    token = create_access_token(user.id, user.email, user.role, settings)
    logger.info("auth.login_succeeded", user_id=str(user.id), role=user.role)
    return user, token


async def seed_admin(uow: UnitOfWork, settings: Settings) -> User | None:
    """Create the admin account from settings when no admin exists yet.

    Returns:
        The created user, or None when an admin was already present or no
        admin credentials are configured
    """
    if await uow.users.has_admin():
        logger.info("auth.admin_seed_skipped", reason="admin_exists")
        return None
    if not settings.admin_email or not settings.admin_password:
        logger.warning("auth.admin_seed_skipped", reason="credentials_not_configured")
        return None

    user = await uow.users.add(
        User(
            email=settings.admin_email,
            password_hash=hash_password(settings.admin_password),
            role=UserRole.ADMIN.value,
        )
    )
    logger.info("auth.admin_seeded", email=user.email)
    return user
