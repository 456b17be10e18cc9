"""Password hashing and access token signing.

Tokens are HS256 JWTs carrying the user's id, email and role. The role is
trusted from the token for the token's whole lifetime; a demoted admin keeps
admin access until their current token expires.
"""

from dataclasses import dataclass
from datetime import timedelta
from uuid import UUID

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from galerie.core.config import Settings
from galerie.core.timezone import utc_now


class InvalidToken(Exception):
    """Raised when a token fails signature, structure or expiry checks."""


@dataclass(frozen=True)
class TokenClaims:
    """Decoded identity carried by an access token."""

    user_id: UUID
    email: str
    role: str


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against a bcrypt hash.

    Returns False for malformed hashes instead of raising, so a corrupt row
    reads as a failed login.
    """
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(user_id: UUID, email: str, role: str, settings: Settings) -> str:
    """Create a signed access token.

    Args:
        user_id: Subject of the token
        email: User email, echoed back by /auth/me
        role: User role ("admin" or "editor")
        settings: Provides signing secret, algorithm and lifetime

    Returns:
        Encoded JWT string
    """
    issued_at = utc_now()
    expires_at = issued_at + timedelta(hours=settings.jwt_expire_hours)
    claims = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> TokenClaims:
    """Verify a token and return its claims.

    Raises:
        InvalidToken: Bad signature, malformed structure, missing claims, or expired
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError as e:
        raise InvalidToken("Token expired") from e
    except JWTError as e:
        raise InvalidToken("Invalid token") from e

    try:
        return TokenClaims(
            user_id=UUID(payload["sub"]),
            email=payload["email"],
            role=payload["role"],
        )
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidToken("Invalid token payload") from e
