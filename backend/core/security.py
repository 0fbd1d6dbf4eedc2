"""
Security utilities: password hashing and JWT creation/verification.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
import logging

from jose import jwt
from passlib.context import CryptContext

from backend.core.config import settings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(plain_password: str) -> str:
    """Return the bcrypt hash of *plain_password*."""
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if *plain_password* matches *hashed_password*."""
    return pwd_context.verify(plain_password, hashed_password)


# ---------------------------------------------------------------------------
# JWT helpers
# ---------------------------------------------------------------------------

def create_access_token(
    user_id: int,
    role: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Sign an access token carrying the user id (``sub``) and role."""
    now = datetime.now(tz=timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "role": role,
        "type": "access",
        "iat": now,
        "exp": now + expires_delta,
    }
    token = jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    logger.info("Issued access token for user id=%s", user_id)
    return token


def decode_token(token: str) -> dict:
    """
    Decode and verify a JWT.

    Raises:
        jose.JWTError: if the token is invalid or expired.
    """
    logger.trace("Decoding JWT token")
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
