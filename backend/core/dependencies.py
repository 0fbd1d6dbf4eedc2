"""
FastAPI dependency injection helpers: per-request database transaction and
the authorization gate (identity + role) that runs before every handler.
"""
from typing import Generator

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
import logging

from backend.core.security import decode_token
from backend.db.database import get_db
from backend.models.user import User, UserRole
from backend.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


# ---------------------------------------------------------------------------
# DB dependency
# ---------------------------------------------------------------------------

def db_dependency() -> Generator:
    """Yield a connection; the request's writes commit or roll back together."""
    with get_db() as conn:
        yield conn


# ---------------------------------------------------------------------------
# Auth dependencies
# ---------------------------------------------------------------------------

def get_current_user(
    token: str = Depends(oauth2_scheme),
    conn=Depends(db_dependency),
) -> User:
    """
    Decode the Bearer access token and return the corresponding User.
    Raises HTTP 401 if the token is invalid, expired, or the user is not found.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_token(token)
    except JWTError:
        logger.warning("Rejected undecodable access token")
        raise credentials_exception

    user_id = payload.get("sub")
    if payload.get("type") != "access" or user_id is None:
        logger.warning("Access token has wrong type or no subject")
        raise credentials_exception

    try:
        user = UserRepository(conn).get_by_id(int(user_id))
    except ValueError:
        logger.warning("Access token subject is not a user id")
        raise credentials_exception
    if user is None:
        logger.warning("No user for token subject=%s", user_id)
        raise credentials_exception
    logger.trace("Authenticated user id=%s", user.id)
    return user


def get_current_active_user(
    current_user: User = Depends(get_current_user),
) -> User:
    """Raise HTTP 400 if the account is deactivated."""
    if not current_user.is_active:
        logger.warning("Inactive user account id=%s", current_user.id)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user account",
        )
    return current_user


# ---------------------------------------------------------------------------
# Role-based access control
# ---------------------------------------------------------------------------

def require_roles(*roles: UserRole):
    """
    Factory that returns a dependency which enforces that the current user
    has one of the specified roles.

    Usage::
        @router.post("/branches")
        def create_branch(user: User = Depends(require_roles(UserRole.ADMIN))):
            ...
    """
    def _check(current_user: User = Depends(get_current_active_user)) -> User:
        if current_user.role not in roles:
            logger.warning(
                "User id=%s lacks required roles: %s",
                current_user.id,
                ", ".join(role.value for role in roles),
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to perform this action",
            )
        return current_user
    return _check


require_admin = require_roles(UserRole.ADMIN)
