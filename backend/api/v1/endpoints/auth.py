"""
Authentication endpoints:
  POST /auth/login   – OAuth2 password flow, returns an access token
  GET  /auth/me      – Return the currently authenticated user's profile
"""
from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
import logging

from backend.core.dependencies import db_dependency, get_current_active_user
from backend.models.user import User
from backend.schemas.token import Token
from backend.schemas.user import UserResponse
from backend.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/login",
    response_model=Token,
    summary="Login with username/email and password (OAuth2 Password Flow)",
)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    conn=Depends(db_dependency),
):
    """
    - **username**: your username *or* email address
    - **password**: your password
    """
    logger.info("Login requested for username=%s", form_data.username)
    return AuthService(conn).login(form_data.username, form_data.password)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get the current authenticated user's profile",
)
def get_me(current_user: User = Depends(get_current_active_user)):
    return current_user
