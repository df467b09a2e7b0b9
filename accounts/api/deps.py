"""
API dependencies for FastAPI dependency injection.
Provides reusable dependencies for settings, authentication and authorization.
"""

import uuid
from typing import Annotated, Optional

from fastapi import Cookie, Depends, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session

from accounts.core.config import Settings
from accounts.core.errors import AppError, ErrorMessage
from accounts.core.logging import get_logger
from accounts.core.security import decode_access_token
from accounts.db.session import get_session
from accounts.models.user import User
from accounts.services.user_service import UserService

logger = get_logger(__name__)

TOKEN_COOKIE = "token"

# Missing credentials are reported through the taxonomy, not FastAPI's default
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token(
    bearer: Annotated[Optional[str], Depends(oauth2_scheme)],
    token: Annotated[Optional[str], Cookie(alias=TOKEN_COOKIE)] = None,
) -> str:
    """
    Dependency returning the access token from the Authorization header,
    falling back to the ``token`` cookie.

    Raises:
        AppError: TOKEN_NOT_PROVIDED if neither is present
    """
    found = bearer or token
    if not found:
        raise AppError(ErrorMessage.TOKEN_NOT_PROVIDED)
    return found


def get_current_user(
    session: Annotated[Session, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    token: Annotated[str, Depends(get_token)],
) -> User:
    """
    Dependency to get the current authenticated user from JWT token.

    Raises:
        AppError: INVALID_TOKEN if the token cannot be verified,
            USER_NO_LONGER_EXIST if its subject has been removed
    """
    token_data = decode_access_token(token, settings)

    try:
        user_id = uuid.UUID(token_data.sub)  # type: ignore[arg-type]
    except ValueError as e:
        logger.warning("Invalid user ID in token")
        raise AppError(ErrorMessage.INVALID_TOKEN) from e

    user = UserService.get_by_id(session, user_id)
    if user is None:
        logger.warning(f"User {user_id} not found")
        raise AppError(ErrorMessage.USER_NO_LONGER_EXIST, status=status.HTTP_401_UNAUTHORIZED)

    return user


def get_current_admin_user(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """
    Dependency to ensure current user is an admin.

    Raises:
        AppError: PERMISSION_DENIED if the user is not an admin
    """
    if not UserService.is_admin(current_user):
        logger.warning(f"Non-admin user {current_user.id} attempted admin access")
        raise AppError(ErrorMessage.PERMISSION_DENIED)
    return current_user
