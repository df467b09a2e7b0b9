"""
Authentication routes: registration, login, email verification and
password reset.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel import Session

from accounts.api.deps import TOKEN_COOKIE, get_settings
from accounts.core.config import Settings
from accounts.core.logging import get_logger
from accounts.core.security import create_access_token
from accounts.core.validation import ensure_valid
from accounts.db.session import get_session
from accounts.schemas.token import UserLoginResponse
from accounts.schemas.user import (
    ForgotPasswordInput,
    LoginInput,
    MessageResponse,
    RegisterInput,
    ResetPasswordInput,
    VerifyEmailInput,
)
from accounts.services.user_service import UserService

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

FORGOT_PASSWORD_MESSAGE = "If that email is registered, a password reset link has been sent."


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_in: RegisterInput,
    session: Annotated[Session, Depends(get_session)],
) -> MessageResponse:
    """
    Register a new user.

    Raises:
        HttpError: 400 listing every violated rule
        AppError: EMAIL_EXIST if email already registered
    """
    ensure_valid(user_in)

    user = UserService.create(session, user_in)
    logger.info(f"New user registered (ID: {user.id})")

    return MessageResponse(
        message="Registration successful! Please check your email to verify your account.",
    )


@router.post("/login", response_model=UserLoginResponse)
def login(
    credentials: LoginInput,
    response: Response,
    session: Annotated[Session, Depends(get_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserLoginResponse:
    """
    Exchange email and password for an access token.
    The token is returned in the body and set as an http-only cookie.

    Raises:
        AppError: WRONG_CREDENTIALS if the credentials are invalid
    """
    ensure_valid(credentials)

    user = UserService.authenticate(session, email=credentials.email, password=credentials.password)
    token = create_access_token(subject=user.id, settings=settings)
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=settings.JWT_MAXAGE_SECONDS,
        httponly=True,
        samesite="lax",
        path="/",
    )
    logger.info(f"User logged in (ID: {user.id})")

    return UserLoginResponse(token=token)


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    response.delete_cookie(TOKEN_COOKIE, path="/")
    return MessageResponse(message="Logged out")


@router.get("/verify", response_model=MessageResponse)
def verify_email(
    token: Annotated[str, Query()],
    session: Annotated[Session, Depends(get_session)],
) -> MessageResponse:
    """
    Confirm an email address with the code issued at registration.

    Raises:
        AppError: INVALID_TOKEN if the code is unknown or expired
    """
    query = ensure_valid(VerifyEmailInput(token=token))

    user = UserService.verify_email(session, query.token)
    logger.info(f"Email verified (ID: {user.id})")

    return MessageResponse(message="Email verified successfully")


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    body: ForgotPasswordInput,
    session: Annotated[Session, Depends(get_session)],
) -> MessageResponse:
    """
    Issue a password reset code.
    Responds the same whether or not the email is registered.
    """
    ensure_valid(body)

    user = UserService.forgot_password(session, body.email)
    if user is not None:
        logger.info(f"Password reset code issued (ID: {user.id})")

    return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(
    body: ResetPasswordInput,
    session: Annotated[Session, Depends(get_session)],
) -> MessageResponse:
    """
    Set a new password using a reset code.

    Raises:
        AppError: INVALID_TOKEN if the code is unknown or expired
    """
    ensure_valid(body)

    user = UserService.reset_password(session, body.token, body.new_password)
    logger.info(f"Password reset (ID: {user.id})")

    return MessageResponse(message="Password has been successfully reset.")
