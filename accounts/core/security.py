"""
Security utilities for password hashing and JWT token management.

Default hashing uses ``pbkdf2_sha256`` for stable cross-platform behavior in
tests and local development. ``bcrypt`` verification is still supported for
hashes created by earlier deployments.

Every failure is reported as an ``AppError`` so that no library error text
reaches the HTTP layer.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext
from passlib.exc import UnknownHashError

from accounts.core.config import Settings
from accounts.core.errors import AppError, ErrorMessage
from accounts.core.logging import get_logger
from accounts.schemas.token import TokenPayload

logger = get_logger(__name__)

# Bcrypt truncates beyond 72 bytes; hold every scheme to the same limit.
MAX_PASSWORD_LENGTH = 72

pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a password using the configured default scheme.

    Raises:
        AppError: EMPTY_PASSWORD, EXCEEDED_MAX_PASSWORD_LENGTH or HASHING_ERROR
    """
    if not password:
        raise AppError(ErrorMessage.EMPTY_PASSWORD)
    if len(password) > MAX_PASSWORD_LENGTH:
        raise AppError(ErrorMessage.EXCEEDED_MAX_PASSWORD_LENGTH, limit=MAX_PASSWORD_LENGTH)
    try:
        return pwd_context.hash(password)
    except (ValueError, TypeError) as e:
        logger.error(f"Password hashing failed: {type(e).__name__}")
        raise AppError(ErrorMessage.HASHING_ERROR) from e


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a stored hash.

    Raises:
        AppError: EMPTY_PASSWORD, or INVALID_HASH_FORMAT if the stored hash
            is not recognised by any configured scheme
    """
    if not plain_password:
        raise AppError(ErrorMessage.EMPTY_PASSWORD)
    if len(plain_password) > MAX_PASSWORD_LENGTH:
        raise AppError(ErrorMessage.EXCEEDED_MAX_PASSWORD_LENGTH, limit=MAX_PASSWORD_LENGTH)
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (UnknownHashError, ValueError, TypeError) as e:
        logger.error(f"Stored password hash could not be read: {type(e).__name__}")
        raise AppError(ErrorMessage.INVALID_HASH_FORMAT) from e


def create_access_token(
    subject: str | Any,
    settings: Settings,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        subject: The subject (the user ID) to encode in the token
        settings: Application settings holding the secret and max age
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.JWT_MAXAGE))

    to_encode = {"sub": str(subject), "iat": now, "exp": expire}
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> TokenPayload:
    """
    Decode and verify a JWT access token.

    Raises:
        AppError: INVALID_TOKEN if the token is malformed, expired, signed
            with another key or has no subject
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT validation failed: {type(e).__name__}")
        raise AppError(ErrorMessage.INVALID_TOKEN) from e

    token_data = TokenPayload(sub=payload.get("sub"))
    if not token_data.sub:
        logger.warning("Token missing subject claim")
        raise AppError(ErrorMessage.INVALID_TOKEN)
    return token_data


def generate_verification_code() -> str:
    """Random URL-safe code for email verification and password reset."""
    return secrets.token_urlsafe(32)
