"""
User service layer implementing business logic for user operations.
Separates business logic from API routes and database operations.

Failures are raised as ``AppError`` so the HTTP boundary can map them.
"""

import uuid
from datetime import timedelta
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, func, select

from accounts.core.errors import AppError, ErrorMessage
from accounts.core.logging import get_logger
from accounts.core.security import generate_verification_code, hash_password, verify_password
from accounts.models.user import User, UserRole, utcnow
from accounts.schemas.user import RegisterInput

logger = get_logger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
VERIFICATION_CODE_TTL = timedelta(hours=24)
RESET_CODE_TTL = timedelta(minutes=30)


class UserService:
    """Service class for user-related operations."""

    @staticmethod
    def get_by_email(session: Session, email: str) -> Optional[User]:
        """
        Retrieve a user by email address.

        Args:
            session: Database session
            email: Email address to search for

        Returns:
            User if found, None otherwise
        """
        statement = select(User).where(User.email == email)
        return session.exec(statement).first()

    @staticmethod
    def get_by_id(session: Session, user_id: uuid.UUID) -> Optional[User]:
        return session.get(User, user_id)

    @staticmethod
    def get_by_verification_code(session: Session, code: str) -> Optional[User]:
        statement = select(User).where(User.verification_code == code)
        return session.exec(statement).first()

    @staticmethod
    def create(session: Session, user_in: RegisterInput, role: UserRole = UserRole.USER) -> User:
        """
        Create a new unverified user with a hashed password and a pending
        verification code.

        Raises:
            AppError: EMAIL_EXIST if the email is already registered, or a
                password hashing failure
        """
        if UserService.get_by_email(session, user_in.email):
            raise AppError(ErrorMessage.EMAIL_EXIST)

        db_user = User(
            name=user_in.name,
            email=user_in.email,
            password=hash_password(user_in.password),
            role=role,
        )
        db_user.issue_verification_code(
            generate_verification_code(), utcnow() + VERIFICATION_CODE_TTL
        )
        session.add(db_user)
        try:
            session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration for the same email
            session.rollback()
            raise AppError(ErrorMessage.EMAIL_EXIST) from e
        session.refresh(db_user)
        return db_user

    @staticmethod
    def authenticate(session: Session, email: str, password: str) -> User:
        """
        Authenticate a user by email and password.

        Raises:
            AppError: WRONG_CREDENTIALS for an unknown email or a wrong
                password alike
        """
        user = UserService.get_by_email(session, email)
        if not user:
            raise AppError(ErrorMessage.WRONG_CREDENTIALS)
        if not verify_password(password, user.password):
            raise AppError(ErrorMessage.WRONG_CREDENTIALS)
        return user

    @staticmethod
    def list_users(
        session: Session,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[User]:
        """Return one page of users, newest first."""
        page = page or DEFAULT_PAGE
        limit = limit or DEFAULT_LIMIT
        statement = (
            select(User)
            .order_by(col(User.created_at).desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(session.exec(statement).all())

    @staticmethod
    def count(session: Session) -> int:
        return session.exec(select(func.count()).select_from(User)).one()

    @staticmethod
    def _save(session: Session, user: User) -> User:
        user.touch()
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    @staticmethod
    def update_name(session: Session, user: User, name: str) -> User:
        user.name = name
        return UserService._save(session, user)

    @staticmethod
    def update_role(session: Session, user_id: uuid.UUID, role: UserRole) -> User:
        """
        Change another user's role.

        Raises:
            AppError: USER_NO_LONGER_EXIST if the target user is gone
        """
        user = UserService.get_by_id(session, user_id)
        if user is None:
            raise AppError(ErrorMessage.USER_NO_LONGER_EXIST)
        user.role = role
        return UserService._save(session, user)

    @staticmethod
    def update_password(session: Session, user: User, old_password: str, new_password: str) -> User:
        """
        Replace the password after checking the current one.

        Raises:
            AppError: WRONG_CREDENTIALS if ``old_password`` does not match
        """
        if not verify_password(old_password, user.password):
            raise AppError(ErrorMessage.WRONG_CREDENTIALS)
        user.password = hash_password(new_password)
        return UserService._save(session, user)

    @staticmethod
    def verify_email(session: Session, token: str) -> User:
        """
        Mark the owner of a pending verification code as verified.

        Raises:
            AppError: INVALID_TOKEN if the code is unknown or expired
        """
        user = UserService.get_by_verification_code(session, token)
        if user is None or user.verification_code_expired():
            raise AppError(ErrorMessage.INVALID_TOKEN)
        user.mark_verified()
        return UserService._save(session, user)

    @staticmethod
    def forgot_password(session: Session, email: str) -> Optional[User]:
        """
        Issue a password reset code.

        Returns:
            The user a code was issued to, or None for an unknown email;
            callers respond identically in both cases
        """
        user = UserService.get_by_email(session, email)
        if user is None:
            return None
        user.issue_verification_code(generate_verification_code(), utcnow() + RESET_CODE_TTL)
        return UserService._save(session, user)

    @staticmethod
    def reset_password(session: Session, token: str, new_password: str) -> User:
        """
        Set a new password using a pending reset code.

        Raises:
            AppError: INVALID_TOKEN if the code is unknown or expired
        """
        user = UserService.get_by_verification_code(session, token)
        if user is None or user.verification_code_expired():
            raise AppError(ErrorMessage.INVALID_TOKEN)
        user.password = hash_password(new_password)
        user.clear_verification_code()
        return UserService._save(session, user)

    @staticmethod
    def is_admin(user: User) -> bool:
        """
        Check if a user has admin privileges.

        Args:
            user: User to check

        Returns:
            True if user is admin, False otherwise
        """
        return user.role == UserRole.ADMIN
