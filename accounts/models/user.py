"""
User model with role-based access control.
Implements a simple admin/user role system plus email verification state.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRole(str, Enum):
    """User role enumeration for RBAC."""

    USER = "user"
    ADMIN = "admin"

    def to_str(self) -> str:
        return self.value


class User(SQLModel, table=True):
    """
    User model with authentication and role support.

    Attributes:
        id: Primary key (UUID4)
        name: Display name
        email: Unique email address (used for login)
        password: Password hash, never the plaintext
        role: User role (admin or user)
        verified: Whether the email address has been confirmed
        verification_code: Pending email verification or password reset code
        token_expires_at: Expiry of ``verification_code``
        created_at: Timestamp of account creation
        updated_at: Timestamp of last update
    """

    __tablename__ = "users"  # type: ignore

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    password: str
    role: UserRole = Field(default=UserRole.USER)
    verified: bool = Field(default=False)
    verification_code: Optional[str] = Field(default=None, index=True, max_length=255)
    token_expires_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def touch(self) -> None:
        """Advance ``updated_at``; call on every mutation."""
        self.updated_at = utcnow()

    def issue_verification_code(self, code: str, expires_at: datetime) -> None:
        self.verification_code = code
        self.token_expires_at = expires_at
        self.touch()

    def clear_verification_code(self) -> None:
        self.verification_code = None
        self.token_expires_at = None
        self.touch()

    def verification_code_expired(self, now: datetime | None = None) -> bool:
        """True when no code is pending or the pending code is past its expiry."""
        if self.verification_code is None or self.token_expires_at is None:
            return True
        expires_at = self.token_expires_at
        # SQLite hands timestamps back without tzinfo; they are stored as UTC
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return (now or utcnow()) >= expires_at

    def mark_verified(self) -> None:
        self.verified = True
        self.clear_verification_code()
