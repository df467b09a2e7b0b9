"""
User schemas for API request/response validation.
Separates internal models from API contracts using Pydantic.

Input contracts only check types on deserialization; the business rules are
declared as ``rules`` and evaluated by ``accounts.core.validation``.
"""

from datetime import datetime, timezone
from typing import Any, ClassVar, Optional, Sequence

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from accounts.core.validation import (
    Contract,
    FieldRule,
    ModelRule,
    Rule,
    in_range,
    is_email,
    matches,
    min_length,
    one_of,
)
from accounts.models.user import User, UserRole

EMAIL_RULES: tuple[Rule, ...] = (
    FieldRule("email", min_length(6), "Email must be at least 6 characters long"),
    FieldRule("email", is_email, "Email must be a valid email address"),
)

PASSWORD_RULES: tuple[Rule, ...] = (
    FieldRule("password", min_length(1), "Password must be at least 1 character long"),
    FieldRule("password", min_length(6), "Password must be at least 6 characters long"),
)

NEW_PASSWORD_RULES: tuple[Rule, ...] = (
    FieldRule("new_password", min_length(1), "New password is required"),
    FieldRule("new_password", min_length(6), "New password must be at least 6 characters long"),
    FieldRule("new_password_confirm", min_length(1), "Password confirmation is required"),
    ModelRule(
        "new_password_confirm",
        matches("new_password_confirm", "new_password"),
        "Passwords do not match",
    ),
)

# Keeps (page - 1) * limit inside a signed 64-bit OFFSET for any allowed limit
MAX_PAGE = 1_000_000

TOKEN_RULES: tuple[Rule, ...] = (
    FieldRule("token", min_length(1), "Token is required"),
)


class LoginInput(Contract):
    """Schema for user login."""

    email: str
    password: str

    rules: ClassVar[tuple[Rule, ...]] = EMAIL_RULES + PASSWORD_RULES


class RegisterInput(Contract):
    """Schema for user registration."""

    name: str
    email: str
    password: str
    password_confirm: str = Field(
        validation_alias=AliasChoices("password_confirm", "password_confirmation"),
    )

    rules: ClassVar[tuple[Rule, ...]] = (
        (FieldRule("name", min_length(3), "Name must be at least 3 characters long"),)
        + EMAIL_RULES
        + PASSWORD_RULES
        + (
            FieldRule("password_confirm", min_length(1), "Password confirmation is required"),
            ModelRule(
                "password_confirm",
                matches("password_confirm", "password"),
                "Passwords do not match",
            ),
        )
    )


class UpdateProfileInput(Contract):
    name: str

    rules: ClassVar[tuple[Rule, ...]] = (
        FieldRule("name", min_length(1), "Name is required"),
    )


class RoleUpdateInput(Contract):
    """Role change request; any JSON value is accepted until the role rule runs."""

    role: Any

    rules: ClassVar[tuple[Rule, ...]] = (
        FieldRule("role", one_of(r.value for r in UserRole), "Invalid user role"),
    )

    def to_role(self) -> UserRole:
        return UserRole(self.role)


class PasswordUpdateInput(Contract):
    old_password: str
    new_password: str
    new_password_confirm: str = Field(
        validation_alias=AliasChoices("new_password_confirm", "new_password_confirmation"),
    )

    rules: ClassVar[tuple[Rule, ...]] = (
        FieldRule("old_password", min_length(1), "Current password is required"),
    ) + NEW_PASSWORD_RULES


class VerifyEmailInput(Contract):
    token: str

    rules: ClassVar[tuple[Rule, ...]] = TOKEN_RULES


class ForgotPasswordInput(Contract):
    email: str

    rules: ClassVar[tuple[Rule, ...]] = EMAIL_RULES


class ResetPasswordInput(Contract):
    token: str
    new_password: str
    new_password_confirm: str = Field(
        validation_alias=AliasChoices("new_password_confirm", "new_password_confirmation"),
    )

    rules: ClassVar[tuple[Rule, ...]] = TOKEN_RULES + NEW_PASSWORD_RULES


class PageQuery(Contract):
    """Pagination query; absent values fall back to service defaults."""

    page: Optional[int] = None
    limit: Optional[int] = None

    rules: ClassVar[tuple[Rule, ...]] = (
        FieldRule("page", in_range(minimum=1), "Page must be at least 1"),
        FieldRule("page", in_range(maximum=MAX_PAGE), f"Page must be at most {MAX_PAGE}"),
        FieldRule("limit", in_range(minimum=1, maximum=50), "Limit must be between 1 and 50"),
    )


class PublicUser(BaseModel):
    """
    Schema for user data in API responses.

    Built only through ``from_user``, which copies an explicit allow-list of
    attributes. The password hash and verification state never appear here.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    role: str
    verified: bool
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """SQLite hands timestamps back without tzinfo; they are stored as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @classmethod
    def from_user(cls, user: User) -> "PublicUser":
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            role=UserRole(user.role).to_str(),
            verified=user.verified,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    @classmethod
    def from_users(cls, users: Sequence[User]) -> list["PublicUser"]:
        return [cls.from_user(user) for user in users]


class UserData(BaseModel):
    user: PublicUser


class UserResponse(BaseModel):
    """Single-user response envelope."""

    status: str = "success"
    data: UserData

    @classmethod
    def for_user(cls, user: User) -> "UserResponse":
        return cls(data=UserData(user=PublicUser.from_user(user)))


class UserListResponse(BaseModel):
    """User list response envelope with the total number of users."""

    status: str = "success"
    users: list[PublicUser]
    results: int


class MessageResponse(BaseModel):
    status: str = "success"
    message: str
