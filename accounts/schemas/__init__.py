"""Pydantic schemas for request/response validation."""

from accounts.schemas.token import TokenPayload, UserLoginResponse
from accounts.schemas.user import (
    ForgotPasswordInput,
    LoginInput,
    MessageResponse,
    PageQuery,
    PasswordUpdateInput,
    PublicUser,
    RegisterInput,
    ResetPasswordInput,
    RoleUpdateInput,
    UpdateProfileInput,
    UserData,
    UserListResponse,
    UserResponse,
    VerifyEmailInput,
)

__all__ = [
    "ForgotPasswordInput",
    "LoginInput",
    "MessageResponse",
    "PageQuery",
    "PasswordUpdateInput",
    "PublicUser",
    "RegisterInput",
    "ResetPasswordInput",
    "RoleUpdateInput",
    "TokenPayload",
    "UpdateProfileInput",
    "UserData",
    "UserListResponse",
    "UserLoginResponse",
    "UserResponse",
    "VerifyEmailInput",
]
