"""
User routes for profile and management operations.
Listing users and changing roles require the admin role.
"""

import uuid
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from accounts.api.deps import get_current_admin_user, get_current_user
from accounts.core.logging import get_logger
from accounts.core.validation import ensure_valid
from accounts.db.session import get_session
from accounts.models.user import User
from accounts.schemas.user import (
    MessageResponse,
    PageQuery,
    PasswordUpdateInput,
    PublicUser,
    RoleUpdateInput,
    UpdateProfileInput,
    UserListResponse,
    UserResponse,
)
from accounts.services.user_service import UserService

logger = get_logger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
def get_current_user_profile(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserResponse:
    """Get current user's profile."""
    return UserResponse.for_user(current_user)


@router.get("", response_model=UserListResponse)
def list_users(
    _admin: Annotated[User, Depends(get_current_admin_user)],
    session: Annotated[Session, Depends(get_session)],
    page: Annotated[Optional[int], Query()] = None,
    limit: Annotated[Optional[int], Query()] = None,
) -> UserListResponse:
    """
    List users page by page (admin only).

    Returns:
        One page of users and the total number of users
    """
    query = ensure_valid(PageQuery(page=page, limit=limit))

    users = UserService.list_users(session, page=query.page, limit=query.limit)
    return UserListResponse(
        users=PublicUser.from_users(users),
        results=UserService.count(session),
    )


@router.put("/me/name", response_model=UserResponse)
def update_name(
    body: UpdateProfileInput,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[Session, Depends(get_session)],
) -> UserResponse:
    ensure_valid(body)

    user = UserService.update_name(session, current_user, body.name)
    return UserResponse.for_user(user)


@router.put("/me/password", response_model=MessageResponse)
def update_password(
    body: PasswordUpdateInput,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[Session, Depends(get_session)],
) -> MessageResponse:
    """
    Change the current user's password.

    Raises:
        AppError: WRONG_CREDENTIALS if the current password does not match
    """
    ensure_valid(body)

    UserService.update_password(session, current_user, body.old_password, body.new_password)
    logger.info(f"Password changed (ID: {current_user.id})")
    return MessageResponse(message="Password updated Successfully")


@router.put("/{user_id}/role", response_model=UserResponse)
def update_role(
    user_id: uuid.UUID,
    body: RoleUpdateInput,
    admin: Annotated[User, Depends(get_current_admin_user)],
    session: Annotated[Session, Depends(get_session)],
) -> UserResponse:
    """
    Change a user's role (admin only).

    Raises:
        HttpError: 400 if the role is not one of user/admin
        AppError: USER_NO_LONGER_EXIST if the target user is gone
    """
    ensure_valid(body)

    user = UserService.update_role(session, user_id, body.to_role())
    logger.info(f"Admin {admin.id} set role of {user.id} to {user.role.value}")
    return UserResponse.for_user(user)
