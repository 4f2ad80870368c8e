"""User account routes: public listing and registration, self-service and admin mutations."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, get_password_hasher, require_admin
from app.core.database import get_db
from app.core.security import PasswordHasher
from app.schemas.auth import CurrentUser
from app.schemas.users import (
    AdminUserUpdate,
    UserCreate,
    UserMessageResponse,
    UserSummary,
    UserUpdate,
)
from app.services import users as user_service

router = APIRouter()


@router.get("", response_model=list[UserSummary])
def list_users(db: Annotated[Session, Depends(get_db)]) -> list[UserSummary]:
    """List every user. Password hashes and admin flags are never included."""
    return user_service.list_users(db)


@router.post("", response_model=UserMessageResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreate,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> UserMessageResponse:
    """Register a new account. A taken email yields a generic DuplicateEntry error."""
    user = user_service.create_user(db, hasher, body)
    return UserMessageResponse(message="User created", user=user)


@router.put("", response_model=UserMessageResponse)
def update_own_user(
    body: UserUpdate,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserMessageResponse:
    """Update the caller's own account; the target always comes from the token."""
    user = user_service.update_user(db, hasher, current_user.id, body)
    return UserMessageResponse(message="User updated", user=user)


@router.delete("", response_model=UserMessageResponse)
def delete_own_user(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserMessageResponse:
    """Delete the caller's own account."""
    user = user_service.delete_user(db, current_user.id)
    return UserMessageResponse(message="User deleted", user=user)


@router.get("/{user_id}", response_model=UserSummary)
def get_user(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> UserSummary:
    return user_service.get_user(db, user_id)


@router.put("/{user_id}", response_model=UserMessageResponse)
def update_user_as_admin(
    user_id: int,
    body: AdminUserUpdate,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> UserMessageResponse:
    """Update any account (admin only)."""
    user = user_service.update_user(db, hasher, user_id, body)
    return UserMessageResponse(message="User updated", user=user)


@router.delete("/{user_id}", response_model=UserMessageResponse)
def delete_user_as_admin(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> UserMessageResponse:
    """Delete any account (admin only)."""
    user = user_service.delete_user(db, user_id)
    return UserMessageResponse(message="User deleted", user=user)
