"""Pydantic request/response schemas."""

from app.schemas.auth import CurrentUser, LoginRequest, LoginResponse, TokenClaims
from app.schemas.health import HealthResponse, MessageResponse
from app.schemas.users import (
    AdminUserUpdate,
    UserCreate,
    UserMessageResponse,
    UserSummary,
    UserUpdate,
)

__all__ = [
    "AdminUserUpdate",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "TokenClaims",
    "UserCreate",
    "UserMessageResponse",
    "UserSummary",
    "UserUpdate",
]
