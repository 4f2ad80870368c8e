"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import auth, health, users
from app.schemas.health import MessageResponse

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])


@router.get("/", response_model=MessageResponse)
def index() -> MessageResponse:
    return MessageResponse(message="routes: auth, users, health")
