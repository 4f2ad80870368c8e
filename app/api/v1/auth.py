"""Login route and auth dependencies (get_current_user, require_admin)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import Forbidden, Unauthorized
from app.core.security import InvalidToken, PasswordHasher, TokenService
from app.models import User
from app.schemas.auth import CurrentUser, LoginRequest, LoginResponse
from app.services.auth import authenticate

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> LoginResponse:
    """
    Authenticate with email (sent as username) and password; returns a bearer token.
    Include the token in the Authorization header as: Bearer <token>
    """
    return authenticate(db, hasher, tokens, body.username, body.password)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer token and return the current user.

    401 if the token is missing or invalid; 403 if it names an account that no
    longer exists. The record is re-read on every request so deleted accounts
    lose access immediately.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Token not provided")
    try:
        claims = tokens.verify(credentials.credentials)
    except InvalidToken as e:
        raise Unauthorized("Token not valid") from e
    user = db.get(User, claims.user_id)
    if user is None:
        raise Forbidden("Token not valid")
    return CurrentUser.model_validate(user)


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require an authenticated admin. Raises 401 for non-admin."""
    if not current_user.is_admin:
        raise Unauthorized("Admin access required")
    return current_user
