"""Authentication: match credentials against the store and issue a bearer token."""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.errors import InvalidCredentials
from app.core.security import PasswordHasher, TokenService
from app.models import User
from app.schemas.auth import LoginResponse
from app.schemas.users import UserSummary

logger = logging.getLogger(__name__)


def authenticate(
    db: Session,
    hasher: PasswordHasher,
    tokens: TokenService,
    username: str,
    password: str,
) -> LoginResponse:
    """
    Log a user in. The login form's username field is matched against the stored email.

    Unknown account and wrong password raise the same InvalidCredentials so callers
    cannot tell which one failed.
    """
    email = (username or "").strip().lower()
    user = db.query(User).filter(func.lower(User.email) == email).first()
    if user is None:
        logger.info("Login failed", extra={"reason": "unknown_account"})
        raise InvalidCredentials()
    if not hasher.verify(password, user.password_hash):
        logger.info("Login failed", extra={"reason": "bad_password", "user_id": user.id})
        raise InvalidCredentials()

    token = tokens.issue(user.id, bool(user.is_admin))
    logger.info("Login succeeded", extra={"user_id": user.id})
    return LoginResponse(
        message="Login successful",
        token=token,
        user=UserSummary.model_validate(user),
    )
