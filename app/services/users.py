"""Account management: CRUD over user records. Every operation touches one record."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateEntry, NotFound
from app.core.security import PasswordHasher
from app.models import User
from app.schemas.users import AdminUserUpdate, UserCreate, UserSummary, UserUpdate

logger = logging.getLogger(__name__)

MAX_USER_ID = 2**63 - 1


def list_users(db: Session) -> list[UserSummary]:
    users = db.query(User).order_by(User.id).all()
    return [UserSummary.model_validate(u) for u in users]


def get_user_record(db: Session, user_id: int) -> User:
    # Ids outside the signed 64-bit column range cannot exist; SQLite would overflow.
    if not (1 <= user_id <= MAX_USER_ID):
        raise NotFound("User not found")
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


def get_user(db: Session, user_id: int) -> UserSummary:
    return UserSummary.model_validate(get_user_record(db, user_id))


def _commit(db: Session, action: str) -> None:
    """Commit, turning any store failure (unique email, constraint) into DuplicateEntry."""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("User %s rejected by store: %s", action, type(e).__name__)
        raise DuplicateEntry() from e


def create_user(db: Session, hasher: PasswordHasher, body: UserCreate) -> UserSummary:
    """Register a new non-admin account. Returns its summary."""
    user = User(
        username=body.username,
        email=body.email,
        password_hash=hasher.hash(body.password),
        is_admin=False,
    )
    db.add(user)
    _commit(db, "create")
    db.refresh(user)
    logger.info("User created", extra={"user_id": user.id})
    return UserSummary.model_validate(user)


def update_user(
    db: Session,
    hasher: PasswordHasher,
    user_id: int,
    body: UserUpdate,
) -> UserSummary:
    """
    Apply the provided fields to a user.

    A missing or null password leaves the stored hash untouched. is_admin is only
    honoured when body is an AdminUserUpdate.
    """
    user = get_user_record(db, user_id)
    if body.username is not None:
        user.username = body.username
    if body.email is not None:
        user.email = body.email
    if body.password is not None:
        user.password_hash = hasher.hash(body.password)
    if isinstance(body, AdminUserUpdate) and body.is_admin is not None:
        user.is_admin = body.is_admin
    _commit(db, "update")
    db.refresh(user)
    logger.info("User updated", extra={"user_id": user.id})
    return UserSummary.model_validate(user)


def delete_user(db: Session, user_id: int) -> UserSummary:
    """Permanently delete a user and return the summary it had."""
    user = get_user_record(db, user_id)
    summary = UserSummary.model_validate(user)
    db.delete(user)
    db.commit()
    logger.info("User deleted", extra={"user_id": summary.id})
    return summary
