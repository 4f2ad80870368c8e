"""Request/response schemas for user account endpoints."""

import re

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator

USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 20
PASSWORD_MIN_LEN = 6

_ALPHANUMERIC = re.compile(r"^[A-Za-z0-9]+$")


def _check_username(value: str) -> str:
    value = value.strip()
    problems = []
    if not _ALPHANUMERIC.match(value):
        problems.append("Username can only contain alphanumeric characters")
    if not (USERNAME_MIN_LEN <= len(value) <= USERNAME_MAX_LEN):
        problems.append(
            f"Username must be between {USERNAME_MIN_LEN} and {USERNAME_MAX_LEN} characters long"
        )
    if problems:
        raise ValueError(", ".join(problems))
    return value


def _check_email(value: str) -> str:
    try:
        result = validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError("Invalid email address") from e
    return result.normalized.lower()


def _check_password(value: str) -> str:
    if len(value) < PASSWORD_MIN_LEN:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LEN} characters long")
    return value


class UserCreate(BaseModel):
    """Registration body. Unknown fields (e.g. an admin flag) are ignored."""

    username: str = Field(..., description="3-20 alphanumeric characters")
    email: str = Field(..., description="Email address, used to log in")
    password: str = Field(..., description="At least 6 characters")

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return _check_username(v)

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v: str) -> str:
        return _check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password(v)


class UserUpdate(BaseModel):
    """Self-service update. Omitted fields keep their stored value."""

    username: str | None = None
    email: str | None = None
    password: str | None = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str | None) -> str | None:
        return None if v is None else _check_username(v)

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v: str | None) -> str | None:
        return None if v is None else _check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        return None if v is None else _check_password(v)


class AdminUserUpdate(UserUpdate):
    """Admin update of any account; may also grant or revoke the admin flag."""

    is_admin: bool | None = None


class UserSummary(BaseModel):
    """Public view of a user: never includes the password hash or admin flag."""

    id: int
    username: str
    email: str

    class Config:
        from_attributes = True


class UserMessageResponse(BaseModel):
    """Outcome of a mutation plus the affected user's summary."""

    message: str
    user: UserSummary
