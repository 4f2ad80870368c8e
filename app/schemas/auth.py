"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, Field

from app.schemas.users import UserSummary


class LoginRequest(BaseModel):
    """Credentials for login. username carries the account's email address."""

    username: str = Field(..., description="Email address of the account")
    password: str = Field(..., description="Password")


class LoginResponse(BaseModel):
    """Token and public profile returned after a successful login."""

    message: str = Field(default="Login successful")
    token: str = Field(..., description="Bearer token for the Authorization header")
    user: UserSummary


class TokenClaims(BaseModel):
    """Identity decoded from a verified bearer token."""

    user_id: int
    is_admin: bool = False


class CurrentUser(BaseModel):
    """Authenticated user attached to a request after token check and store re-fetch."""

    id: int
    username: str
    email: str
    is_admin: bool = False

    class Config:
        from_attributes = True
