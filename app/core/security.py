"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import Settings
from app.core.errors import ConfigurationError
from app.schemas.auth import TokenClaims

# Bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72


class InvalidToken(Exception):
    """Raised when a bearer token is missing, malformed, wrongly signed or expired."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class PasswordHasher:
    """Salted bcrypt hashing with a cost fixed at construction."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Do not store plain passwords."""
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plain_password: str, hashed: str) -> bool:
        """Verify a plain password against a stored hash. A wrong password is just False."""
        pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False


class TokenService:
    """
    Issues and verifies signed bearer tokens carrying user id and admin flag.

    Tokens have no exp claim unless expire_minutes is given, so they stay valid
    until the signing secret changes.
    """

    def __init__(
        self,
        secret: str | None,
        algorithm: str = "HS256",
        expire_minutes: int | None = None,
    ) -> None:
        if not secret or not secret.strip():
            raise ConfigurationError("JWT_SECRET not defined")
        self._secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        secret = settings.JWT_SECRET.get_secret_value() if settings.JWT_SECRET else None
        return cls(
            secret,
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )

    def issue(self, user_id: int, is_admin: bool) -> str:
        payload: dict[str, Any] = {"sub": str(user_id), "admin": bool(is_admin)}
        if self.expire_minutes is not None:
            now = datetime.now(UTC)
            payload["iat"] = now
            payload["exp"] = now + timedelta(minutes=self.expire_minutes)
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str | None) -> TokenClaims:
        """Decode and validate a token. Raises InvalidToken on any failure."""
        if not token or not token.strip():
            raise InvalidToken("Token not provided")
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            raise InvalidToken("Invalid or expired token", cause=e) from e
        sub = payload.get("sub")
        try:
            user_id = int(sub)
        except (TypeError, ValueError) as e:
            raise InvalidToken("Invalid token payload", cause=e) from e
        return TokenClaims(user_id=user_id, is_admin=bool(payload.get("admin", False)))
