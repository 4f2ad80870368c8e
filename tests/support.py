"""Shared helpers for API tests: an in-memory SQLite app and account shortcuts."""

import unittest
from typing import Any

import httpx
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.models import Base, User

TEST_SECRET = "unit-test-signing-secret"
API = "/api/v1"


def make_settings(**overrides: Any) -> Settings:
    """Settings for tests: in-memory SQLite, cheap bcrypt, fixed secret, no .env file."""
    values: dict[str, Any] = {
        "APP_ENV": "dev",
        "DATABASE_URL": "sqlite://",
        "JWT_SECRET": TEST_SECRET,
        "BCRYPT_ROUNDS": 4,
        "LEGACY_ERROR_STATUS": True,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class ApiTestCase(unittest.TestCase):
    """Fresh app and empty store per test."""

    settings_overrides: dict[str, Any] = {}

    def setUp(self) -> None:
        self.app = create_app(make_settings(**self.settings_overrides))
        self.engine = self.app.state.engine
        Base.metadata.create_all(self.engine)
        self.client = TestClient(self.app)

    def tearDown(self) -> None:
        self.client.close()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def register(
        self,
        username: str = "alice01",
        email: str = "a@x.com",
        password: str = "secret1",
        **extra: Any,
    ) -> httpx.Response:
        body = {"username": username, "email": email, "password": password, **extra}
        return self.client.post(f"{API}/users", json=body)

    def login(self, email: str = "a@x.com", password: str = "secret1") -> httpx.Response:
        return self.client.post(
            f"{API}/auth/login", json={"username": email, "password": password}
        )

    def token_for(self, email: str = "a@x.com", password: str = "secret1") -> str:
        response = self.login(email, password)
        self.assertIn("token", response.json(), response.text)
        return response.json()["token"]

    def create_account(
        self,
        username: str = "alice01",
        email: str = "a@x.com",
        password: str = "secret1",
    ) -> int:
        """Register an account and return its id."""
        response = self.register(username, email, password)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["user"]["id"]

    def grant_admin(self, user_id: int) -> None:
        with self.app.state.session_factory() as db:
            user = db.get(User, user_id)
            user.is_admin = True
            db.commit()

    def stored_user(self, user_id: int) -> User | None:
        with self.app.state.session_factory() as db:
            user = db.get(User, user_id)
            if user is not None:
                db.expunge(user)
            return user
