"""Unit tests for app.core.security: bcrypt hashing and bearer token issue/verify."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.errors import ConfigurationError
from app.core.security import InvalidToken, PasswordHasher, TokenService
from tests.support import make_settings

SECRET = "security-test-secret"


class TestPasswordHasher(unittest.TestCase):
    """PasswordHasher never stores plaintext and reports mismatches as False."""

    def setUp(self) -> None:
        self.hasher = PasswordHasher(rounds=4)

    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = self.hasher.hash("secret1")
        self.assertNotEqual(hashed, "secret1")
        self.assertTrue(hashed.startswith("$2"))
        self.assertTrue(self.hasher.verify("secret1", hashed))

    def test_wrong_password_returns_false(self) -> None:
        hashed = self.hasher.hash("secret1")
        self.assertFalse(self.hasher.verify("secret2", hashed))

    def test_hashes_are_salted(self) -> None:
        self.assertNotEqual(self.hasher.hash("secret1"), self.hasher.hash("secret1"))

    def test_malformed_stored_hash_returns_false(self) -> None:
        self.assertFalse(self.hasher.verify("secret1", "not-a-bcrypt-hash"))

    def test_cost_parameter_is_used(self) -> None:
        hashed = PasswordHasher(rounds=5).hash("secret1")
        self.assertEqual(hashed.split("$")[2], "05")

    def test_non_string_input_propagates(self) -> None:
        with self.assertRaises(AttributeError):
            self.hasher.hash(None)  # type: ignore[arg-type]


class TestTokenServiceConstruction(unittest.TestCase):
    """A missing signing secret is a configuration error, not a per-request one."""

    def test_missing_secret_raises(self) -> None:
        with self.assertRaises(ConfigurationError) as ctx:
            TokenService(None)
        self.assertEqual(ctx.exception.message, "JWT_SECRET not defined")

    def test_blank_secret_raises(self) -> None:
        with self.assertRaises(ConfigurationError):
            TokenService("   ")

    def test_from_settings(self) -> None:
        service = TokenService.from_settings(make_settings(JWT_EXPIRE_MINUTES=30))
        self.assertEqual(service.algorithm, "HS256")
        self.assertEqual(service.expire_minutes, 30)

    def test_from_settings_without_secret_raises(self) -> None:
        with self.assertRaises(ConfigurationError):
            TokenService.from_settings(make_settings(JWT_SECRET=""))


class TestTokenIssueVerify(unittest.TestCase):
    def setUp(self) -> None:
        self.tokens = TokenService(SECRET)

    def test_round_trip_carries_identity_and_admin_flag(self) -> None:
        claims = self.tokens.verify(self.tokens.issue(42, True))
        self.assertEqual(claims.user_id, 42)
        self.assertTrue(claims.is_admin)

    def test_no_expiry_by_default(self) -> None:
        payload = jwt.decode(self.tokens.issue(1, False), SECRET, algorithms=["HS256"])
        self.assertNotIn("exp", payload)
        self.assertEqual(payload, {"sub": "1", "admin": False})

    def test_issue_is_deterministic_without_expiry(self) -> None:
        self.assertEqual(self.tokens.issue(7, False), self.tokens.issue(7, False))

    def test_wrong_secret_rejected(self) -> None:
        token = TokenService("another-secret").issue(1, False)
        with self.assertRaises(InvalidToken):
            self.tokens.verify(token)

    def test_malformed_token_rejected(self) -> None:
        with self.assertRaises(InvalidToken):
            self.tokens.verify("not.a.token")

    def test_empty_token_rejected(self) -> None:
        for token in (None, "", "  "):
            with self.subTest(token=token):
                with self.assertRaises(InvalidToken):
                    self.tokens.verify(token)

    def test_non_numeric_subject_rejected(self) -> None:
        token = jwt.encode({"sub": "alice", "admin": False}, SECRET, algorithm="HS256")
        with self.assertRaises(InvalidToken) as ctx:
            self.tokens.verify(token)
        self.assertEqual(ctx.exception.message, "Invalid token payload")

    def test_missing_subject_rejected(self) -> None:
        token = jwt.encode({"admin": True}, SECRET, algorithm="HS256")
        with self.assertRaises(InvalidToken):
            self.tokens.verify(token)

    def test_expiry_when_configured(self) -> None:
        tokens = TokenService(SECRET, expire_minutes=5)
        payload = jwt.decode(tokens.issue(3, False), SECRET, algorithms=["HS256"])
        self.assertIn("exp", payload)
        self.assertIn("iat", payload)

    def test_expired_token_rejected(self) -> None:
        past = datetime.now(UTC) - timedelta(minutes=1)
        token = jwt.encode({"sub": "3", "admin": False, "exp": past}, SECRET, algorithm="HS256")
        with self.assertRaises(InvalidToken):
            self.tokens.verify(token)


if __name__ == "__main__":
    unittest.main()
