"""Test environment: importing app.main builds the app, which needs a secret and a store."""

import os

os.environ.setdefault("JWT_SECRET", "test-secret-from-env")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
