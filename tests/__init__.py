"""Test package. Configures the environment before any app module is imported."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-at-least-32-chars-long")
os.environ.setdefault("APP_ENV", "dev")
