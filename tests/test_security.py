"""Unit tests for app.core.security and app.core.config: passwords, tokens and required secrets."""

import os
import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import jwt
import pydantic

from app.core.config import Settings, settings
from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    validate_access_token,
    verify_password,
)


def _encode(payload: dict, secret: str | None = None) -> str:
    """Sign a payload directly, bypassing create_access_token."""
    return jwt.encode(
        payload,
        secret or settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def _claims(**overrides: object) -> dict:
    now = datetime.now(UTC)
    claims = {
        "sub": "7",
        "email": "ada@example.org",
        "role": "User",
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "iat": now,
        "exp": now + timedelta(minutes=5),
    }
    claims.update(overrides)
    return claims


class TestPasswordHashing(unittest.TestCase):
    """Hashes are bcrypt and never equal the plain password."""

    @patch("app.core.security.BCRYPT_ROUNDS", 4)
    def test_hash_and_verify(self) -> None:
        hashed = hash_password("s3cret-password")
        self.assertNotEqual(hashed, "s3cret-password")
        self.assertTrue(verify_password("s3cret-password", hashed))
        self.assertFalse(verify_password("S3cret-password", hashed))

    def test_malformed_hash_does_not_verify(self) -> None:
        self.assertFalse(verify_password("anything", "not-a-bcrypt-hash"))


class TestTokenRoundTrip(unittest.TestCase):
    """validate(issue(...)) returns the identity that was issued."""

    def test_user_token(self) -> None:
        identity = validate_access_token(create_access_token(42, "ada@example.org", "User"))
        self.assertIsNotNone(identity)
        self.assertEqual(identity.user_id, 42)
        self.assertEqual(identity.email, "ada@example.org")
        self.assertEqual(identity.role, "User")
        self.assertFalse(identity.is_admin)

    def test_admin_token(self) -> None:
        identity = validate_access_token(create_access_token(1, "root@example.org", "Admin"))
        self.assertEqual(identity.role, "Admin")
        self.assertTrue(identity.is_admin)

    def test_admin_role_is_case_insensitive(self) -> None:
        identity = validate_access_token(_encode(_claims(role="admin")))
        self.assertTrue(identity.is_admin)

    def test_payload_carries_issuer_and_audience(self) -> None:
        payload = decode_access_token(create_access_token(3, "x@example.org", "User"))
        self.assertEqual(payload["iss"], settings.JWT_ISSUER)
        self.assertEqual(payload["aud"], settings.JWT_AUDIENCE)
        self.assertEqual(payload["sub"], "3")


class TestTokenRejection(unittest.TestCase):
    """validate returns None (never raises) for any token it cannot trust."""

    def test_forged_signature(self) -> None:
        token = _encode(_claims(), secret="another-secret-that-is-also-32-chars-long!")
        self.assertIsNone(validate_access_token(token))

    def test_altered_signature(self) -> None:
        token = create_access_token(5, "a@example.org", "User")
        head, body, sig = token.split(".")
        flipped = ("A" if sig[0] != "A" else "B") + sig[1:]
        self.assertIsNone(validate_access_token(f"{head}.{body}.{flipped}"))

    def test_altered_payload(self) -> None:
        token = create_access_token(5, "a@example.org", "User")
        admin_token = _encode(_claims(sub="5", role="Admin"))
        head, _, sig = token.split(".")
        _, admin_body, _ = admin_token.split(".")
        self.assertIsNone(validate_access_token(f"{head}.{admin_body}.{sig}"))

    def test_wrong_issuer(self) -> None:
        self.assertIsNone(validate_access_token(_encode(_claims(iss="someone-else"))))

    def test_wrong_audience(self) -> None:
        self.assertIsNone(validate_access_token(_encode(_claims(aud="another-client"))))

    def test_missing_role_claim(self) -> None:
        claims = _claims()
        del claims["role"]
        self.assertIsNone(validate_access_token(_encode(claims)))

    def test_non_numeric_subject(self) -> None:
        self.assertIsNone(validate_access_token(_encode(_claims(sub="not-a-number"))))

    def test_garbage(self) -> None:
        self.assertIsNone(validate_access_token("not.a.jwt"))
        self.assertIsNone(validate_access_token(""))


class TestTokenExpiry(unittest.TestCase):
    """Expiry is exact: no clock-skew leeway."""

    def test_valid_just_before_expiry(self) -> None:
        token = create_access_token(9, "t@example.org", "User", expires_delta=timedelta(seconds=2))
        self.assertIsNotNone(validate_access_token(token))

    def test_invalid_just_after_expiry(self) -> None:
        token = create_access_token(9, "t@example.org", "User", expires_delta=timedelta(seconds=-1))
        self.assertIsNone(validate_access_token(token))

    def test_default_lifetime_matches_settings(self) -> None:
        payload = decode_access_token(create_access_token(9, "t@example.org", "User"))
        lifetime = payload["exp"] - payload["iat"]
        self.assertEqual(lifetime, settings.JWT_EXPIRE_HOURS * 3600)


class TestRequiredSecret(unittest.TestCase):
    """A missing or short signing secret is a startup configuration error."""

    def test_missing_secret_fails(self) -> None:
        with patch.dict(os.environ, {"DATABASE_URL": "sqlite://"}, clear=True):
            with self.assertRaises(pydantic.ValidationError):
                Settings(_env_file=None)

    def test_short_secret_fails(self) -> None:
        with self.assertRaises(pydantic.ValidationError):
            Settings(_env_file=None, JWT_SECRET="too-short")

    def test_long_enough_secret_accepted(self) -> None:
        s = Settings(_env_file=None, JWT_SECRET="x" * 32)
        self.assertEqual(s.JWT_EXPIRE_HOURS, 2)
        self.assertEqual(s.DEFAULT_REGISTRATION_CODE, "digitalsustainabilitycanvas")

    def test_non_postgres_url_rejected(self) -> None:
        with self.assertRaises(pydantic.ValidationError):
            Settings(_env_file=None, JWT_SECRET="x" * 32, DATABASE_URL="mysql://localhost/db")


if __name__ == "__main__":
    unittest.main()
