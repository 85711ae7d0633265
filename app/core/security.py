"""Password hashing and JWT creation/verification for authentication."""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import settings
from app.schemas.auth import TokenIdentity

logger = logging.getLogger(__name__)

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Min/max lengths for email and password validation.
EMAIL_MIN_LEN = 3
EMAIL_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

_REQUIRED_CLAIMS = ["sub", "email", "role", "exp", "iss", "aud"]


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    user_id: int,
    email: str,
    role: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed JWT carrying user id (sub), email, role, issuer, audience and exp."""
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.JWT_EXPIRE_HOURS)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return the raw payload.
    Raises jwt.PyJWTError on bad signature, issuer/audience mismatch, missing
    claims or expiry. No clock-skew leeway is applied.
    """
    return jwt.decode(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithms=[settings.JWT_ALGORITHM],
        audience=settings.JWT_AUDIENCE,
        issuer=settings.JWT_ISSUER,
        leeway=0,
        options={"require": _REQUIRED_CLAIMS},
    )


def validate_access_token(token: str) -> TokenIdentity | None:
    """Return the identity carried by a valid token, or None. Never raises."""
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError as e:
        logger.debug("Token rejected: %s", type(e).__name__)
        return None
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        return None
    email = payload.get("email")
    role = payload.get("role")
    if not isinstance(email, str) or not email or not isinstance(role, str) or not role:
        return None
    return TokenIdentity(user_id=user_id, email=email, role=role)
