"""Blanket access decisions for a request: token presence, validity and role.

Decisions are computed per request from the Authorization header alone; nothing
is cached between requests. Resource-level checks (profile ownership, project
membership) live in app.services.permissions because they need the store.
"""

from dataclasses import dataclass
from enum import Enum

from app.core.security import validate_access_token
from app.schemas.auth import TokenIdentity

BEARER_SCHEME = "bearer"

REASON_MISSING_HEADER = "missing authorization header"
REASON_MALFORMED_HEADER = "malformed header"
REASON_INVALID_TOKEN = "invalid or expired token"
REASON_ADMIN_REQUIRED = "admin access required"


class AuthRequirement(str, Enum):
    NONE = "none"
    AUTHENTICATED = "authenticated"
    ADMIN_ONLY = "admin"


@dataclass(frozen=True)
class Permitted:
    identity: TokenIdentity | None


@dataclass(frozen=True)
class Unauthenticated:
    reason: str


@dataclass(frozen=True)
class Forbidden:
    reason: str


Decision = Permitted | Unauthenticated | Forbidden


def extract_bearer_token(authorization: str | None) -> tuple[str | None, str | None]:
    """Split an Authorization header into (token, failure_reason)."""
    if authorization is None or not authorization.strip():
        return None, REASON_MISSING_HEADER
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != BEARER_SCHEME or not token:
        return None, REASON_MALFORMED_HEADER
    return token, None


def evaluate(authorization: str | None, requirement: AuthRequirement) -> Decision:
    """
    Decide whether a request with this Authorization header meets the requirement.

    NONE is always permitted; the identity is attached when a valid token is
    present, so handlers may still use it. AUTHENTICATED needs a valid token.
    ADMIN_ONLY additionally needs the Admin role.
    """
    token, reason = extract_bearer_token(authorization)
    identity = validate_access_token(token) if token is not None else None

    if requirement is AuthRequirement.NONE:
        return Permitted(identity)
    if token is None:
        return Unauthenticated(reason or REASON_MISSING_HEADER)
    if identity is None:
        return Unauthenticated(REASON_INVALID_TOKEN)
    if requirement is AuthRequirement.ADMIN_ONLY and not identity.is_admin:
        return Forbidden(REASON_ADMIN_REQUIRED)
    return Permitted(identity)
