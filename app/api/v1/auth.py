"""Registration/login routes and the per-route auth dependency (require)."""

import logging
from functools import lru_cache
from typing import Annotated, Callable

from fastapi import APIRouter, Depends, status
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from app.core.access import AuthRequirement, Forbidden, Permitted, evaluate
from app.core.database import get_db
from app.core.errors import AuthenticationError, AuthorizationError
from app.schemas.auth import (
    AccountCreatedResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    TokenIdentity,
)
from app.services import accounts

logger = logging.getLogger(__name__)

router = APIRouter()

# Raw header so a missing header and a malformed one can be told apart.
authorization_header = APIKeyHeader(
    name="Authorization",
    scheme_name="BearerToken",
    description="Bearer <access token>",
    auto_error=False,
)


@lru_cache
def require(requirement: AuthRequirement) -> Callable[..., TokenIdentity | None]:
    """
    Build the dependency enforcing one auth requirement.

    Cached per requirement so FastAPI sees a single dependency callable and
    evaluates it once per request. The callable exposes ``requirement`` so the
    route table can be checked against what each route actually declares.
    """

    def dependency(
        authorization: Annotated[str | None, Depends(authorization_header)],
    ) -> TokenIdentity | None:
        decision = evaluate(authorization, requirement)
        if isinstance(decision, Permitted):
            return decision.identity
        if isinstance(decision, Forbidden):
            logger.warning("Request forbidden: %s", decision.reason)
            raise AuthorizationError(decision.reason)
        logger.warning("Request unauthenticated: %s", decision.reason)
        raise AuthenticationError(decision.reason)

    dependency.requirement = requirement
    return dependency


OptionalUser = Annotated[TokenIdentity | None, Depends(require(AuthRequirement.NONE))]
CurrentUser = Annotated[TokenIdentity, Depends(require(AuthRequirement.AUTHENTICATED))]
AdminUser = Annotated[TokenIdentity, Depends(require(AuthRequirement.ADMIN_ONLY))]


@router.post(
    "/register",
    response_model=AccountCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    _caller: OptionalUser,
) -> AccountCreatedResponse:
    """
    Create a regular user and profile; returns a JWT access token.
    Requires the current registration code (compared case-insensitively).
    """
    return accounts.register(
        db,
        email=body.email,
        password=body.password,
        name=body.name,
        registration_code=body.registration_code,
    )


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    _caller: OptionalUser,
) -> LoginResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    return accounts.login(db, email=body.email, password=body.password)
