"""Account lifecycle: registration, admin bootstrap, login and email changes."""

import logging

from sqlalchemy.orm import Session

from app.core.database import atomic
from app.core.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError
from app.core.security import (
    EMAIL_MAX_LEN,
    EMAIL_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    create_access_token,
    hash_password,
    verify_password,
)
from app.models import Profile, User
from app.models.enums import UserRole
from app.schemas.auth import (
    AccountCreatedResponse,
    LoginResponse,
    ProfileSummary,
    UserSummary,
)
from app.services import gate_settings

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password."
INVALID_REGISTRATION_CODE = "Invalid registration code."
INVALID_MASTER_PASSWORD = "Invalid master password."
EMAIL_TAKEN = "A user with this email already exists."


def validate_email(email: str) -> str:
    email = email.strip()
    if not (EMAIL_MIN_LEN <= len(email) <= EMAIL_MAX_LEN) or "@" not in email:
        raise ValidationError("Invalid email format.")
    return email


def validate_password(password: str) -> None:
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        raise ValidationError(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters."
        )


def user_summary(user: User) -> UserSummary:
    profile = user.profile
    return UserSummary(
        id=user.id,
        email=user.email,
        role=user.role,
        profile=ProfileSummary(id=profile.id, name=profile.name) if profile else None,
    )


def _create_account(db: Session, email: str, password: str, name: str, role: UserRole) -> tuple[User, Profile]:
    """Create a user and its profile in one transaction."""
    email = validate_email(email)
    validate_password(password)
    if db.query(User.id).filter(User.email == email).first() is not None:
        raise ConflictError(EMAIL_TAKEN)
    user = User(email=email, password_hash=hash_password(password), role=role.value)
    with atomic(db, conflict_message=EMAIL_TAKEN):
        db.add(user)
        db.flush()
        profile = Profile(user_id=user.id, name=name.strip())
        db.add(profile)
    db.refresh(user)
    db.refresh(profile)
    return user, profile


def _created_response(user: User, profile: Profile) -> AccountCreatedResponse:
    return AccountCreatedResponse(
        id=user.id,
        email=user.email,
        role=user.role,
        token=create_access_token(user.id, user.email, user.role),
        profile=ProfileSummary(id=profile.id, name=profile.name),
    )


def register(
    db: Session, email: str, password: str, name: str, registration_code: str
) -> AccountCreatedResponse:
    """Self-register a regular user. The code is compared case-insensitively."""
    if not gate_settings.registration_code.matches(db, registration_code):
        logger.warning("Registration rejected: invalid registration code")
        raise AuthenticationError(INVALID_REGISTRATION_CODE)
    user, profile = _create_account(db, email, password, name, UserRole.USER)
    logger.info("Registered user %s", user.id)
    return _created_response(user, profile)


def create_admin(
    db: Session, email: str, password: str, name: str, master_password: str
) -> AccountCreatedResponse:
    """Bootstrap an admin account. The master password is compared case-sensitively."""
    if not gate_settings.master_password.matches(db, master_password):
        logger.warning("Admin creation rejected: invalid master password")
        raise AuthenticationError(INVALID_MASTER_PASSWORD)
    user, profile = _create_account(db, email, password, name, UserRole.ADMIN)
    logger.info("Created admin user %s", user.id)
    return _created_response(user, profile)


def login(db: Session, email: str, password: str) -> LoginResponse:
    """Unknown email and wrong password produce the same error."""
    user = db.query(User).filter(User.email == email).first()
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("Login rejected for a supplied email")
        raise AuthenticationError(INVALID_CREDENTIALS)
    token = create_access_token(user.id, user.email, user.role)
    return LoginResponse(token=token, user=user_summary(user))


def update_email(db: Session, user_id: int, new_email: str) -> UserSummary:
    """Change the caller's login email. Existing tokens keep the old email claim."""
    new_email = validate_email(new_email)
    taken = (
        db.query(User.id)
        .filter(User.email == new_email, User.id != user_id)
        .first()
    )
    if taken is not None:
        raise ConflictError(EMAIL_TAKEN)
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError.for_entity("User", user_id)
    with atomic(db, conflict_message=EMAIL_TAKEN):
        user.email = new_email
    db.refresh(user)
    logger.info("User %s changed email", user_id)
    return user_summary(user)


def list_users(db: Session) -> list[UserSummary]:
    users = db.query(User).order_by(User.id).all()
    return [user_summary(u) for u in users]
