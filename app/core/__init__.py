"""Core configuration, persistence, security and error types."""

from app.core.config import get_settings, settings
from app.core.database import atomic, get_db
from app.core.errors import (
    AppError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)

__all__ = [
    "AppError",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "NotFoundError",
    "StoreError",
    "ValidationError",
    "atomic",
    "get_db",
    "get_settings",
    "settings",
]
