"""Admin-managed gate values (registration code, master password) kept as key/value rows.

Reads go straight to the store on every call so an admin's change takes effect
on the next request. A failed read falls back to the configured default; a
failed write is raised to the caller.
"""

import logging
from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import atomic
from app.core.errors import ConflictError
from app.models import AppSetting

logger = logging.getLogger(__name__)

REGISTRATION_CODE_KEY = "RegistrationCode"
MASTER_PASSWORD_KEY = "MasterPassword"


class GuardedSetting:
    """A single key/value setting with a read-through, static-default policy."""

    def __init__(
        self,
        key: str,
        default: Callable[[], str],
        case_sensitive: bool,
    ) -> None:
        self.key = key
        self._default = default
        self.case_sensitive = case_sensitive

    @property
    def default(self) -> str:
        return self._default()

    def get(self, db: Session) -> str:
        """Current value, or the default when unset or when the store cannot be read."""
        try:
            row = db.get(AppSetting, self.key)
        except SQLAlchemyError:
            db.rollback()
            logger.warning("Could not read setting %s; using built-in default", self.key)
            return self.default
        if row is None:
            return self.default
        return row.value

    def _write(self, db: Session, value: str) -> None:
        with atomic(db):
            row = db.get(AppSetting, self.key)
            if row is None:
                db.add(AppSetting(key=self.key, value=value))
            else:
                row.value = value

    def set(self, db: Session, value: str) -> None:
        """Persist a new value. Raises StoreError if the write fails."""
        try:
            self._write(db, value)
        except ConflictError:
            # A concurrent writer inserted the row first; overwrite it.
            self._write(db, value)
        logger.info("Setting %s updated", self.key)

    def matches(self, db: Session, candidate: str | None) -> bool:
        """True if candidate is non-empty and equals the current value."""
        if not candidate:
            return False
        current = self.get(db)
        if self.case_sensitive:
            return candidate == current
        return candidate.casefold() == current.casefold()


registration_code = GuardedSetting(
    REGISTRATION_CODE_KEY,
    default=lambda: settings.DEFAULT_REGISTRATION_CODE,
    case_sensitive=False,
)

master_password = GuardedSetting(
    MASTER_PASSWORD_KEY,
    default=lambda: settings.DEFAULT_MASTER_PASSWORD.get_secret_value(),
    case_sensitive=True,
)
