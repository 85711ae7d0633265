"""Database connection, session management and transaction boundaries."""

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.errors import ConflictError, StoreError

logger = logging.getLogger(__name__)


def engine_options(url: str) -> dict[str, Any]:
    """Engine keyword arguments for the given URL; in-memory SQLite must share one connection."""
    if url.startswith("sqlite://"):
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {"pool_pre_ping": True}


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    **engine_options(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False


@contextmanager
def atomic(
    db: Session,
    conflict_message: str = "The change conflicts with existing data",
) -> Iterator[Session]:
    """
    Run one logical mutation as a single commit.

    Everything staged inside the block is committed together or rolled back
    together. IntegrityError is reported as ConflictError; any other store
    failure is logged and reported as a generic StoreError.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("Integrity violation, transaction rolled back: %s", e.orig)
        raise ConflictError(conflict_message) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Store failure, transaction rolled back")
        raise StoreError() from e
    except Exception:
        db.rollback()
        raise
