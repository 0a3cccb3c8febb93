"""Database connection and session management."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import Connection, Engine, create_engine, event, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from contracts_desk.core.config import Config
from contracts_desk.models.base import clear_new_identities

logger = logging.getLogger(__name__)


def _build_engine(database_url: str, echo: bool = False) -> Engine:
    engine = create_engine(database_url, echo=echo)

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def _assign_new_identities(session: Session, flush_context, instances) -> None:
    clear_new_identities(list(session.new))


def is_foreign_key_violation(exc: BaseException) -> bool:
    """True when the store rejected a statement because of a foreign key."""
    if not isinstance(exc, IntegrityError):
        return False
    return "FOREIGN KEY" in str(exc.orig).upper()


class Database:
    """Resolved store location plus the factories for units of work.

    One instance is created at startup and handed to every manager.
    """

    def __init__(self, path: str | Path, echo: bool = False) -> None:
        self.path = Path(path)
        self.url = f"sqlite:///{self.path}"
        self.engine = _build_engine(self.url, echo=echo)
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)
        event.listen(self.SessionLocal, "before_flush", _assign_new_identities)

    @classmethod
    def from_config(cls, config: Config, path: str | Path) -> "Database":
        return cls(path, echo=config.SQL_ECHO)

    def get_engine(self) -> Engine:
        """Return the active SQLAlchemy engine."""
        return self.engine

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Context-manager wrapper for safe DB session lifecycle."""
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    @contextmanager
    def begin(self) -> Generator[Connection, None, None]:
        """Connection inside a transaction, committed on clean exit."""
        with self.engine.begin() as conn:
            yield conn

    @contextmanager
    def connect(self) -> Generator[Connection, None, None]:
        with self.engine.connect() as conn:
            yield conn

    def verify_connection(self) -> bool:
        """Verify the database file can be opened and queried."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            logger.exception(
                "database.connection_failed",
                extra={"event": "database.connection_failed", "path": str(self.path)},
            )
            return False

    def dispose(self) -> None:
        self.engine.dispose()

    def __repr__(self) -> str:
        return f"Database(path={str(self.path)!r})"
