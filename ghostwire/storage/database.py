"""Database Manager.

Handles the SQLite connection and the named-record table.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from ghostwire.config import get_config
from ghostwire.storage.models import Base, Record

logger = logging.getLogger(__name__)


class Database:
    """SQLite database manager.

    Example:
        db = Database(tmp_path / "ghostwire.db")
        db.set_record("http_cli_history", [])
        history = db.get_record("http_cli_history", default=[])
    """

    def __init__(self, db_path: Path | str | None = None):
        """Initialize the database.

        Args:
            db_path: Path to SQLite database file. If None, uses the configured path.
        """
        if db_path is None:
            db_path = get_config().db_path

        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self.engine = create_engine(
            f"sqlite:///{self.db_path}",
            connect_args={"check_same_thread": False},
        )
        self.SessionLocal = sessionmaker(bind=self.engine)

        # Create tables
        Base.metadata.create_all(self.engine)

        logger.info(f"Database initialized at {self.db_path}")

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Get a database session context manager."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ==================== Record Operations ====================

    def get_record(self, key: str, default: Any = None) -> Any:
        """Get a record's JSON value, or ``default`` if absent."""
        with self.session() as session:
            record = session.query(Record).filter(Record.key == key).first()
            if record is None or record.value is None:
                return default
            return record.value

    def set_record(self, key: str, value: Any) -> None:
        """Insert or replace a record."""
        with self.session() as session:
            record = session.query(Record).filter(Record.key == key).first()
            if record:
                record.value = value
            else:
                session.add(Record(key=key, value=value))

    def delete_record(self, key: str) -> bool:
        with self.session() as session:
            record = session.query(Record).filter(Record.key == key).first()
            if record:
                session.delete(record)
                return True
            return False

    def list_keys(self) -> list[str]:
        with self.session() as session:
            return [row.key for row in session.query(Record.key).all()]

    def close(self) -> None:
        self.engine.dispose()


# Global database instance
_database: Database | None = None


def get_database() -> Database:
    """Get the global database instance."""
    global _database
    if _database is None:
        _database = Database()
    return _database


def set_database(db: Database) -> None:
    """Set the global database instance."""
    global _database
    _database = db
