"""Database Models for SQLite storage.

Workbench state is kept as named JSON records, one row per record key.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    """Get current UTC time."""
    return datetime.now(timezone.utc)


class Record(Base):
    """A named JSON document (history, collections)."""

    __tablename__ = "records"

    key = Column(String(255), primary_key=True)
    value = Column(JSON)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
