"""Ghostwire Storage Layer.

SQLite-backed storage for collections and request history.
"""

from ghostwire.storage.database import Database, get_database, set_database
from ghostwire.storage.models import Record
from ghostwire.storage.store import (
    COLLECTIONS_KEY,
    HISTORY_KEY,
    HISTORY_LIMIT,
    CollectionStore,
    get_store,
    set_store,
)

__all__ = [
    "Database",
    "get_database",
    "set_database",
    "Record",
    "COLLECTIONS_KEY",
    "HISTORY_KEY",
    "HISTORY_LIMIT",
    "CollectionStore",
    "get_store",
    "set_store",
]
