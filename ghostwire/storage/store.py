"""Collection and History Store.

Owns the in-memory collections and history and mirrors both to the
database on every change. Each mutation swaps in a new list instead of
editing the current one, and everything handed in or out is copied, so
the live editor request never aliases a stored entry.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from sqlalchemy.exc import SQLAlchemyError

from ghostwire.models import Collection, RequestModel, generate_id
from ghostwire.storage.database import Database, get_database

logger = logging.getLogger(__name__)

HISTORY_KEY = "http_cli_history"
# Bump the suffix whenever the stored collection layout changes.
COLLECTIONS_KEY = "http_cli_collections_v3"
HISTORY_LIMIT = 50


class CollectionStore:
    """Collections and request history with write-through persistence.

    Example:
        store = CollectionStore(Database(path))
        store.load()

        coll = store.create_collection("Users API")
        saved = store.add_request(coll.id, editor_request, name="List users")
        store.append_history(editor_request)
    """

    def __init__(self, database: Database, history_limit: int = HISTORY_LIMIT):
        self.database = database
        self.history_limit = history_limit
        self._collections: list[Collection] = []
        self._history: list[RequestModel] = []
        self._loaded = False

    # ==================== Lifecycle ====================

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load(self) -> None:
        """Read collections and history from the database."""
        self._history = [
            RequestModel.from_dict(item)
            for item in self._read_list(HISTORY_KEY)
        ][: self.history_limit]
        self._collections = [
            Collection.from_dict(item)
            for item in self._read_list(COLLECTIONS_KEY)
        ]
        self._loaded = True
        logger.info(
            f"Loaded {len(self._collections)} collections and "
            f"{len(self._history)} history entries"
        )

    def save(self) -> None:
        """Write both records."""
        self._save_history()
        self._save_collections()

    def _ensure_loaded(self) -> None:
        # Writing before the first load would overwrite stored data
        if not self._loaded:
            self.load()

    def _read_list(self, key: str) -> list[dict[str, Any]]:
        try:
            value = self.database.get_record(key, default=[])
        except SQLAlchemyError as e:
            logger.warning(f"Failed to read record {key}: {e}")
            return []

        if not isinstance(value, list):
            logger.warning(f"Ignoring malformed record {key}: expected a list")
            return []
        return [item for item in value if isinstance(item, dict)]

    def _write(self, key: str, value: list[dict[str, Any]]) -> None:
        try:
            self.database.set_record(key, value)
        except SQLAlchemyError as e:
            logger.warning(f"Failed to persist record {key}: {e}")

    def _save_history(self) -> None:
        self._write(
            HISTORY_KEY,
            [r.to_dict() for r in self._history[: self.history_limit]],
        )

    def _save_collections(self) -> None:
        self._write(COLLECTIONS_KEY, [c.to_dict() for c in self._collections])

    def _set_collections(self, collections: list[Collection]) -> None:
        self._collections = collections
        self._save_collections()

    def _set_history(self, history: list[RequestModel]) -> None:
        self._history = history[: self.history_limit]
        self._save_history()

    # ==================== Queries ====================

    @property
    def collections(self) -> list[Collection]:
        self._ensure_loaded()
        return [c.copy() for c in self._collections]

    @property
    def history(self) -> list[RequestModel]:
        self._ensure_loaded()
        return [r.copy() for r in self._history]

    def get_collection(self, collection_id: int) -> Collection | None:
        self._ensure_loaded()
        for collection in self._collections:
            if collection.id == collection_id:
                return collection.copy()
        return None

    def find_request(self, collection_id: int, request_id: int) -> RequestModel | None:
        """Get a copy of a stored request."""
        collection = self.get_collection(collection_id)
        if collection is None:
            return None
        for request in collection.requests:
            if request.id == request_id:
                return request
        return None

    def find_history_entry(self, request_id: int) -> RequestModel | None:
        self._ensure_loaded()
        for request in self._history:
            if request.id == request_id:
                return request.copy()
        return None

    # ==================== Collection Operations ====================

    def create_collection(self, name: str) -> Collection:
        """Create an empty collection."""
        name = (name or "").strip()
        if not name:
            raise ValueError("Collection name is required")

        self._ensure_loaded()
        collection = Collection(name=name, id=generate_id())
        self._set_collections([*self._collections, collection])
        logger.info(f"Created collection {collection.id} ({name})")
        return collection.copy()

    def rename_collection(self, collection_id: int, name: str) -> bool:
        name = (name or "").strip()
        if not name:
            raise ValueError("Collection name is required")

        self._ensure_loaded()
        if not any(c.id == collection_id for c in self._collections):
            return False
        self._set_collections([
            c.copy(name=name) if c.id == collection_id else c
            for c in self._collections
        ])
        return True

    def delete_collection(self, collection_id: int) -> bool:
        """Delete a collection and every request in it. History is untouched."""
        self._ensure_loaded()
        remaining = [c for c in self._collections if c.id != collection_id]
        if len(remaining) == len(self._collections):
            return False
        self._set_collections(remaining)
        logger.info(f"Deleted collection {collection_id}")
        return True

    def import_collections(self, collections: Iterable[Collection]) -> int:
        """Append collections (e.g. from an import). Returns how many were added."""
        self._ensure_loaded()
        added = [c.copy() for c in collections]
        if added:
            self._set_collections([*self._collections, *added])
        return len(added)

    def export_collections(self) -> list[dict[str, Any]]:
        """Collections in their persisted JSON shape."""
        self._ensure_loaded()
        return [c.to_dict() for c in self._collections]

    # ==================== Request Operations ====================

    def add_request(
        self,
        collection_id: int,
        request: RequestModel,
        name: str,
    ) -> RequestModel | None:
        """Save a copy of ``request`` into a collection.

        The copy gets a fresh id, the given name and a back-reference to
        the collection. Returns the stored copy, or None if the collection
        does not exist.
        """
        name = (name or "").strip()
        if not name:
            raise ValueError("Request name is required")

        self._ensure_loaded()
        if not any(c.id == collection_id for c in self._collections):
            return None

        saved = request.copy(id=generate_id(), name=name, collection_id=collection_id)
        self._set_collections([
            c.copy(requests=[*c.requests, saved]) if c.id == collection_id else c
            for c in self._collections
        ])
        return saved.copy()

    def rename_request(self, collection_id: int, request_id: int, name: str) -> bool:
        name = (name or "").strip()
        if not name:
            raise ValueError("Request name is required")

        self._ensure_loaded()
        if self.find_request(collection_id, request_id) is None:
            return False
        self._set_collections([
            c.copy(requests=[
                r.copy(name=name) if r.id == request_id else r
                for r in c.requests
            ])
            if c.id == collection_id else c
            for c in self._collections
        ])
        return True

    def delete_request(self, collection_id: int, request_id: int) -> bool:
        self._ensure_loaded()
        if self.find_request(collection_id, request_id) is None:
            return False
        self._set_collections([
            c.copy(requests=[r for r in c.requests if r.id != request_id])
            if c.id == collection_id else c
            for c in self._collections
        ])
        return True

    # ==================== History Operations ====================

    def append_history(self, request: RequestModel) -> RequestModel:
        """Record a sent request. Newest first; the oldest entries fall off."""
        self._ensure_loaded()
        snapshot = request.copy(id=generate_id())
        self._set_history([snapshot, *self._history])
        return snapshot.copy()

    def clear_history(self) -> None:
        self._ensure_loaded()
        self._set_history([])


# Global store instance
_store: CollectionStore | None = None


def get_store() -> CollectionStore:
    """Get the global store, loading it on first use."""
    global _store
    if _store is None:
        _store = CollectionStore(get_database())
        _store.load()
    return _store


def set_store(store: CollectionStore | None) -> None:
    """Set (or reset) the global store instance."""
    global _store
    _store = store
