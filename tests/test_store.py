"""Unit tests for the collection/history store and its database."""

import pytest

from ghostwire.models import Collection, Header, HttpMethod, RequestModel
from ghostwire.storage import (
    COLLECTIONS_KEY,
    HISTORY_KEY,
    HISTORY_LIMIT,
    CollectionStore,
    Database,
)


class TestDatabase:
    """Tests for the named-record table."""

    def test_missing_record_returns_default(self, database) -> None:
        assert database.get_record("nope", default=[]) == []

    def test_set_and_replace(self, database) -> None:
        database.set_record("k", [1, 2])
        database.set_record("k", {"a": 1})
        assert database.get_record("k") == {"a": 1}
        assert database.list_keys() == ["k"]

    def test_delete(self, database) -> None:
        database.set_record("k", 1)
        assert database.delete_record("k") is True
        assert database.delete_record("k") is False


class TestCollections:
    """Tests for collection operations."""

    def test_create_persists(self, store, database) -> None:
        """Test that creation writes through immediately."""
        coll = store.create_collection("Users API")
        assert coll.name == "Users API"
        assert coll.requests == []
        stored = database.get_record(COLLECTIONS_KEY)
        assert stored == [{"id": coll.id, "name": "Users API", "requests": []}]

    def test_create_requires_name(self, store) -> None:
        with pytest.raises(ValueError):
            store.create_collection("   ")

    def test_rename(self, store) -> None:
        coll = store.create_collection("Old")
        assert store.rename_collection(coll.id, "New") is True
        assert store.get_collection(coll.id).name == "New"

    def test_rename_unknown(self, store) -> None:
        assert store.rename_collection(123, "x") is False

    def test_delete_cascades_but_keeps_history(self, store, database) -> None:
        """Test deleting a collection removes its requests, not history."""
        coll = store.create_collection("API")
        request = RequestModel(url="https://api.example.com/users")
        store.add_request(coll.id, request, "List users")
        store.append_history(request)

        assert store.delete_collection(coll.id) is True

        assert store.collections == []
        assert database.get_record(COLLECTIONS_KEY) == []
        assert len(store.history) == 1
        assert len(database.get_record(HISTORY_KEY)) == 1

    def test_delete_unknown(self, store) -> None:
        assert store.delete_collection(42) is False

    def test_returned_collections_are_copies(self, store) -> None:
        """Test that callers cannot mutate stored state."""
        coll = store.create_collection("API")
        listed = store.collections
        listed[0].name = "Hacked"
        listed.clear()
        assert store.get_collection(coll.id).name == "API"


class TestSavedRequests:
    """Tests for requests saved in collections."""

    def test_add_request_copies(self, store) -> None:
        """Test the saved copy gets a fresh id, the name and a back-reference."""
        coll = store.create_collection("API")
        live = RequestModel(method=HttpMethod.POST, url="https://x.io/a", id=1)

        saved = store.add_request(coll.id, live, "Create A")

        assert saved.name == "Create A"
        assert saved.collection_id == coll.id
        assert saved.id is not None
        assert live.name is None
        assert live.collection_id is None

    def test_saved_copy_unaffected_by_editor(self, store) -> None:
        """Test that editing the live request leaves the saved copy alone."""
        coll = store.create_collection("API")
        live = RequestModel(url="https://x.io/a", headers=[Header("A", "1")], body="b")
        saved = store.add_request(coll.id, live, "A")

        live.url = "https://changed"
        live.body = "changed"
        live.update_header(0, value="changed")
        live.add_header("B", "2")

        stored = store.find_request(coll.id, saved.id)
        assert stored.url == "https://x.io/a"
        assert stored.body == "b"
        assert stored.headers == [Header("A", "1")]

    def test_add_to_unknown_collection(self, store) -> None:
        assert store.add_request(99, RequestModel(), "x") is None

    def test_add_requires_name(self, store) -> None:
        coll = store.create_collection("API")
        with pytest.raises(ValueError):
            store.add_request(coll.id, RequestModel(), "")

    def test_rename_request(self, store) -> None:
        coll = store.create_collection("API")
        saved = store.add_request(coll.id, RequestModel(url="u"), "Old")
        assert store.rename_request(coll.id, saved.id, "New") is True
        assert store.find_request(coll.id, saved.id).name == "New"

    def test_delete_request(self, store) -> None:
        coll = store.create_collection("API")
        saved = store.add_request(coll.id, RequestModel(url="u"), "A")
        assert store.delete_request(coll.id, saved.id) is True
        assert store.get_collection(coll.id).requests == []
        assert store.delete_request(coll.id, saved.id) is False

    def test_request_ops_scoped_to_collection(self, store) -> None:
        """Test a request id under the wrong collection is not found."""
        first = store.create_collection("One")
        second = store.create_collection("Two")
        saved = store.add_request(first.id, RequestModel(url="u"), "A")
        assert store.rename_request(second.id, saved.id, "B") is False
        assert store.delete_request(second.id, saved.id) is False


class TestHistory:
    """Tests for the bounded history log."""

    def test_newest_first(self, store) -> None:
        store.append_history(RequestModel(url="first"))
        store.append_history(RequestModel(url="second"))
        assert [r.url for r in store.history] == ["second", "first"]

    def test_capped_at_limit(self, store, database) -> None:
        """Test that the oldest entries are evicted."""
        for i in range(HISTORY_LIMIT + 15):
            store.append_history(RequestModel(url=f"u{i}"))

        history = store.history
        assert len(history) == HISTORY_LIMIT
        assert history[0].url == f"u{HISTORY_LIMIT + 14}"
        assert history[-1].url == "u15"
        assert len(database.get_record(HISTORY_KEY)) == HISTORY_LIMIT

    def test_history_snapshot_is_independent(self, store) -> None:
        """Test the history entry does not alias the live request."""
        live = RequestModel(url="a", headers=[Header("A", "1")])
        store.append_history(live)
        live.url = "b"
        live.update_header(0, value="2")
        entry = store.history[0]
        assert entry.url == "a"
        assert entry.headers == [Header("A", "1")]

    def test_history_and_collection_do_not_alias(self, store) -> None:
        """Test renaming a saved request leaves its history twin alone."""
        coll = store.create_collection("API")
        live = RequestModel(url="a")
        saved = store.add_request(coll.id, live, "Saved")
        store.append_history(live)
        store.rename_request(coll.id, saved.id, "Renamed")
        assert store.history[0].name is None

    def test_clear(self, store, database) -> None:
        store.append_history(RequestModel(url="a"))
        store.clear_history()
        assert store.history == []
        assert database.get_record(HISTORY_KEY) == []


class TestPersistence:
    """Tests for load/save across store instances."""

    def test_reload(self, database) -> None:
        """Test that a new store sees what the previous one wrote."""
        first = CollectionStore(database)
        first.load()
        coll = first.create_collection("API")
        first.add_request(coll.id, RequestModel(url="u"), "A")
        first.append_history(RequestModel(url="h"))

        second = CollectionStore(database)
        second.load()
        assert [c.name for c in second.collections] == ["API"]
        assert second.collections[0].requests[0].name == "A"
        assert [r.url for r in second.history] == ["h"]

    def test_mutation_before_load_keeps_stored_data(self, database) -> None:
        """Test that an unloaded store loads before writing."""
        database.set_record(COLLECTIONS_KEY, [{"id": 1, "name": "Existing", "requests": []}])
        store = CollectionStore(database)
        store.create_collection("New")
        assert [c.name for c in store.collections] == ["Existing", "New"]

    def test_malformed_records_load_empty(self, database) -> None:
        database.set_record(COLLECTIONS_KEY, {"not": "a list"})
        database.set_record(HISTORY_KEY, ["junk", {"url": "ok"}])
        store = CollectionStore(database)
        store.load()
        assert store.collections == []
        assert [r.url for r in store.history] == ["ok"]

    def test_import_collections_appends(self, store) -> None:
        store.create_collection("Mine")
        added = store.import_collections([Collection(name="Imported", id=5)])
        assert added == 1
        assert [c.name for c in store.collections] == ["Mine", "Imported"]

    def test_export_shape(self, store) -> None:
        coll = store.create_collection("API")
        assert store.export_collections() == [{"id": coll.id, "name": "API", "requests": []}]


def test_default_database_path(tmp_path, monkeypatch) -> None:
    """Test that Database() falls back to the configured path."""
    from ghostwire.config import set_config

    monkeypatch.setenv("GHOSTWIRE_DB_PATH", str(tmp_path / "nested" / "gw.db"))
    set_config(None)
    try:
        db = Database()
        assert db.db_path == tmp_path / "nested" / "gw.db"
        assert db.db_path.parent.exists()
        db.close()
    finally:
        set_config(None)
