"""Unit tests for request, collection and response models."""

from ghostwire.models import (
    BasicAuth,
    BearerAuth,
    Collection,
    Header,
    HttpMethod,
    NoAuth,
    RequestModel,
    ResponseModel,
    ScanType,
    auth_from_dict,
    body_size,
    display_name,
)


class TestRequestDefaults:
    """Tests for request construction defaults."""

    def test_blank_request(self) -> None:
        """Test File > New Request state."""
        request = RequestModel.blank()
        assert request.method == HttpMethod.GET
        assert request.url == ""
        assert request.headers == [Header()]
        assert request.body == ""
        assert request.scan_type == ScanType.ALL
        assert request.auth == NoAuth()
        assert request.id is None

    def test_initial_request(self) -> None:
        """Test the editor's opening state."""
        assert RequestModel.initial().url == "https://api.github.com"


class TestAuthVariants:
    """Tests for the auth tagged union."""

    def test_bearer_from_dict_drops_basic_fields(self) -> None:
        """Test that fields of another variant are discarded."""
        auth = auth_from_dict({"type": "bearer", "token": "abc", "username": "bob"})
        assert auth == BearerAuth(token="abc")
        assert not hasattr(auth, "username")

    def test_basic_from_dict(self) -> None:
        """Test basic auth with a missing password."""
        auth = auth_from_dict({"type": "basic", "username": "bob"})
        assert auth == BasicAuth(username="bob", password="")

    def test_unknown_type_is_no_auth(self) -> None:
        """Test that unknown or missing auth collapses to NoAuth."""
        assert auth_from_dict({"type": "digest"}) == NoAuth()
        assert auth_from_dict(None) == NoAuth()

    def test_auth_to_dict(self) -> None:
        """Test persisted auth shapes."""
        assert NoAuth().to_dict() == {"type": "none"}
        assert BearerAuth("t").to_dict() == {"type": "bearer", "token": "t"}
        assert BasicAuth("u", "p").to_dict() == {
            "type": "basic",
            "username": "u",
            "password": "p",
        }


class TestHeaderEditing:
    """Tests for header row editing."""

    def test_add_update_remove(self) -> None:
        """Test the editing helpers keep order."""
        request = RequestModel.blank()
        request.update_header(0, key="Accept")
        request.update_header(0, value="text/plain")
        request.add_header("X-Trace", "1")
        assert request.headers == [Header("Accept", "text/plain"), Header("X-Trace", "1")]

        request.remove_header(0)
        assert request.headers == [Header("X-Trace", "1")]

    def test_editing_does_not_touch_copies(self) -> None:
        """Test that a copy keeps its headers after the original is edited."""
        request = RequestModel(headers=[Header("A", "1")])
        snapshot = request.copy()

        request.update_header(0, value="2")
        request.add_header("B", "3")

        assert snapshot.headers == [Header("A", "1")]


class TestRequestSerialization:
    """Tests for the persisted JSON shape."""

    def test_to_dict_keys(self) -> None:
        """Test camelCase keys and optional fields."""
        request = RequestModel(
            method=HttpMethod.POST,
            url="https://example.com",
            headers=[Header("A", "1")],
            body="x",
            scan_type=ScanType.XSS,
            auth=BearerAuth("tok"),
            id=5,
            name="Create",
            collection_id=9,
        )
        data = request.to_dict()
        assert data == {
            "id": 5,
            "name": "Create",
            "method": "POST",
            "url": "https://example.com",
            "headers": [{"key": "A", "value": "1"}],
            "body": "x",
            "scanType": "xss",
            "collectionId": 9,
            "auth": {"type": "bearer", "token": "tok"},
        }

    def test_to_dict_omits_unset_ids(self) -> None:
        """Test that id, name and collectionId are omitted when unset."""
        data = RequestModel.blank().to_dict()
        assert "id" not in data
        assert "name" not in data
        assert "collectionId" not in data

    def test_from_dict_is_lenient(self) -> None:
        """Test fallbacks for unknown or missing values."""
        request = RequestModel.from_dict({"method": "TRACE", "scanType": "rce", "url": None})
        assert request.method == HttpMethod.GET
        assert request.scan_type == ScanType.ALL
        assert request.url == ""
        assert request.headers == [Header()]
        assert request.auth == NoAuth()

    def test_from_dict_lowercase_method(self) -> None:
        """Test method names are case-insensitive."""
        assert RequestModel.from_dict({"method": "patch"}).method == HttpMethod.PATCH


class TestDisplayName:
    """Tests for request display names."""

    def test_last_path_segment(self) -> None:
        assert display_name("https://api.example.com/users/42") == "42"

    def test_no_path(self) -> None:
        """Test a URL with no path segments falls back to the URL."""
        assert display_name("https://api.example.com") == "https://api.example.com"

    def test_relative_url(self) -> None:
        assert display_name("{{baseUrl}}/users/") == "users"

    def test_empty_url(self) -> None:
        assert display_name("") == "Untitled Request"

    def test_name_wins(self) -> None:
        """Test that a stored name is preferred over the URL."""
        request = RequestModel(url="https://x.io/a", name="Fetch A")
        assert request.display_name == "Fetch A"


class TestCollection:
    """Tests for the Collection model."""

    def test_round_trip_shape(self) -> None:
        """Test persisted collection shape."""
        coll = Collection(name="API", id=1, requests=[RequestModel(url="u", id=2, name="r", collection_id=1)])
        data = coll.to_dict()
        assert data["id"] == 1
        assert data["name"] == "API"
        assert data["requests"][0]["collectionId"] == 1

        restored = Collection.from_dict(data)
        assert restored.id == 1
        assert restored.requests[0].name == "r"

    def test_copy_is_deep(self) -> None:
        """Test that copying a collection copies its requests."""
        coll = Collection(name="API", id=1, requests=[RequestModel(url="a")])
        copied = coll.copy()
        copied.requests[0].url = "b"
        assert coll.requests[0].url == "a"


class TestResponseModel:
    """Tests for ResponseModel."""

    def test_body_size_counts_utf8_bytes(self) -> None:
        assert body_size("héllo") == "6 bytes"
        assert body_size("") == "0 bytes"

    def test_to_dict_error_optional(self) -> None:
        """Test that error only appears when set."""
        ok = ResponseModel(status="Done", time="N/A", size="0 bytes")
        assert "error" not in ok.to_dict()

        failed = ResponseModel(status="Failed", time="0", size="0", error="boom")
        assert failed.to_dict()["error"] == "boom"
        assert failed.is_error
