"""Tests for the create-listing endpoint."""

import os
import pytest
from unittest.mock import patch
from api.listings.create import handler
from src.services.listing_store import InMemoryListingStore
from src.utils.errors import ListingPersistenceError
from tests.utils.assertions import assert_json_error
from tests.utils.helpers import call_handler


def _post(body, store):
    with patch("api.listings.create.get_listing_store", return_value=store):
        return call_handler(handler, method="POST", path="/api/listings/create", body=body)


@pytest.mark.unit
def test_create_listing_success(listing_store):
    """Test a new listing is written and reported."""
    status, headers, body = _post({"slug": "blue-house", "code": "page source"}, listing_store)

    assert status == 200
    assert headers["Content-Type"] == "application/json"
    assert body == {
        "success": True,
        "path": "app/listings/blue-house/page.tsx",
        "slug": "blue-house",
    }
    assert listing_store.pages["blue-house"] == "page source"


@pytest.mark.unit
@pytest.mark.parametrize(
    "payload",
    [
        {"code": "page source"},
        {"slug": "blue-house"},
        {"slug": "", "code": ""},
        {},
    ],
)
def test_create_listing_missing_fields(payload, listing_store):
    """Test missing fields are a 400 with no write."""
    status, _, body = _post(payload, listing_store)

    assert_json_error(status, body, 400)
    assert body["error"] == "Missing slug or code"
    assert listing_store.pages == {}


@pytest.mark.unit
def test_create_listing_rejects_path_traversal(listing_store):
    """Test slugs that escape the listings directory are refused."""
    status, _, body = _post({"slug": "../../etc", "code": "page source"}, listing_store)

    assert_json_error(status, body, 400)
    assert listing_store.pages == {}


@pytest.mark.unit
def test_create_listing_collision():
    """Test an existing slug returns 400 and keeps the old page."""
    store = InMemoryListingStore({"x": "existing page"})

    status, _, body = _post({"slug": "x", "code": "new page"}, store)

    assert_json_error(status, body, 400)
    assert body["slug"] == "x"
    assert "already exists" in body["error"]
    assert store.pages["x"] == "existing page"


@pytest.mark.unit
def test_create_listing_resubmit_is_collision(listing_store):
    """Test re-sending a successful request never overwrites."""
    request = {"slug": "blue-house", "code": "page source"}

    first_status, _, _ = _post(request, listing_store)
    second_status, _, body = _post(request, listing_store)

    assert first_status == 200
    assert second_status == 400
    assert body["slug"] == "blue-house"


@pytest.mark.unit
@pytest.mark.parametrize("raw_body", ["{not json", "[1, 2, 3]"])
def test_create_listing_bad_json(raw_body, listing_store):
    """Test unparseable or non-object bodies are a 400."""
    status, _, body = _post(raw_body, listing_store)

    assert_json_error(status, body, 400)


@pytest.mark.unit
def test_create_listing_persistence_failure():
    """Test storage faults are an opaque 500."""
    class FailingStore(InMemoryListingStore):
        async def put_if_absent(self, slug, code):
            raise ListingPersistenceError("disk full at /var/secret/path")

    status, _, body = _post({"slug": "blue-house", "code": "page source"}, FailingStore())

    assert_json_error(status, body, 500)
    assert body["error"] == "Failed to create listing file"


@pytest.mark.unit
def test_create_listing_get():
    """Test GET reports endpoint status."""
    status, _, body = call_handler(handler, method="GET", path="/api/listings/create")

    assert status == 200
    assert body == {"status": "ok", "endpoint": "listings/create"}


@pytest.mark.integration
def test_create_listing_writes_file(filesystem_store):
    """Test the filesystem store behind the endpoint."""
    status, _, body = _post({"slug": "blue-house", "code": "page source"}, filesystem_store)

    assert status == 200
    assert body["path"] == "app/listings/blue-house/page.tsx"
    assert os.path.exists(filesystem_store.page_file("blue-house"))


@pytest.mark.unit
def test_create_listing_non_utf8_body(listing_store):
    """Test bodies that are not UTF-8 are a 400 with no write."""
    status, _, body = _post(b"\xff\xfe\x00{", listing_store)

    assert_json_error(status, body, 400)
    assert body["error"] == "Request body must be JSON"
    assert listing_store.pages == {}


@pytest.mark.unit
def test_create_listing_trailing_newline_slug(listing_store):
    """Test a newline-suffixed slug is refused."""
    status, _, body = _post({"slug": "blue-house\n", "code": "page source"}, listing_store)

    assert_json_error(status, body, 400)
    assert listing_store.pages == {}
