import pytest

from src.shared.crud import CollectionCrud
from src.specs.common.errors import ResourceNotFoundError, StoreUnavailableError
from tests.fakes import FakeDocumentStore


@pytest.mark.asyncio
async def test_create_stamps_timestamps(store):
    crud = CollectionCrud(store, "events")
    doc_id = await crud.create({"title": "Gig"})

    doc = await store.get_document("events", doc_id)
    assert doc["title"] == "Gig"
    assert doc["createdAt"] == doc["updatedAt"]
    assert doc["createdAt"].endswith("Z")
    assert crud.status["create"].loading is False
    assert crud.status["create"].error is None


@pytest.mark.asyncio
async def test_update_stamps_updated_at_only():
    store = FakeDocumentStore({"posts": [{"id": "p1", "title": "a", "createdAt": "2020-01-01T00:00:00.000Z"}]})
    crud = CollectionCrud(store, "posts")

    assert await crud.update("p1", {"title": "b"}) is True
    doc = await store.get_document("posts", "p1")
    assert doc["title"] == "b"
    assert doc["createdAt"] == "2020-01-01T00:00:00.000Z"
    assert doc["updatedAt"] > doc["createdAt"]


@pytest.mark.asyncio
async def test_update_missing_records_error(store):
    crud = CollectionCrud(store, "posts")
    assert await crud.update("missing", {"title": "b"}) is False

    status = crud.status["update"]
    assert status.loading is False
    assert "missing" in status.error
    with pytest.raises(ResourceNotFoundError):
        crud.raise_for_status("update")


@pytest.mark.asyncio
async def test_failures_are_tracked_per_operation():
    store = FakeDocumentStore({"music": [{"id": "m1", "title": "t"}]})
    crud = CollectionCrud(store, "music")
    store.fail_on.add("music")

    assert await crud.get_all() == []
    assert await crud.create({"title": "x"}) is None
    assert crud.status["get_all"].error
    assert crud.status["create"].error
    assert crud.status["remove"].error is None
    with pytest.raises(StoreUnavailableError):
        crud.raise_for_status("create")

    store.fail_on.clear()
    assert await crud.remove("m1") is True
    crud.raise_for_status("remove")
    assert await crud.get_all() == []
    assert crud.status["get_all"].error is None
