import pytest

from src.content.registry import EXECUTORS, execute_query, list_query_defs
from tests.fakes import FakeDocumentStore, day


def test_every_declared_query_has_an_executor():
    assert {d.name for d in list_query_defs()} == set(EXECUTORS)


@pytest.mark.asyncio
async def test_featured_content_query(site_store):
    result = await execute_query(site_store, "getFeaturedContent", {"eventsLimit": 1, "musicLimit": 2})

    assert result.status == "completed"
    assert result.errors is None
    assert set(result.data) == {"upcomingEvents", "recentPosts", "featuredMusic", "profile"}
    assert len(result.data["upcomingEvents"]) <= 1
    assert len(result.data["featuredMusic"]) == 2
    assert len(result.data["recentPosts"]) == 3
    assert result.data["profile"]["name"] == "Ada Lovelace"
    for post in result.data["recentPosts"]:
        assert post["publishDate"].endswith(".000Z")


@pytest.mark.asyncio
async def test_list_queries_wrap_items(site_store):
    result = await execute_query(site_store, "getRecentPosts", {"limit": 1})
    assert result.status == "completed"
    assert [p["id"] for p in result.data["items"]] == ["p4"]

    profile = await execute_query(site_store, "getProfile")
    assert profile.data["profile"]["id"] == "main"


@pytest.mark.asyncio
async def test_unknown_query(store):
    result = await execute_query(store, "dropEverything", {})
    assert result.status == "failed"
    assert result.errors[0].code == "UNKNOWN_QUERY"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "name,variables",
    [
        ("getUpcomingEvents", {"limit": -1}),
        ("getUpcomingEvents", {"limit": "many"}),
        ("getProfile", {"limit": 1}),
        ("getFeaturedContent", {"eventLimit": 2}),
    ],
)
async def test_invalid_variables(store, name, variables):
    result = await execute_query(store, name, variables)
    assert result.status == "failed"
    assert result.errors[0].code == "VALIDATION_ERROR"
    assert result.errors[0].details["fields"]


@pytest.mark.asyncio
async def test_store_failure_reported_as_error():
    store = FakeDocumentStore({"events": [{"id": "e", "title": "t", "date": day(1)}]})
    store.fail_on.add("posts")
    result = await execute_query(store, "getFeaturedContent", {})
    assert result.status == "failed"
    assert result.errors[0].code == "CONTENT_UNAVAILABLE"

    single = await execute_query(store, "getRecentPosts", {})
    assert single.errors[0].code == "STORE_UNAVAILABLE"
