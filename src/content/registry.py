"""
Typed query dispatcher behind ``POST /api/query``.

Named queries are declared in ``src.specs.queries_registry``; each one has an
executor here taking the store and the validated variables model.
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, List, Optional

from pydantic import BaseModel, ValidationError

from src.content import category_queries as q
from src.content.featured_content import get_featured_content
from src.shared.document_store import DocumentStore
from src.shared.logging_utils import error as log_error, info as log_info
from src.specs.common.errors import PortfolioError
from src.specs.models.forms import field_errors
from src.specs.models.queries import (
    EventList,
    MusicList,
    PostList,
    ProfileResult,
    QueryError,
    QueryResponse,
    SocialLinkList,
    VideoList,
)
from src.specs.queries_registry import QUERIES, QueryDef

Executor = Callable[[DocumentStore, Any], Awaitable[BaseModel]]


async def _featured(store: DocumentStore, v: Any) -> BaseModel:
    return await get_featured_content(store, v.eventsLimit, v.postsLimit, v.musicLimit)


async def _upcoming(store: DocumentStore, v: Any) -> BaseModel:
    return EventList(items=await q.get_upcoming_events(store, v.limit))


async def _past(store: DocumentStore, v: Any) -> BaseModel:
    return EventList(items=await q.get_past_events(store, v.limit))


async def _posts(store: DocumentStore, v: Any) -> BaseModel:
    return PostList(items=await q.get_recent_posts(store, v.limit))


async def _featured_music(store: DocumentStore, v: Any) -> BaseModel:
    return MusicList(items=await q.get_featured_music(store, v.limit))


async def _catalog(store: DocumentStore, v: Any) -> BaseModel:
    return MusicList(items=await q.get_music_catalog(store, v.limit))


async def _videos(store: DocumentStore, v: Any) -> BaseModel:
    return VideoList(items=await q.get_videos(store, v.limit))


async def _social(store: DocumentStore, v: Any) -> BaseModel:
    return SocialLinkList(items=await q.get_social_links(store))


async def _profile(store: DocumentStore, v: Any) -> BaseModel:
    return ProfileResult(profile=await q.get_profile(store))


EXECUTORS: Dict[str, Executor] = {
    "getFeaturedContent": _featured,
    "getUpcomingEvents": _upcoming,
    "getPastEvents": _past,
    "getRecentPosts": _posts,
    "getFeaturedMusic": _featured_music,
    "getMusicCatalog": _catalog,
    "getVideos": _videos,
    "getSocialLinks": _social,
    "getProfile": _profile,
}

_DEFS: Dict[str, QueryDef] = {d.name: d for d in QUERIES}


def list_query_defs() -> List[QueryDef]:
    return list(QUERIES)


def _failed(errors: List[QueryError]) -> QueryResponse:
    return QueryResponse(status="failed", errors=errors)


async def execute_query(store: DocumentStore, name: str, variables: Optional[Dict[str, Any]] = None) -> QueryResponse:
    """Run a named query and wrap its result or error in a QueryResponse.

    Unknown names and invalid variables are reported as errors, as are
    portfolio errors raised while executing.
    """
    query_def = _DEFS.get(name)
    executor = EXECUTORS.get(name)
    if query_def is None or executor is None:
        return _failed([QueryError(code="UNKNOWN_QUERY", message=f"Query '{name}' is not defined")])

    try:
        args = query_def.input_model.model_validate(variables or {})
    except ValidationError as exc:
        return _failed([
            QueryError(code="VALIDATION_ERROR", message="Invalid variables", details={"fields": field_errors(exc)})
        ])

    try:
        result = await executor(store, args)
    except PortfolioError as exc:
        log_error(None, "query:failed", query=name, code=exc.code, error=str(exc))
        return _failed([QueryError(**exc.to_dict())])

    log_info(None, "query:completed", query=name)
    return QueryResponse(status="completed", data=result.model_dump(mode="json"))
