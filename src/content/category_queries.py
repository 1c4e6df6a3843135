"""
Single-category public queries.

Each query reads one collection, coerces the documents into typed records
(normalising their date fields) and applies its own filter, ordering and
limit. The featured content aggregator reuses the first four as its
uncurated fallbacks.
"""
from datetime import datetime
from typing import List, Optional

from src.content.records import coerce_document, coerce_documents
from src.shared.document_store import DocumentStore, OrderBy, QueryOptions, Where
from src.specs.common.datetime_utils import is_upcoming, start_of_local_day
from src.specs.common.enums import Collection
from src.specs.common.errors import FormValidationError
from src.specs.models.domain import Event, Music, Post, Profile, SocialLink, Video

DEFAULT_LIST_LIMIT = 10
PAST_EVENTS_LIMIT = 10


def resolve_limit(limit: Optional[int], default: Optional[int], field: str = "limit") -> Optional[int]:
    """``None`` gives the default; negatives and non-integers are rejected."""
    if limit is None:
        return default
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise FormValidationError([{"field": field, "message": "must be an integer"}])
    if limit < 0:
        raise FormValidationError([{"field": field, "message": "must be non-negative"}])
    return limit




async def get_upcoming_events(
    store: DocumentStore,
    limit: Optional[int] = None,
    *,
    today: Optional[datetime] = None,
) -> List[Event]:
    """Events dated today or later, soonest first.

    The store orders raw stored values (numbers before strings before
    objects), so events are re-sorted by their normalised date here.
    """
    limit = resolve_limit(limit, DEFAULT_LIST_LIMIT)
    if limit == 0:
        return []
    today = today or start_of_local_day()
    docs = await store.query_documents(
        Collection.EVENTS.value, QueryOptions(order_by=OrderBy("date", "asc"))
    )
    events = coerce_documents(Event, docs, Collection.EVENTS.value)
    upcoming = sorted((e for e in events if is_upcoming(e.date, today)), key=lambda e: e.date)
    return upcoming[:limit]


async def get_past_events(
    store: DocumentStore,
    limit: Optional[int] = None,
    *,
    today: Optional[datetime] = None,
) -> List[Event]:
    """Events dated before today, most recent first.

    Derived from the event date; a stored ``isPast`` flag is ignored.
    """
    limit = resolve_limit(limit, PAST_EVENTS_LIMIT)
    if limit == 0:
        return []
    today = today or start_of_local_day()
    docs = await store.query_documents(
        Collection.EVENTS.value, QueryOptions(order_by=OrderBy("date", "desc"))
    )
    events = coerce_documents(Event, docs, Collection.EVENTS.value)
    past = sorted(
        (e for e in events if e.date is not None and e.date < today),
        key=lambda e: e.date,
        reverse=True,
    )
    return past[:limit]


async def get_recent_posts(store: DocumentStore, limit: Optional[int] = None) -> List[Post]:
    """Published posts, newest first.

    Filter, order and limit run in the store, which orders the raw
    ``publishDate`` values; posts stored with mixed date types come back
    grouped by type.
    """
    limit = resolve_limit(limit, DEFAULT_LIST_LIMIT)
    if limit == 0:
        return []
    docs = await store.query_documents(
        Collection.POSTS.value,
        QueryOptions(
            where=(Where("published", True),),
            order_by=OrderBy("publishDate", "desc"),
            limit=limit,
        ),
    )
    posts = coerce_documents(Post, docs, Collection.POSTS.value)
    return [p for p in posts if p.published][:limit]


async def get_featured_music(store: DocumentStore, limit: Optional[int] = None) -> List[Music]:
    limit = resolve_limit(limit, DEFAULT_LIST_LIMIT)
    if limit == 0:
        return []
    docs = await store.query_documents(Collection.MUSIC.value, QueryOptions(limit=limit))
    return coerce_documents(Music, docs, Collection.MUSIC.value)


async def get_music_catalog(store: DocumentStore, limit: Optional[int] = None) -> List[Music]:
    """All music with a release date, newest first; undated tracks are left out by the store."""
    limit = resolve_limit(limit, None)
    if limit == 0:
        return []
    docs = await store.query_documents(
        Collection.MUSIC.value,
        QueryOptions(order_by=OrderBy("releaseDate", "desc"), limit=limit),
    )
    return coerce_documents(Music, docs, Collection.MUSIC.value)


async def get_videos(store: DocumentStore, limit: Optional[int] = None) -> List[Video]:
    limit = resolve_limit(limit, None)
    if limit == 0:
        return []
    docs = await store.query_documents(
        Collection.VIDEOS.value,
        QueryOptions(order_by=OrderBy("createdAt", "desc"), limit=limit),
    )
    return coerce_documents(Video, docs, Collection.VIDEOS.value)


async def get_social_links(store: DocumentStore) -> List[SocialLink]:
    docs = await store.query_documents(
        Collection.SOCIAL_LINKS.value, QueryOptions(order_by=OrderBy("order", "asc"))
    )
    return coerce_documents(SocialLink, docs, Collection.SOCIAL_LINKS.value)


async def get_profile(store: DocumentStore) -> Optional[Profile]:
    """First document of the profile collection, or None when it is empty."""
    docs = await store.query_documents(Collection.PROFILE.value, QueryOptions(limit=1))
    if not docs:
        return None
    return coerce_document(Profile, docs[0], Collection.PROFILE.value)
