"""
Featured content aggregation for the home page.

Each category resolves independently in two tiers: the admin's curated ids
when the settings list for that category is non-empty, otherwise the
matching single-category query. Curated picks are taken from a full scan of
the collection and still pass through the category's filters (upcoming for
events, published for posts), so a stale or dangling pick silently drops out.

Any store failure fails the whole aggregation with ContentUnavailableError.
"""
import asyncio
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from src.content.category_queries import (
    get_featured_music,
    get_profile,
    get_recent_posts,
    get_upcoming_events,
    resolve_limit,
)
from src.content.featured_settings import load_featured_settings
from src.content.records import coerce_documents
from src.shared.config import get_site_config
from src.shared.document_store import Document, DocumentStore
from src.shared.logging_utils import error as log_error, info as log_info
from src.specs.common.datetime_utils import is_upcoming, start_of_local_day
from src.specs.common.enums import Collection, CurationOrder
from src.specs.common.errors import ContentUnavailableError, StoreUnavailableError
from src.specs.models.domain import Event, FeaturedContent, FeaturedSettings, Music, Post

DEFAULT_FEATURED_LIMIT = 3


def select_curated(docs: Sequence[Document], ids: Sequence[str], order: CurationOrder) -> List[Document]:
    """Keep documents whose id was curated.

    SCAN keeps the order the collection scan returned them in; CURATED
    reorders them to the admin's pick order.
    """
    wanted = set(ids)
    picked = [doc for doc in docs if doc.get("id") in wanted]
    if order is CurationOrder.CURATED:
        position: Dict[str, int] = {}
        for i, item_id in enumerate(ids):
            position.setdefault(item_id, i)
        picked.sort(key=lambda doc: position[doc["id"]])
    return picked


async def _curated(store: DocumentStore, collection: Collection, ids: Sequence[str], order: CurationOrder) -> List[Document]:
    docs = await store.get_all_documents(collection.value)
    return select_curated(docs, ids, order)


async def _resolve_events(store, ids, limit, today, order) -> List[Event]:
    if limit == 0:
        return []
    if not ids:
        return await get_upcoming_events(store, limit, today=today)
    picked = await _curated(store, Collection.EVENTS, ids, order)
    events = coerce_documents(Event, picked, Collection.EVENTS.value)
    return [e for e in events if is_upcoming(e.date, today)][:limit]


async def _resolve_posts(store, ids, limit, order) -> List[Post]:
    if limit == 0:
        return []
    if not ids:
        return await get_recent_posts(store, limit)
    picked = await _curated(store, Collection.POSTS, ids, order)
    posts = coerce_documents(Post, picked, Collection.POSTS.value)
    return [p for p in posts if p.published][:limit]


async def _resolve_music(store, ids, limit, order) -> List[Music]:
    if limit == 0:
        return []
    if not ids:
        return await get_featured_music(store, limit)
    picked = await _curated(store, Collection.MUSIC, ids, order)
    return coerce_documents(Music, picked, Collection.MUSIC.value)[:limit]


async def resolve_featured_content(
    store: DocumentStore,
    settings: Optional[FeaturedSettings],
    events_limit: int = DEFAULT_FEATURED_LIMIT,
    posts_limit: int = DEFAULT_FEATURED_LIMIT,
    music_limit: int = DEFAULT_FEATURED_LIMIT,
    *,
    today: Optional[datetime] = None,
    curation_order: Optional[CurationOrder] = None,
) -> FeaturedContent:
    """Assemble the home page payload from an explicit settings snapshot.

    ``settings=None`` behaves exactly like settings with all three lists empty.
    Store errors propagate unchanged.
    """
    settings = settings or FeaturedSettings()
    today = today or start_of_local_day()
    order = curation_order or get_site_config().curation_order

    events, posts, music, profile = await asyncio.gather(
        _resolve_events(store, settings.featuredEventIds, events_limit, today, order),
        _resolve_posts(store, settings.featuredPostIds, posts_limit, order),
        _resolve_music(store, settings.featuredMusicIds, music_limit, order),
        get_profile(store),
    )
    return FeaturedContent(
        upcomingEvents=events,
        recentPosts=posts,
        featuredMusic=music,
        profile=profile,
    )


async def get_featured_content(
    store: DocumentStore,
    events_limit: Optional[int] = None,
    posts_limit: Optional[int] = None,
    music_limit: Optional[int] = None,
    *,
    now: Optional[datetime] = None,
    curation_order: Optional[CurationOrder] = None,
) -> FeaturedContent:
    """
    Load the featured settings and resolve the home page content

    Args:
        store: Document store to read from
        events_limit: Max upcoming events (default 3)
        posts_limit: Max published posts (default 3)
        music_limit: Max music items (default 3)
        now: Reference time for the upcoming filter (default: current time)
        curation_order: Ordering of curated picks (default: site config)

    Returns:
        FeaturedContent

    Raises:
        ContentUnavailableError: If the settings or any collection read fails
        FormValidationError: If a limit is negative
    """
    limits: Dict[str, Any] = {
        "eventsLimit": resolve_limit(events_limit, DEFAULT_FEATURED_LIMIT, "eventsLimit"),
        "postsLimit": resolve_limit(posts_limit, DEFAULT_FEATURED_LIMIT, "postsLimit"),
        "musicLimit": resolve_limit(music_limit, DEFAULT_FEATURED_LIMIT, "musicLimit"),
    }
    try:
        settings = await load_featured_settings(store)
        content = await resolve_featured_content(
            store,
            settings,
            limits["eventsLimit"],
            limits["postsLimit"],
            limits["musicLimit"],
            today=start_of_local_day(now),
            curation_order=curation_order,
        )
    except StoreUnavailableError as exc:
        log_error(None, "featured:unavailable", code=exc.code, error=str(exc), **limits)
        raise ContentUnavailableError(details={"cause": exc.code}) from exc

    log_info(
        None,
        "featured:resolved",
        curated=settings is not None,
        events=len(content.upcomingEvents),
        posts=len(content.recentPosts),
        music=len(content.featuredMusic),
        hasProfile=content.profile is not None,
    )
    return content
