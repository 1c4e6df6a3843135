import os

# Fixed before any config is read so "today" is the UTC day
os.environ["SITE_TIMEZONE"] = "UTC"
os.environ.pop("FEATURED_CURATION_ORDER", None)
os.environ.pop("ADMIN_PRINCIPALS", None)

import pytest  # noqa: E402

from src.shared.config import get_site_config  # noqa: E402
from tests.fakes import FakeDocumentStore, day  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_config():
    get_site_config.cache_clear()
    yield
    get_site_config.cache_clear()


@pytest.fixture
def store() -> FakeDocumentStore:
    return FakeDocumentStore()


@pytest.fixture
def site_store() -> FakeDocumentStore:
    """A small populated site."""
    return FakeDocumentStore(
        {
            "events": [
                {"id": "e-past", "title": "Last Week", "date": day(-7)},
                {"id": "e3", "title": "Third", "date": day(30)},
                {"id": "e1", "title": "First", "date": day(1)},
                {"id": "e-today", "title": "Tonight", "date": day(0)},
                {"id": "e2", "title": "Second", "date": day(10)},
                {"id": "e4", "title": "Fourth", "date": day(60)},
            ],
            "posts": [
                {"id": "p1", "title": "One", "content": "x", "published": True, "publishDate": day(-3)},
                {"id": "p2", "title": "Two", "content": "x", "published": False, "publishDate": day(-1)},
                {"id": "p3", "title": "Three", "content": "x", "published": True, "publishDate": day(-10)},
                {"id": "p4", "title": "Four", "content": "x", "published": True, "publishDate": day(-2)},
            ],
            "music": [
                {"id": "m1", "title": "Song 1", "releaseDate": "2020-01-01"},
                {"id": "m2", "title": "Song 2", "releaseDate": "2022-05-01"},
                {"id": "m3", "title": "Song 3"},
                {"id": "m4", "title": "Song 4", "releaseDate": "2021-03-01"},
            ],
            "profile": [
                {"id": "main", "name": "Ada Lovelace", "title": "Composer", "bio": "<p>Bio</p>"},
            ],
        }
    )
