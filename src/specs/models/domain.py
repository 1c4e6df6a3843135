from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, Dict, List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    model_validator,
)

from src.specs.common.datetime_utils import format_iso_datetime, to_instant
from src.specs.common.enums import FeaturedCategory


def _serialize_instant(value: Optional[datetime]) -> Optional[str]:
    return format_iso_datetime(value) if value is not None else None


# Any stored date representation in, canonical ISO-8601 string out
Timestamp = Annotated[
    Optional[datetime],
    BeforeValidator(to_instant),
    PlainSerializer(_serialize_instant, return_type=Optional[str]),
]


class ContentDocument(BaseModel):
    """Base for every record read back from the document store.

    Unknown stored fields are dropped; camelCase names match what the site
    stores, and older admin spellings are accepted as validation aliases.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str


class Event(ContentDocument):
    title: str
    date: Timestamp
    time: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    ticketURL: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("ticketURL", "ticketUrl")
    )

    @model_validator(mode="before")
    @classmethod
    def venue_as_location(cls, data: Any) -> Any:
        # Older events stored venue/city instead of a single location
        if isinstance(data, dict) and not data.get("location"):
            parts = [data[k] for k in ("venue", "city") if data.get(k)]
            if parts:
                data = {**data, "location": ", ".join(parts)}
        return data


class Post(ContentDocument):
    title: str
    excerpt: Optional[str] = None
    content: str
    imageURL: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("imageURL", "featuredImageUrl")
    )
    published: bool
    publishDate: Timestamp
    tags: Optional[List[str]] = None

    @model_validator(mode="before")
    @classmethod
    def published_flag(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        # Only a stored boolean true publishes a post; "true", 1 and a legacy
        # status field do not
        return {**data, "published": data.get("published") is True}


_STREAMING_FIELDS = {
    "spotify": "spotifyURL",
    "apple-music": "appleMusicURL",
    "youtube-music": "youtubeURL",
}


class Music(ContentDocument):
    title: str
    artist: Optional[str] = None
    album: Optional[str] = None
    releaseDate: Timestamp = None
    coverImageURL: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("coverImageURL", "coverImageUrl")
    )
    spotifyURL: Optional[str] = None
    appleMusicURL: Optional[str] = None
    youtubeURL: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def streaming_links(cls, data: Any) -> Any:
        if not isinstance(data, dict) or not isinstance(data.get("streamingLinks"), list):
            return data
        data = dict(data)
        for link in data["streamingLinks"]:
            if not isinstance(link, dict):
                continue
            target = _STREAMING_FIELDS.get(link.get("platform"))
            if target and not data.get(target):
                data[target] = link.get("url")
        return data


class Video(ContentDocument):
    title: str
    description: Optional[str] = None
    thumbnailURL: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("thumbnailURL", "thumbnailUrl")
    )
    videoURL: str = Field(validation_alias=AliasChoices("videoURL", "url"))
    publishDate: Timestamp = None


class Profile(ContentDocument):
    name: str = ""
    title: Optional[str] = None
    bio: Optional[str] = None
    tagline: Optional[str] = None
    photoURL: Optional[str] = None
    profileImageURL: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def legacy_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if not data.get("title") and data.get("currentRole"):
            data["title"] = data["currentRole"]
        photos = data.get("photoUrls")
        if not data.get("photoURL") and isinstance(photos, list) and photos:
            data["photoURL"] = photos[0]
        return data


class SocialLink(ContentDocument):
    platform: str
    url: str
    displayName: Optional[str] = None
    order: int = 0


class ContactMessage(ContentDocument):
    name: str
    email: str
    subject: Optional[str] = None
    message: str
    isRead: bool = False
    createdAt: Timestamp = None


class FeaturedSettings(BaseModel):
    """Admin-curated home page picks, stored as the singleton ``settings/featured`` document."""

    model_config = ConfigDict(extra="ignore")

    featuredEventIds: List[str] = Field(default_factory=list)
    featuredPostIds: List[str] = Field(default_factory=list)
    featuredMusicIds: List[str] = Field(default_factory=list)

    def ids_for(self, category: FeaturedCategory) -> List[str]:
        return getattr(self, CATEGORY_FIELDS[category])

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump()


CATEGORY_FIELDS = {
    FeaturedCategory.EVENT: "featuredEventIds",
    FeaturedCategory.POST: "featuredPostIds",
    FeaturedCategory.MUSIC: "featuredMusicIds",
}


class FeaturedContent(BaseModel):
    upcomingEvents: List[Event] = Field(default_factory=list)
    recentPosts: List[Post] = Field(default_factory=list)
    featuredMusic: List[Music] = Field(default_factory=list)
    profile: Optional[Profile] = None


__all__ = [
    "Timestamp",
    "ContentDocument",
    "Event",
    "Post",
    "Music",
    "Video",
    "Profile",
    "SocialLink",
    "ContactMessage",
    "FeaturedSettings",
    "CATEGORY_FIELDS",
    "FeaturedContent",
]
