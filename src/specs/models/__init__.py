from __future__ import annotations

from typing import Dict, Type

from pydantic import BaseModel

from .domain import (
    ContactMessage,
    Event,
    FeaturedContent,
    FeaturedSettings,
    Music,
    Post,
    Profile,
    SocialLink,
    Video,
)
from .forms import (
    ContactForm,
    EventForm,
    FeaturedSettingsForm,
    MusicForm,
    PostForm,
    ProfileForm,
    SocialLinkForm,
    VideoForm,
)
from .http import (
    DocumentListResponse,
    ErrorResponse,
    MessagesResponse,
    MutationResponse,
    UploadResponse,
)
from .queries import (
    EventList,
    GetFeaturedContentRequest,
    LimitRequest,
    MusicList,
    NoVariables,
    PostList,
    ProfileResult,
    QueryRequest,
    QueryResponse,
    SocialLinkList,
    VideoList,
)


# Registry mapping output schema filenames to models for generation
SCHEMA_MODELS: Dict[str, Type[BaseModel]] = {
    "event.schema.json": Event,
    "post.schema.json": Post,
    "music.schema.json": Music,
    "video.schema.json": Video,
    "profile.schema.json": Profile,
    "social_link.schema.json": SocialLink,
    "contact_message.schema.json": ContactMessage,
    "featured_settings.document.schema.json": FeaturedSettings,
    "featured_content.schema.json": FeaturedContent,
    "get_featured_content.request.schema.json": GetFeaturedContentRequest,
    "limit.request.schema.json": LimitRequest,
    "no_variables.request.schema.json": NoVariables,
    "event_list.result.schema.json": EventList,
    "post_list.result.schema.json": PostList,
    "music_list.result.schema.json": MusicList,
    "video_list.result.schema.json": VideoList,
    "social_link_list.result.schema.json": SocialLinkList,
    "profile.result.schema.json": ProfileResult,
    "query.request.schema.json": QueryRequest,
    "query.response.schema.json": QueryResponse,
    "contact.form.schema.json": ContactForm,
    "event.form.schema.json": EventForm,
    "post.form.schema.json": PostForm,
    "music.form.schema.json": MusicForm,
    "video.form.schema.json": VideoForm,
    "profile.form.schema.json": ProfileForm,
    "social_link.form.schema.json": SocialLinkForm,
    "featured_settings.form.schema.json": FeaturedSettingsForm,
    "error.response.schema.json": ErrorResponse,
    "mutation.response.schema.json": MutationResponse,
    "document_list.response.schema.json": DocumentListResponse,
    "messages.response.schema.json": MessagesResponse,
    "upload.response.schema.json": UploadResponse,
}

__all__ = [
    "ContactMessage",
    "Event",
    "FeaturedContent",
    "FeaturedSettings",
    "Music",
    "Post",
    "Profile",
    "SocialLink",
    "Video",
    "ContactForm",
    "EventForm",
    "FeaturedSettingsForm",
    "MusicForm",
    "PostForm",
    "ProfileForm",
    "SocialLinkForm",
    "VideoForm",
    "DocumentListResponse",
    "ErrorResponse",
    "MessagesResponse",
    "MutationResponse",
    "UploadResponse",
    "EventList",
    "GetFeaturedContentRequest",
    "LimitRequest",
    "MusicList",
    "NoVariables",
    "PostList",
    "ProfileResult",
    "QueryRequest",
    "QueryResponse",
    "SocialLinkList",
    "VideoList",
    "SCHEMA_MODELS",
]
