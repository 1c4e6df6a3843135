"""
Featured settings repository.

The admin's home page picks live in the singleton ``settings/featured``
document. Its absence is valid and means nothing has been curated yet.
"""
from typing import List, Optional

from pydantic import ValidationError

from src.shared.document_store import DocumentStore
from src.shared.logging_utils import info as log_info, warning as log_warning
from src.specs.common.enums import Collection, FeaturedCategory
from src.specs.common.errors import AuthorizationError, FormValidationError
from src.specs.models.domain import CATEGORY_FIELDS, FeaturedSettings
from src.specs.models.forms import MAX_FEATURED_PER_CATEGORY

FEATURED_SETTINGS_ID = "featured"


async def load_featured_settings(store: DocumentStore) -> Optional[FeaturedSettings]:
    """Read the featured settings, or None if none were ever saved.

    A stored document that cannot be read as settings is logged and treated
    as absent. Store failures propagate.
    """
    doc = await store.get_document(Collection.SETTINGS.value, FEATURED_SETTINGS_ID)
    if doc is None:
        return None
    try:
        return FeaturedSettings.model_validate(doc)
    except ValidationError as exc:
        log_warning(None, "settings:malformed", itemId=FEATURED_SETTINGS_ID, error=str(exc))
        return None


async def save_featured_settings(
    store: DocumentStore,
    settings: FeaturedSettings,
    *,
    is_admin: bool,
) -> None:
    """Overwrite the featured settings document (never merged)."""
    if not is_admin:
        raise AuthorizationError()
    await store.set_document(Collection.SETTINGS.value, FEATURED_SETTINGS_ID, settings.to_document())
    log_info(
        None,
        "settings:saved",
        events=len(settings.featuredEventIds),
        posts=len(settings.featuredPostIds),
        music=len(settings.featuredMusicIds),
    )


def toggle_featured(settings: FeaturedSettings, category: FeaturedCategory, item_id: str) -> FeaturedSettings:
    """Return new settings with ``item_id`` added to or removed from a category.

    Adding a fourth pick to a category is rejected.
    """
    current: List[str] = list(settings.ids_for(category))
    if item_id in current:
        current.remove(item_id)
    elif len(current) >= MAX_FEATURED_PER_CATEGORY:
        raise FormValidationError(
            [{"field": category.value, "message": f"You can only feature up to {MAX_FEATURED_PER_CATEGORY} items"}]
        )
    else:
        current.append(item_id)
    return settings.model_copy(update={CATEGORY_FIELDS[category]: current})
