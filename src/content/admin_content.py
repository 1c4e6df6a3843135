"""Admin-side content management: validated writes through the generic CRUD wrapper."""
from typing import Any, Dict, List, Type

from src.shared.crud import CollectionCrud
from src.shared.document_store import Document, DocumentStore
from src.specs.common.datetime_utils import utc_now
from src.specs.common.enums import Collection
from src.specs.common.errors import ResourceNotFoundError
from src.specs.models.forms import FORM_MODELS, ContentForm, validate_form

PROFILE_ID = "main"


def form_for(collection: str) -> Type[ContentForm]:
    """Form model for an admin-writable collection name."""
    try:
        model = FORM_MODELS.get(Collection(collection))
    except ValueError:
        model = None
    if model is None:
        raise ResourceNotFoundError("collection", collection)
    return model


async def list_documents(store: DocumentStore, collection: str) -> List[Document]:
    form_for(collection)
    crud = CollectionCrud(store, collection)
    docs = await crud.get_all()
    crud.raise_for_status("get_all")
    return docs


async def create_document(store: DocumentStore, collection: str, data: Any) -> str:
    """Validate and store a new document; the profile is always written under ``main``."""
    form = validate_form(form_for(collection), data)
    if collection == Collection.PROFILE.value:
        return await save_profile(store, form.to_document())
    crud = CollectionCrud(store, collection)
    doc_id = await crud.create(form.to_document())
    if doc_id is None:
        crud.raise_for_status("create")
    return doc_id  # type: ignore[return-value]


async def save_profile(store: DocumentStore, data: Dict[str, Any]) -> str:
    existing = await store.get_document(Collection.PROFILE.value, PROFILE_ID)
    if existing is None:
        now = utc_now()
        await store.set_document(
            Collection.PROFILE.value, PROFILE_ID, {**data, "createdAt": now, "updatedAt": now}
        )
        return PROFILE_ID
    crud = CollectionCrud(store, Collection.PROFILE.value)
    if not await crud.update(PROFILE_ID, data):
        crud.raise_for_status("update")
    return PROFILE_ID


async def update_document(store: DocumentStore, collection: str, doc_id: str, data: Any) -> None:
    """Replace the editable fields of an existing document; cleared optional fields are stored as null."""
    form = validate_form(form_for(collection), data)
    crud = CollectionCrud(store, collection)
    if not await crud.update(doc_id, form.model_dump(mode="json")):
        crud.raise_for_status("update")


async def delete_document(store: DocumentStore, collection: str, doc_id: str) -> None:
    form_for(collection)
    crud = CollectionCrud(store, collection)
    if not await crud.remove(doc_id):
        crud.raise_for_status("remove")
