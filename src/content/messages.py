from typing import Any, List

from src.content.records import coerce_document, coerce_documents
from src.shared.crud import CollectionCrud
from src.shared.document_store import DocumentStore, OrderBy, QueryOptions
from src.shared.logging_utils import info as log_info
from src.specs.common.enums import Collection
from src.specs.common.errors import ResourceNotFoundError
from src.specs.models.domain import ContactMessage
from src.specs.models.forms import ContactForm, validate_form

_COLLECTION = Collection.CONTACT_MESSAGES.value


async def submit_contact_message(store: DocumentStore, data: Any) -> str:
    """Validate a contact form submission and store it unread; returns the new id."""
    form = validate_form(ContactForm, data)
    crud = CollectionCrud(store, _COLLECTION)
    doc_id = await crud.create({**form.to_document(), "isRead": False})
    if doc_id is None:
        crud.raise_for_status("create")
    log_info(None, "contact:received", itemId=doc_id)
    return doc_id  # type: ignore[return-value]


async def list_messages(store: DocumentStore) -> List[ContactMessage]:
    """All contact messages, newest first."""
    docs = await store.query_documents(
        _COLLECTION, QueryOptions(order_by=OrderBy("createdAt", "desc"))
    )
    return coerce_documents(ContactMessage, docs, _COLLECTION)


def count_unread(messages: List[ContactMessage]) -> int:
    return sum(1 for m in messages if not m.isRead)


async def toggle_read(store: DocumentStore, message_id: str) -> ContactMessage:
    doc = await store.get_document(_COLLECTION, message_id)
    message = coerce_document(ContactMessage, doc, _COLLECTION) if doc is not None else None
    if message is None:
        raise ResourceNotFoundError(_COLLECTION, message_id)
    crud = CollectionCrud(store, _COLLECTION)
    if not await crud.update(message_id, {"isRead": not message.isRead}):
        crud.raise_for_status("update")
    return message.model_copy(update={"isRead": not message.isRead})
