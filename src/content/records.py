from typing import Iterable, List, Optional, Type, TypeVar

from pydantic import ValidationError

from src.shared.document_store import Document
from src.shared.logging_utils import warning as log_warning
from src.specs.models.domain import ContentDocument

R = TypeVar("R", bound=ContentDocument)


def coerce_document(model: Type[R], doc: Document, collection: str) -> Optional[R]:
    """Validate one stored document, or log and return None if its shape is unusable."""
    try:
        return model.model_validate(doc)
    except ValidationError as exc:
        log_warning(
            None,
            "record:invalid",
            collection=collection,
            itemId=doc.get("id") if isinstance(doc, dict) else None,
            errors=[".".join(str(p) for p in e["loc"]) for e in exc.errors()],
        )
        return None


def coerce_documents(model: Type[R], docs: Iterable[Document], collection: str) -> List[R]:
    records = []
    for doc in docs:
        record = coerce_document(model, doc, collection)
        if record is not None:
            records.append(record)
    return records
