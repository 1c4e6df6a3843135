"""
Document store interface.

Collections hold loosely-typed field maps keyed by a store-assigned id. Every
document handed back to callers is a plain dict with its ``id`` merged in.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple

Document = Dict[str, Any]


@dataclass(frozen=True)
class OrderBy:
    field: str
    direction: Literal["asc", "desc"] = "asc"


@dataclass(frozen=True)
class Where:
    """Equality filter: ``field == value``."""

    field: str
    value: Any


@dataclass(frozen=True)
class QueryOptions:
    order_by: Optional[OrderBy] = None
    where: Tuple[Where, ...] = field(default_factory=tuple)
    limit: Optional[int] = None


class DocumentStore(ABC):
    """Async gateway over named collections."""

    @abstractmethod
    async def get_all_documents(self, collection: str) -> List[Document]:
        """Return every document in the collection, in the store's default order."""
        ...

    @abstractmethod
    async def query_documents(self, collection: str, options: QueryOptions) -> List[Document]:
        """Return documents matching the filters, ordered and limited server-side."""
        ...

    @abstractmethod
    async def get_document(self, collection: str, doc_id: str) -> Optional[Document]:
        """Return a document by id, or None if it does not exist."""
        ...

    @abstractmethod
    async def set_document(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        """Create or fully overwrite the document with the given id."""
        ...

    @abstractmethod
    async def add_document(self, collection: str, data: Dict[str, Any]) -> str:
        """Create a document with a store-assigned id and return that id."""
        ...

    @abstractmethod
    async def update_document(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        """Merge fields into an existing document.

        Raises:
            ResourceNotFoundError: If the document does not exist.
        """
        ...

    @abstractmethod
    async def delete_document(self, collection: str, doc_id: str) -> None:
        """Delete a document; deleting a missing document is not an error."""
        ...
