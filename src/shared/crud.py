"""
Generic create/update/remove/list wrapper over one collection.

Each operation keeps its own loading/error status and stamps ``createdAt`` /
``updatedAt`` on writes. Store and not-found failures are recorded on the
operation's status and reported as ``None`` / ``False`` rather than raised.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from src.shared.document_store import Document, DocumentStore
from src.shared.logging_utils import error as log_error, info as log_info
from src.specs.common.datetime_utils import utc_now
from src.specs.common.errors import PortfolioError


@dataclass
class OperationStatus:
    loading: bool = False
    error: Optional[str] = None
    exception: Optional[PortfolioError] = None

    def start(self) -> None:
        self.loading = True
        self.error = None
        self.exception = None

    def fail(self, exc: PortfolioError) -> None:
        self.error = str(exc)
        self.exception = exc


class CollectionCrud:
    OPERATIONS = ("create", "update", "remove", "get_all")

    def __init__(self, store: DocumentStore, collection: str):
        self.store = store
        self.collection = collection
        self.status: Dict[str, OperationStatus] = {op: OperationStatus() for op in self.OPERATIONS}

    def raise_for_status(self, op: str) -> None:
        """Re-raise the error recorded by the last call of ``op``, if any."""
        exc = self.status[op].exception
        if exc is not None:
            raise exc

    def _failed(self, op: str, exc: PortfolioError, **dims: Any) -> None:
        self.status[op].fail(exc)
        log_error(None, f"crud:{op}_failed", collection=self.collection, code=exc.code, error=str(exc), **dims)

    async def create(self, data: Dict[str, Any]) -> Optional[str]:
        status = self.status["create"]
        status.start()
        now = utc_now()
        try:
            doc_id = await self.store.add_document(
                self.collection, {**data, "createdAt": now, "updatedAt": now}
            )
        except PortfolioError as exc:
            self._failed("create", exc)
            return None
        finally:
            status.loading = False
        log_info(None, "crud:created", collection=self.collection, itemId=doc_id)
        return doc_id

    async def update(self, doc_id: str, data: Dict[str, Any]) -> bool:
        status = self.status["update"]
        status.start()
        try:
            await self.store.update_document(
                self.collection, doc_id, {**data, "updatedAt": utc_now()}
            )
        except PortfolioError as exc:
            self._failed("update", exc, itemId=doc_id)
            return False
        finally:
            status.loading = False
        return True

    async def remove(self, doc_id: str) -> bool:
        status = self.status["remove"]
        status.start()
        try:
            await self.store.delete_document(self.collection, doc_id)
        except PortfolioError as exc:
            self._failed("remove", exc, itemId=doc_id)
            return False
        finally:
            status.loading = False
        return True

    async def get_all(self) -> List[Document]:
        status = self.status["get_all"]
        status.start()
        try:
            return await self.store.get_all_documents(self.collection)
        except PortfolioError as exc:
            self._failed("get_all", exc)
            return []
        finally:
            status.loading = False
