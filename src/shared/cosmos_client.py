# Cosmos DB implementation of the document store

import os
import re
import time
import uuid
import logging
import backoff
from dataclasses import replace
from functools import lru_cache
from typing import Optional, List, Dict, Any, Tuple
from azure.core.exceptions import AzureError
from azure.cosmos import exceptions
from azure.cosmos.aio import CosmosClient, ContainerProxy
from src.shared.config import get_site_config
from src.shared.document_store import Document, DocumentStore, QueryOptions
from src.shared.logging_utils import error as log_error
from src.specs.common.errors import (
    ResourceNotFoundError,
    RetryableStoreError,
    StoreUnavailableError,
)

SYSTEM_PROPERTIES = frozenset({"_rid", "_self", "_etag", "_attachments", "_ts"})
_FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _field(name: str) -> str:
    if not _FIELD_NAME.match(name):
        raise ValueError(f"Invalid field name for query: {name!r}")
    return f'c["{name}"]'


def build_query(options: QueryOptions) -> Tuple[str, List[Dict[str, Any]]]:
    """
    Compile QueryOptions into a parameterised Cosmos SQL query

    Args:
        options: Equality filters, ordering and limit to apply server-side

    Returns:
        The query text and its parameter list
    """
    parameters: List[Dict[str, Any]] = []
    query = "SELECT * FROM c"
    if options.limit is not None:
        query = "SELECT TOP @limit * FROM c"
        parameters.append({"name": "@limit", "value": options.limit})

    clauses = []
    for i, where in enumerate(options.where):
        name = f"@w{i}"
        clauses.append(f"{_field(where.field)} = {name}")
        parameters.append({"name": name, "value": where.value})
    if clauses:
        query += " WHERE " + " AND ".join(clauses)

    if options.order_by is not None:
        direction = "DESC" if options.order_by.direction == "desc" else "ASC"
        query += f" ORDER BY {_field(options.order_by.field)} {direction}"
    return query, parameters


def strip_system_properties(item: Dict[str, Any]) -> Document:
    return {k: v for k, v in item.items() if k not in SYSTEM_PROPERTIES}


def _translate(exc: Exception, operation: str, collection: str) -> StoreUnavailableError:
    details = {"operation": operation, "collection": collection}
    if isinstance(exc, exceptions.CosmosHttpResponseError):
        details["statusCode"] = exc.status_code
        if exc.status_code in (429, 503):  # Too Many Requests or Service Unavailable
            return RetryableStoreError(f"Retryable error during {operation} on '{collection}': {exc}", details)
    return StoreUnavailableError(f"Error during {operation} on '{collection}': {exc}", details)


class CosmosDocumentStore(DocumentStore):
    # Max retries and timeout configuration
    MAX_RETRIES = 3
    OPERATION_TIMEOUT = 10.0    # 10s

    def __init__(
        self,
        connection_string: Optional[str] = None,
        database_name: Optional[str] = None,
        client: Optional[CosmosClient] = None,
    ):
        """Initialize the Cosmos DB client with connection settings and retry policy"""
        config = get_site_config()
        self.connection_string = connection_string or config.cosmos_connection_string
        self.database_name = database_name or config.cosmos_database

        if client is None:
            # Explicit arguments win over the environment
            replace(
                config,
                cosmos_connection_string=self.connection_string,
                cosmos_database=self.database_name,
            ).require_cosmos()
            client = CosmosClient.from_connection_string(
                self.connection_string,
                retry_total=self.MAX_RETRIES
            )
        self.client = client
        self.database = self.client.get_database_client(self.database_name)

    def get_container(self, collection: str) -> ContainerProxy:
        """
        Get a container by collection name with environment variable override

        Args:
            collection: Logical collection name (e.g. 'contactMessages')

        Returns:
            ContainerProxy for the container
        """
        env_container_name = os.environ.get(f"COSMOS_DB_CONTAINER_{collection.upper()}")
        return self.database.get_container_client(env_container_name or collection)

    @backoff.on_exception(
        backoff.expo,
        RetryableStoreError,
        max_tries=MAX_RETRIES,
        max_time=OPERATION_TIMEOUT
    )
    async def _query(self, collection: str, query: str, parameters: List[Dict[str, Any]]) -> List[Document]:
        start_time = time.time()
        container = self.get_container(collection)
        try:
            items = [
                item async for item in container.query_items(query=query, parameters=parameters)
            ]
        except AzureError as e:
            log_error(None, "store:query_failed", collection=collection, query=query, error=str(e))
            raise _translate(e, "query", collection) from e
        logging.debug(
            f"Retrieved {len(items)} items from '{collection}' in {time.time() - start_time:.2f}s"
        )
        return [strip_system_properties(item) for item in items]

    async def get_all_documents(self, collection: str) -> List[Document]:
        return await self._query(collection, "SELECT * FROM c", [])

    async def query_documents(self, collection: str, options: QueryOptions) -> List[Document]:
        if options.limit == 0:
            return []
        query, parameters = build_query(options)
        return await self._query(collection, query, parameters)

    async def get_document(self, collection: str, doc_id: str) -> Optional[Document]:
        # Query by id so no assumption is made about the container's partition key
        items = await self._query(
            collection,
            "SELECT * FROM c WHERE c.id = @id",
            [{"name": "@id", "value": doc_id}],
        )
        if not items:
            logging.debug(f"Item not found: {collection}/{doc_id}")
            return None
        return items[0]

    @backoff.on_exception(
        backoff.expo,
        RetryableStoreError,
        max_tries=MAX_RETRIES,
        max_time=OPERATION_TIMEOUT
    )
    async def set_document(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        container = self.get_container(collection)
        try:
            await container.upsert_item(body={**data, "id": doc_id})
        except AzureError as e:
            log_error(None, "store:set_failed", collection=collection, itemId=doc_id, error=str(e))
            raise _translate(e, "set", collection) from e

    @backoff.on_exception(
        backoff.expo,
        RetryableStoreError,
        max_tries=MAX_RETRIES,
        max_time=OPERATION_TIMEOUT
    )
    async def add_document(self, collection: str, data: Dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex
        container = self.get_container(collection)
        try:
            await container.create_item(body={**data, "id": doc_id})
        except AzureError as e:
            log_error(None, "store:add_failed", collection=collection, error=str(e))
            raise _translate(e, "add", collection) from e
        return doc_id

    async def update_document(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        existing = await self.get_document(collection, doc_id)
        if existing is None:
            raise ResourceNotFoundError(collection, doc_id)
        await self.set_document(collection, doc_id, {**existing, **data})

    @backoff.on_exception(
        backoff.expo,
        RetryableStoreError,
        max_tries=MAX_RETRIES,
        max_time=OPERATION_TIMEOUT
    )
    async def delete_document(self, collection: str, doc_id: str) -> None:
        container = self.get_container(collection)
        try:
            await container.delete_item(item=doc_id, partition_key=doc_id)
        except exceptions.CosmosResourceNotFoundError:
            # Item doesn't exist, treat as success but log for tracking
            logging.info(f"Item '{doc_id}' not found during delete - already deleted")
        except AzureError as e:
            log_error(None, "store:delete_failed", collection=collection, itemId=doc_id, error=str(e))
            raise _translate(e, "delete", collection) from e


# Singleton instance with caching
@lru_cache(maxsize=1)
def get_document_store() -> DocumentStore:
    """Get or create the singleton CosmosDocumentStore instance"""
    return CosmosDocumentStore()
