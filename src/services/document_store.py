"""Document storage with a SQLite / Cosmos DB backend toggle.

The catalog website stores products and achievements as JSON documents.
Development runs against a local SQLite file; production writes the same
documents to Cosmos DB containers.
"""

import asyncio
import logging
import re
from typing import Any, Optional

from azure.cosmos.exceptions import CosmosResourceNotFoundError

from src.clients import CosmosDBClient, SqliteClient
from src.config import AppConfig

logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ("sqlite", "cosmosdb")

# Cosmos DB adds these to every item; they are not part of the document.
_SYSTEM_FIELDS = ("_rid", "_self", "_etag", "_attachments", "_ts")

_COLLECTION_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class DocumentStore:
    """Stores JSON documents of one collection in the configured backend."""

    def __init__(self, collection: str, container_name: str, config: AppConfig):
        """Initialize the store.

        Args:
            collection: SQLite table name for the collection.
            container_name: Cosmos DB container name for the collection.
            config: Application configuration (selects the backend).

        Raises:
            ValueError: If the backend is unknown or the collection name is invalid.
        """
        backend = config.storage.backend
        if backend not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"Unknown storage backend '{backend}'. Expected one of: {', '.join(SUPPORTED_BACKENDS)}"
            )
        if not _COLLECTION_NAME.match(collection):
            raise ValueError(f"Invalid collection name: {collection}")

        self._backend = backend
        self._collection = collection
        self._sqlite_client: Optional[SqliteClient] = None
        self._cosmosdb_client: Optional[CosmosDBClient] = None
        self._partition_key_path = "/id"
        self._connect_lock = asyncio.Lock()

        if backend == "sqlite":
            self._sqlite_client = SqliteClient(config.storage.sqlite_path)
            self._ensure_table_exists()
        else:
            cosmos = config.cosmosdb
            if cosmos is None:
                raise ValueError("Cosmos DB backend selected but no cosmosdb configuration is loaded")
            self._partition_key_path = cosmos.partition_key_path
            self._cosmosdb_client = CosmosDBClient(
                endpoint=cosmos.endpoint,
                key=cosmos.key,
                database_name=cosmos.database_name,
                container_name=container_name,
                partition_key_path=cosmos.partition_key_path,
            )

    @property
    def backend(self) -> str:
        return self._backend

    def _ensure_table_exists(self) -> None:
        self._sqlite_client.ensure_document_table(self._collection)
        logger.debug(f"SQLite table '{self._collection}' initialized")

    async def _cosmos(self) -> CosmosDBClient:
        """Connect on first use. Concurrent first callers share one connection."""
        if not self._cosmosdb_client.is_connected:
            async with self._connect_lock:
                if not self._cosmosdb_client.is_connected:
                    await self._cosmosdb_client.connect()
        return self._cosmosdb_client

    async def insert(self, doc_id: str, document: dict[str, Any]) -> None:
        """Insert a new document.

        Args:
            doc_id: Document identifier.
            document: JSON-serialisable document body (without id).
        """
        if self._sqlite_client is not None:
            await asyncio.to_thread(self._sqlite_client.insert_document, self._collection, doc_id, document)
            return

        client = await self._cosmos()
        await client.create_item({**document, "id": doc_id})

    async def get(self, doc_id: str) -> Optional[dict[str, Any]]:
        """Get a document by id, or None if it does not exist."""
        if self._sqlite_client is not None:
            return await asyncio.to_thread(self._sqlite_client.select_document, self._collection, doc_id)

        client = await self._cosmos()
        if self._partition_key_path == "/id":
            try:
                item = await client.read_item(doc_id, partition_key=doc_id)
            except CosmosResourceNotFoundError:
                return None
            return _strip_system_fields(item)

        items = await client.query_items(
            "SELECT * FROM c WHERE c.id = @id",
            parameters=[{"name": "@id", "value": doc_id}],
        )
        return _strip_system_fields(items[0]) if items else None

    async def list(self, field: Optional[str] = None, value: Any = None) -> list[dict[str, Any]]:
        """List documents, optionally filtered by a top-level field. Order is unspecified."""
        if self._sqlite_client is not None:
            return await asyncio.to_thread(self._sqlite_client.select_documents, self._collection, field, value)

        client = await self._cosmos()
        if field is None:
            items = await client.query_items("SELECT * FROM c")
        else:
            if not _COLLECTION_NAME.match(field):
                raise ValueError(f"Invalid field name: {field}")
            items = await client.query_items(
                f"SELECT * FROM c WHERE c.{field} = @value",
                parameters=[{"name": "@value", "value": value}],
            )
        return [_strip_system_fields(item) for item in items]

    async def close(self) -> None:
        if self._sqlite_client is not None:
            self._sqlite_client.close()
        if self._cosmosdb_client is not None:
            await self._cosmosdb_client.close()


def _strip_system_fields(item: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in item.items() if key not in _SYSTEM_FIELDS}
