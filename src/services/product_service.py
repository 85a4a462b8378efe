"""Product data service backing the catalog and the admin add-product form."""

import logging
import sqlite3
import uuid
from datetime import datetime
from typing import Any, Optional

from azure.core.exceptions import AzureError

from src.config import AppConfig, get_config
from src.services.document_store import DocumentStore

logger = logging.getLogger(__name__)


class ProductStoreError(Exception):
    """Raised when a product could not be written to the store."""
    pass


class ProductService:
    """Creates and reads product documents.

    Backend is selected by ``storage.backend`` in the configuration:
    ``sqlite`` for local development, ``cosmosdb`` for production.
    """

    def __init__(self, config: Optional[AppConfig] = None):
        config = config or get_config()
        container = config.cosmosdb.products_container if config.cosmosdb else "products"
        self._store = DocumentStore("products", container, config)

    @property
    def backend(self) -> str:
        return self._store.backend

    async def add_product(self, document: dict[str, Any]) -> str:
        """Persist a new product document.

        Args:
            document: Assembled product document. Datetime values are stored
                as ISO 8601 strings.

        Returns:
            The generated product id.

        Raises:
            ProductStoreError: If the backend rejects the write.
        """
        product_id = str(uuid.uuid4())
        stored = {key: _to_storage(value) for key, value in document.items() if key != "id"}

        try:
            await self._store.insert(product_id, stored)
        except (sqlite3.Error, AzureError) as e:
            logger.error(f"Failed to store product '{document.get('name')}': {e}")
            raise ProductStoreError(f"Failed to store product: {e}") from e

        logger.info(f"Stored product {product_id} in category {document.get('category')}")
        return product_id

    async def get_product(self, product_id: str) -> Optional[dict[str, Any]]:
        return await self._store.get(product_id)

    async def list_products(self, category: Optional[str] = None) -> list[dict[str, Any]]:
        """List products, newest first, optionally limited to one category."""
        if category is None:
            products = await self._store.list()
        else:
            products = await self._store.list("category", category)
        return sorted(products, key=lambda product: product.get("createdAt", ""), reverse=True)

    async def close(self) -> None:
        await self._store.close()

    async def __aenter__(self) -> "ProductService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await self.close()
        return False


def _to_storage(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value
