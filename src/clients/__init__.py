"""Client modules for external services."""

from src.clients.sqlite_client import SqliteClient
from src.clients.cosmosdb_client import CosmosDBClient
from src.clients.image_upload_client import CloudinaryImageClient, ImageUploadError

__all__ = [
    "SqliteClient",
    "CosmosDBClient",
    "CloudinaryImageClient",
    "ImageUploadError",
]
