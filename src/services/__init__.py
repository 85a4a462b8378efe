"""Service layer: document storage, products, achievements and the system log."""

from src.services.achievement_service import AchievementService
from src.services.document_store import DocumentStore
from src.services.product_service import ProductService, ProductStoreError
from src.services.system_log_service import SystemLogService

__all__ = [
    "AchievementService",
    "DocumentStore",
    "ProductService",
    "ProductStoreError",
    "SystemLogService",
]
