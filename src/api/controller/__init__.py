"""API controllers."""

from src.api.controller.catalog_controller import router as catalog_router
from src.api.controller.product_controller import router as product_router

__all__ = ["catalog_router", "product_router"]
