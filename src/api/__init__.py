"""FastAPI application setup."""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.controller import catalog_router, product_router
from src.catalog.submission import ImageUploader
from src.clients import CloudinaryImageClient
from src.config import AppConfig, get_config, get_environment
from src.services import AchievementService, ProductService, SystemLogService

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Services shared by all requests of one application instance."""

    config: AppConfig
    products: ProductService
    achievements: AchievementService
    system_log: SystemLogService
    image_uploader: Optional[ImageUploader]


def build_services(config: AppConfig) -> ServiceContainer:
    image_config = config.image_hosting
    return ServiceContainer(
        config=config,
        products=ProductService(config),
        achievements=AchievementService(config),
        system_log=SystemLogService(capacity=config.catalog.system_log_capacity),
        image_uploader=CloudinaryImageClient(
            cloud_name=image_config.cloud_name,
            upload_preset=image_config.upload_preset,
            base_url=image_config.base_url,
            timeout_seconds=image_config.timeout_seconds,
        ),
    )


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Configuration is loaded at startup (not import time) unless passed in.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app_config = config or get_config()
        services = build_services(app_config)
        app.state.services = services
        logger.info(
            f"Catalog API started in '{get_environment()}' environment "
            f"with '{app_config.storage.backend}' storage backend"
        )
        try:
            yield
        finally:
            await services.products.close()
            await services.achievements.close()
            if isinstance(services.image_uploader, CloudinaryImageClient):
                services.image_uploader.close()

    app = FastAPI(
        title="OCC Catalog API",
        description="Catalog, achievements and admin product management for the OCC World Trade website",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS for the website frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production: specify the website origin
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(catalog_router)
    app.include_router(product_router)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
