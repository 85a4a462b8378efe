"""Configuration module."""

from src.config.configuration import (
    AppConfig,
    CatalogConfig,
    ConfigurationError,
    CosmosDBConfig,
    ImageHostingConfig,
    LoggingConfig,
    StorageConfig,
    get_config,
    get_environment,
    load_config,
    reset_config,
)

__all__ = [
    "AppConfig",
    "CatalogConfig",
    "ConfigurationError",
    "CosmosDBConfig",
    "ImageHostingConfig",
    "LoggingConfig",
    "StorageConfig",
    "get_config",
    "get_environment",
    "load_config",
    "reset_config",
]
