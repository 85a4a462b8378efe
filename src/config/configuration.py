"""Configuration module for the OCC catalog service.

Loads settings from environment-specific config files:
- APP_ENV=dev  → config_dev.yaml (SQLite backend, local development)
- APP_ENV=test → config_test.yaml (CosmosDB backend, production-like testing)
- Default      → config.yaml

Secrets (Cosmos DB key, Cloudinary settings) are loaded from .env file.
Fails fast with clear error messages if required configuration is missing.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv


DEFAULT_PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/300x300?text=Product+Image"


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _get_project_root() -> Path:
    """Get the project root directory (where config.yaml lives)."""
    # Navigate from src/config/ up to project root
    return Path(__file__).parent.parent.parent


def _get_config_filename() -> str:
    """Get config filename based on APP_ENV environment variable.

    Returns:
        Config filename:
        - APP_ENV=dev  → config_dev.yaml
        - APP_ENV=test → config_test.yaml
        - Default      → config.yaml
    """
    app_env = os.environ.get("APP_ENV", "").lower()

    if app_env == "dev":
        return "config_dev.yaml"
    elif app_env == "test":
        return "config_test.yaml"
    else:
        return "config.yaml"


def _load_yaml_config() -> dict:
    """Load configuration from environment-specific config file."""
    config_filename = _get_config_filename()
    config_path = _get_project_root() / config_filename

    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}. "
            f"Set APP_ENV to 'dev' or 'test', or create {config_filename}."
        )

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def _get_required_env(key: str) -> str:
    """Get required environment variable or raise ConfigurationError."""
    value = os.environ.get(key)
    if not value:
        raise ConfigurationError(
            f"Required environment variable '{key}' is not set. "
            f"Please add it to your .env file."
        )
    return value


def _get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get optional environment variable with default."""
    return os.environ.get(key, default)


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""
    level: str


@dataclass(frozen=True)
class StorageConfig:
    """Document storage configuration with backend toggle."""
    backend: str  # "sqlite" or "cosmosdb"
    sqlite_path: str


@dataclass(frozen=True)
class CosmosDBConfig:
    """Azure Cosmos DB configuration for products and achievements."""
    endpoint: str
    key: str
    database_name: str
    products_container: str
    achievements_container: str
    partition_key_path: str


@dataclass(frozen=True)
class ImageHostingConfig:
    """Cloudinary image hosting configuration."""
    cloud_name: str
    upload_preset: str
    base_url: str
    folder: str
    timeout_seconds: float


@dataclass(frozen=True)
class CatalogConfig:
    """Product catalog defaults."""
    placeholder_image_url: str
    fallback_user: str
    system_log_capacity: int


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration container."""
    logging: LoggingConfig
    storage: StorageConfig
    image_hosting: ImageHostingConfig
    catalog: CatalogConfig
    cosmosdb: Optional[CosmosDBConfig]  # Only required when storage.backend == "cosmosdb"


def load_config() -> AppConfig:
    """
    Load and validate all application configuration.

    Loads from the YAML config file for non-sensitive settings and .env for secrets.
    Fails fast if required configuration is missing.

    Returns:
        AppConfig: Validated application configuration.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    # Load environment variables from .env file
    load_dotenv()

    # Load YAML configuration
    yaml_config = _load_yaml_config()

    # Build Logging config
    logging_section = yaml_config.get("logging", {})

    logging_config = LoggingConfig(
        level=logging_section.get("level", "INFO"),
    )

    # Build Storage config
    storage_section = yaml_config.get("storage", {})
    storage_backend = storage_section.get("backend", "sqlite")

    storage_config = StorageConfig(
        backend=storage_backend,
        sqlite_path=storage_section.get("sqlite_path", "catalog.db"),
    )

    # Build image hosting config
    image_section = yaml_config.get("image_hosting", {})

    image_hosting_config = ImageHostingConfig(
        cloud_name=image_section.get("cloud_name") or _get_optional_env("CLOUDINARY_CLOUD_NAME", ""),
        upload_preset=image_section.get("upload_preset") or _get_optional_env("CLOUDINARY_UPLOAD_PRESET", ""),
        base_url=image_section.get("base_url", "https://api.cloudinary.com/v1_1"),
        folder=image_section.get("folder", "products"),
        timeout_seconds=float(image_section.get("timeout_seconds", 30)),
    )

    # Build Catalog config
    catalog_section = yaml_config.get("catalog", {})

    catalog_config = CatalogConfig(
        placeholder_image_url=catalog_section.get("placeholder_image_url", DEFAULT_PLACEHOLDER_IMAGE_URL),
        fallback_user=catalog_section.get("fallback_user", "admin"),
        system_log_capacity=int(catalog_section.get("system_log_capacity", 100)),
    )

    # Build CosmosDB config (only if backend is cosmosdb)
    cosmosdb_config: Optional[CosmosDBConfig] = None
    if storage_backend == "cosmosdb":
        cosmosdb_section = yaml_config.get("cosmosdb", {})
        cosmosdb_config = CosmosDBConfig(
            endpoint=_get_required_env("COSMOSDB_ENDPOINT"),
            key=_get_required_env("COSMOSDB_KEY"),
            database_name=cosmosdb_section.get("database_name", "occ_catalog"),
            products_container=cosmosdb_section.get("products_container", "products"),
            achievements_container=cosmosdb_section.get("achievements_container", "achievements"),
            partition_key_path=cosmosdb_section.get("partition_key_path", "/id"),
        )

    return AppConfig(
        logging=logging_config,
        storage=storage_config,
        image_hosting=image_hosting_config,
        catalog=catalog_config,
        cosmosdb=cosmosdb_config,
    )


# Module-level singleton for convenience
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the application configuration singleton.

    Lazy-loads configuration on first access.
    Config file is selected based on APP_ENV environment variable.

    Returns:
        AppConfig: Application configuration.

    Raises:
        ConfigurationError: If required configuration is missing.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def get_environment() -> str:
    """Get current environment name.

    Returns:
        'dev', 'test', or 'default' based on APP_ENV.
    """
    app_env = os.environ.get("APP_ENV", "").lower()
    return app_env if app_env in ("dev", "test") else "default"


def reset_config() -> None:
    """Reset the config singleton. Useful for testing."""
    global _config
    _config = None
