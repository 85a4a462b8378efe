"""Shared fixtures: SQLite-backed configuration and fake collaborators."""

import pytest

from src.config import (
    AppConfig,
    CatalogConfig,
    ImageHostingConfig,
    LoggingConfig,
    StorageConfig,
)
from src.models import LogSeverity

PLACEHOLDER = "https://via.placeholder.com/300x300?text=Product+Image"


@pytest.fixture
def sqlite_config(tmp_path) -> AppConfig:
    """App configuration using a temporary SQLite file."""
    return AppConfig(
        logging=LoggingConfig(level="DEBUG"),
        storage=StorageConfig(backend="sqlite", sqlite_path=str(tmp_path / "catalog_test.db")),
        image_hosting=ImageHostingConfig(
            cloud_name="test-cloud",
            upload_preset="test-preset",
            base_url="https://api.cloudinary.test/v1_1",
            folder="products",
            timeout_seconds=5,
        ),
        catalog=CatalogConfig(
            placeholder_image_url=PLACEHOLDER,
            fallback_user="admin",
            system_log_capacity=50,
        ),
        cosmosdb=None,
    )


class RecordingLog:
    """System log double that keeps (message, severity) pairs."""

    def __init__(self):
        self.entries = []

    def log(self, message, severity=LogSeverity.INFO):
        self.entries.append((message, LogSeverity(severity)))

    def messages(self, severity):
        return [message for message, entry_severity in self.entries if entry_severity == severity]


class RecordingStore:
    """add_product double that records documents and can be told to fail."""

    def __init__(self, fail_with=None):
        self.documents = []
        self.fail_with = fail_with

    async def add_product(self, document):
        if self.fail_with is not None:
            raise self.fail_with
        self.documents.append(document)
        return f"product-{len(self.documents)}"


class FakeUploader:
    def __init__(self, url="https://res.cloudinary.com/test/image/upload/products/rice.jpg", fail_with=None):
        self.url = url
        self.fail_with = fail_with
        self.calls = []

    async def upload_image(self, image, folder):
        self.calls.append((image.filename, folder))
        if self.fail_with is not None:
            raise self.fail_with
        return self.url


@pytest.fixture
def system_log():
    return RecordingLog()


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def uploader():
    return FakeUploader()
