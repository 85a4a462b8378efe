"""Admin "Add Product" submission workflow.

The workflow is split in two layers:

- Pure functions (``validate_submission``, ``collect_specifications``,
  ``collect_key_features``, ``assemble_document``) that turn a draft and the
  form toggles into either a validation message or the document to persist.
- ``ProductSubmissionWorkflow``, the stateful form. It owns the draft, the
  dynamic specification/key-feature rows and the toggles, and runs the single
  async submission: validate, upload the image, persist, reset.

Collaborators (product store, image host, system log) are injected so the
workflow can run against fakes in tests.
"""

import dataclasses
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Protocol, Sequence

from src.config.configuration import DEFAULT_PLACEHOLDER_IMAGE_URL
from src.models import (
    CurrentUser,
    ImageFile,
    LogSeverity,
    ProductCategory,
    ProductDraft,
    SpecificationRow,
)

logger = logging.getLogger(__name__)

MSG_REQUIRED_FIELDS = "Please fill all required fields"
MSG_INVALID_CATEGORY = "Please select a valid category"
MSG_INVALID_PRICE = "Please enter a valid price when pricing is enabled"
MSG_MISSING_UNIT = "Please enter a unit when pricing is enabled"
MSG_INVALID_SPECIFICATIONS = "Please add at least one valid specification or remove empty ones"
MSG_INVALID_KEY_FEATURES = "Please add at least one valid key feature or remove empty ones"


class ImageUploader(Protocol):
    async def upload_image(self, image: ImageFile, folder: str) -> str: ...


class SystemLog(Protocol):
    def log(self, message: str, severity: LogSeverity = LogSeverity.INFO) -> None: ...


AddProduct = Callable[[dict[str, Any]], Awaitable[str]]


class SubmissionState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    UPLOADING = "uploading"
    PERSISTING = "persisting"


class SubmissionStatus(str, Enum):
    ACCEPTED = "accepted"  # Product persisted, form reset
    REJECTED = "rejected"  # Validation failed, nothing uploaded or persisted
    FAILED = "failed"  # Store rejected the write, form kept for retry
    BUSY = "busy"  # Another submission is in flight


@dataclass(frozen=True)
class SubmissionResult:
    status: SubmissionStatus
    product_id: Optional[str] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == SubmissionStatus.ACCEPTED


def parse_price(text: str) -> Optional[float]:
    """Parse a price entered as text. Returns None unless it is a finite number."""
    try:
        price = float(text.strip())
    except (AttributeError, ValueError):
        return None
    if not math.isfinite(price):
        return None
    return price


def collect_specifications(rows: Sequence[SpecificationRow]) -> dict[str, str]:
    """Keep rows whose trimmed key and value are both non-empty."""
    specifications: dict[str, str] = {}
    for row in rows:
        key, value = row.key.strip(), row.value.strip()
        if key and value:
            specifications[key] = value
    return specifications


def collect_key_features(rows: Sequence[str]) -> list[str]:
    return [feature.strip() for feature in rows if feature.strip()]


def validate_submission(
    draft: ProductDraft,
    specifications: Sequence[SpecificationRow],
    key_features: Sequence[str],
    advanced_enabled: bool,
    pricing_enabled: bool,
) -> Optional[str]:
    """Check a draft before submission.

    Checks run in order and the first failure wins.

    Returns:
        The user-facing error message, or None if the draft can be submitted.
    """
    if not draft.name.strip() or not draft.description.strip() or not draft.category.strip():
        return MSG_REQUIRED_FIELDS
    if draft.category not in ProductCategory.ids():
        return MSG_INVALID_CATEGORY

    if pricing_enabled:
        price = parse_price(draft.price)
        if price is None or price <= 0:
            return MSG_INVALID_PRICE
        if not draft.unit.strip():
            return MSG_MISSING_UNIT

    if advanced_enabled:
        # A single untouched row is fine; several rows must yield something.
        if len(specifications) > 1 and not collect_specifications(specifications):
            return MSG_INVALID_SPECIFICATIONS
        if len(key_features) > 1 and not collect_key_features(key_features):
            return MSG_INVALID_KEY_FEATURES

    return None


def assemble_document(
    draft: ProductDraft,
    image_url: str,
    specifications: Sequence[SpecificationRow],
    key_features: Sequence[str],
    advanced_enabled: bool,
    pricing_enabled: bool,
    updated_by: str,
    now: datetime,
) -> dict[str, Any]:
    """Build the product document written to the store.

    Price and unit are only present when pricing is enabled; the store does
    not accept empty placeholders for them. With advanced fields disabled the
    specification mapping and key-feature list are always empty.
    """
    document: dict[str, Any] = {
        "name": draft.name.strip(),
        "description": draft.description.strip(),
        "category": draft.category,
        "imageUrl": image_url,
        "featured": draft.featured,
        "inStock": draft.in_stock,
        "createdAt": now,
        "updatedAt": now,
        "updatedBy": updated_by,
        "keyFeatures": collect_key_features(key_features) if advanced_enabled else [],
        "specifications": collect_specifications(specifications) if advanced_enabled else {},
        "showPricing": pricing_enabled,
    }

    if pricing_enabled and draft.price.strip():
        price = parse_price(draft.price)
        if price is not None:
            document["price"] = price
    if pricing_enabled and draft.unit.strip():
        document["unit"] = draft.unit.strip()

    return document


class ProductSubmissionWorkflow:
    """State of one mounted "Add Product" form.

    Only one submission may be in flight at a time; ``is_submitting`` gates
    ``submit()`` and is what the UI uses to disable the submit control.

    Hidden pricing and advanced inputs are kept in the draft while their
    toggle is off, but they are never persisted unless the toggle is on at
    submission time.
    """

    def __init__(
        self,
        add_product: AddProduct,
        image_uploader: Optional[ImageUploader],
        system_log: SystemLog,
        user: Optional[CurrentUser] = None,
        placeholder_image_url: str = DEFAULT_PLACEHOLDER_IMAGE_URL,
        upload_folder: str = "products",
        fallback_user: str = "admin",
        on_product_added: Optional[Callable[[str], None]] = None,
        on_close: Optional[Callable[[], None]] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._add_product = add_product
        self._image_uploader = image_uploader
        self._system_log = system_log
        self._user = user or CurrentUser()
        self._placeholder_image_url = placeholder_image_url
        self._upload_folder = upload_folder
        self._fallback_user = fallback_user
        self._on_product_added = on_product_added
        self._on_close = on_close
        self._clock = clock

        self.draft = ProductDraft()
        self.image: Optional[ImageFile] = None
        self.specifications: list[SpecificationRow] = [SpecificationRow()]
        self.key_features: list[str] = [""]
        self.pricing_enabled = False
        self.advanced_enabled = False
        self.state = SubmissionState.IDLE

    @property
    def is_submitting(self) -> bool:
        return self.state != SubmissionState.IDLE

    @property
    def advanced_fields_visible(self) -> bool:
        """Advanced fields apply only to master admins with the toggle on."""
        return self._user.is_master_admin and self.advanced_enabled

    # Field editing

    def update_field(self, name: str, value: Any) -> None:
        field_names = {f.name for f in dataclasses.fields(ProductDraft)}
        if name not in field_names:
            raise KeyError(f"Unknown product field: {name}")
        if name in ("featured", "in_stock"):
            value = bool(value)
        elif value is None:
            value = ""
        else:
            # Text inputs; a numeric price or unit is kept as its text form
            value = str(value)
        setattr(self.draft, name, value)

    def set_image(self, image: ImageFile) -> None:
        self.image = image

    def clear_image(self) -> None:
        self.image = None

    def set_pricing_enabled(self, enabled: bool) -> None:
        self.pricing_enabled = enabled

    def set_advanced_enabled(self, enabled: bool) -> None:
        self.advanced_enabled = enabled

    def add_specification_row(self) -> None:
        self.specifications.append(SpecificationRow())

    def update_specification(self, index: int, key: Optional[str] = None, value: Optional[str] = None) -> None:
        row = self.specifications[index]
        if key is not None:
            row.key = key
        if value is not None:
            row.value = value

    def remove_specification_row(self, index: int) -> None:
        del self.specifications[index]
        if not self.specifications:
            self.specifications.append(SpecificationRow())

    def add_key_feature_row(self) -> None:
        self.key_features.append("")

    def update_key_feature(self, index: int, value: str) -> None:
        self.key_features[index] = value

    def remove_key_feature_row(self, index: int) -> None:
        del self.key_features[index]
        if not self.key_features:
            self.key_features.append("")

    def reset(self) -> None:
        """Return the form to its empty defaults."""
        self.draft = ProductDraft()
        self.pricing_enabled = False
        self.image = None
        self.specifications = [SpecificationRow()]
        self.key_features = [""]

    def cancel(self) -> bool:
        """Discard the draft and close the form. Not possible while submitting."""
        if self.is_submitting:
            return False
        self.reset()
        if self._on_close:
            self._on_close()
        return True

    # Submission

    async def submit(self) -> SubmissionResult:
        """Validate, upload the image, persist the product and reset the form.

        Returns:
            SubmissionResult describing the outcome. Errors are reported to the
            system log and never raised.
        """
        if self.is_submitting:
            return SubmissionResult(SubmissionStatus.BUSY, message="A submission is already in progress")

        self.state = SubmissionState.VALIDATING
        try:
            advanced = self.advanced_fields_visible
            error = validate_submission(
                self.draft,
                self.specifications,
                self.key_features,
                advanced_enabled=advanced,
                pricing_enabled=self.pricing_enabled,
            )
            if error:
                self._system_log.log(error, LogSeverity.ERROR)
                return SubmissionResult(SubmissionStatus.REJECTED, message=error)

            image_url = await self._resolve_image_url()

            document = assemble_document(
                self.draft,
                image_url=image_url,
                specifications=self.specifications,
                key_features=self.key_features,
                advanced_enabled=advanced,
                pricing_enabled=self.pricing_enabled,
                updated_by=self._user.email or self._fallback_user,
                now=self._clock(),
            )
            self._log_advanced_fields(document, advanced)

            self.state = SubmissionState.PERSISTING
            try:
                product_id = await self._add_product(document)
            except Exception as e:
                message = f"Error adding product: {e}"
                logger.exception(message)
                self._system_log.log(message, LogSeverity.ERROR)
                return SubmissionResult(SubmissionStatus.FAILED, message=message)

            logger.info(f"Product added by user: {document['updatedBy']}")
            self._system_log.log(f"Product {document['name']} added with ID: {product_id}", LogSeverity.SUCCESS)

            self.reset()
            if self._on_product_added:
                self._on_product_added(product_id)
            elif self._on_close:
                self._on_close()

            return SubmissionResult(SubmissionStatus.ACCEPTED, product_id=product_id)
        finally:
            self.state = SubmissionState.IDLE

    async def _resolve_image_url(self) -> str:
        """Upload the selected image; fall back to the placeholder on any failure."""
        if self.image is None:
            return self._placeholder_image_url
        if self._image_uploader is None:
            self._system_log.log("Error uploading image: image hosting is not available", LogSeverity.ERROR)
            return self._placeholder_image_url

        self.state = SubmissionState.UPLOADING
        self._system_log.log(f"Uploading image for product {self.draft.name}...", LogSeverity.INFO)
        try:
            image_url = await self._image_uploader.upload_image(self.image, self._upload_folder)
        except Exception as e:
            logger.warning(f"Image upload failed, using placeholder: {e}")
            self._system_log.log(f"Error uploading image: {e}", LogSeverity.ERROR)
            return self._placeholder_image_url

        self._system_log.log(f"Image uploaded successfully: {image_url}", LogSeverity.SUCCESS)
        return image_url

    def _log_advanced_fields(self, document: dict[str, Any], advanced: bool) -> None:
        spec_count = len(document["specifications"])
        feature_count = len(document["keyFeatures"])
        if spec_count:
            self._system_log.log(f"Added {spec_count} specifications to product", LogSeverity.INFO)
        if feature_count:
            self._system_log.log(f"Added {feature_count} key features to product", LogSeverity.INFO)
        self._system_log.log(f"Advanced toggle is {'ON' if advanced else 'OFF'}", LogSeverity.INFO)
        self._system_log.log(f"Key Features count: {feature_count}", LogSeverity.INFO)
        self._system_log.log(f"Specifications count: {spec_count}", LogSeverity.INFO)
