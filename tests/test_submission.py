"""Tests for the add-product submission workflow.

These tests verify:
- Validation order and messages
- Document assembly (pricing omission, advanced field filtering)
- Image upload fallback to the placeholder
- Form reset and continuation callbacks
- Persistence failure keeps the draft for retry
- Single in-flight submission guard
"""

import asyncio
from datetime import datetime, timezone

import pytest

from conftest import PLACEHOLDER, FakeUploader, RecordingStore
from src.catalog.submission import (
    MSG_INVALID_CATEGORY,
    MSG_INVALID_KEY_FEATURES,
    MSG_INVALID_PRICE,
    MSG_INVALID_SPECIFICATIONS,
    MSG_MISSING_UNIT,
    MSG_REQUIRED_FIELDS,
    ProductSubmissionWorkflow,
    SubmissionState,
    SubmissionStatus,
    assemble_document,
    collect_key_features,
    collect_specifications,
    parse_price,
    validate_submission,
)
from src.models import CurrentUser, ImageFile, LogSeverity, ProductDraft, SpecificationRow

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)
ADMIN = CurrentUser(email="master@occworldtrade.com", is_master_admin=True)


def make_workflow(store, uploader, system_log, user=ADMIN, **kwargs):
    return ProductSubmissionWorkflow(
        add_product=store.add_product,
        image_uploader=uploader,
        system_log=system_log,
        user=user,
        placeholder_image_url=PLACEHOLDER,
        clock=lambda: NOW,
        **kwargs,
    )


def fill_basics(workflow, name="Basmati Rice", description="Premium", category="rice"):
    workflow.update_field("name", name)
    workflow.update_field("description", description)
    workflow.update_field("category", category)


class TestParsePrice:
    def test_parses_decimal_text(self):
        assert parse_price("12.5") == 12.5
        assert parse_price(" 3 ") == 3.0

    @pytest.mark.parametrize("text", ["", "abc", "nan", "inf", "-inf"])
    def test_rejects_non_numbers(self, text):
        assert parse_price(text) is None


class TestValidateSubmission:
    """Validation runs in order and reports the first failure."""

    @pytest.mark.parametrize(
        "draft",
        [
            ProductDraft(name="", description="Premium", category="rice"),
            ProductDraft(name="Basmati Rice", description="", category="rice"),
            ProductDraft(name="Basmati Rice", description="Premium", category=""),
            ProductDraft(name="   ", description="Premium", category="rice"),
        ],
    )
    def test_missing_required_fields(self, draft):
        error = validate_submission(draft, [SpecificationRow()], [""], False, False)
        assert error == MSG_REQUIRED_FIELDS

    def test_required_fields_checked_before_pricing(self):
        draft = ProductDraft(name="", description="Premium", price="-1")
        assert validate_submission(draft, [], [], False, True) == MSG_REQUIRED_FIELDS

    def test_unknown_category(self):
        draft = ProductDraft(name="Copper", description="Cathodes", category="metals")
        assert validate_submission(draft, [], [], False, False) == MSG_INVALID_CATEGORY

    @pytest.mark.parametrize("price", ["", "0", "-2", "free"])
    def test_invalid_price_when_pricing_enabled(self, price):
        draft = ProductDraft(name="Sugar", description="ICUMSA 45", category="sugar", price=price, unit="per ton")
        assert validate_submission(draft, [], [], False, True) == MSG_INVALID_PRICE

    def test_missing_unit_when_pricing_enabled(self):
        draft = ProductDraft(name="Sugar", description="ICUMSA 45", category="sugar", price="450", unit="  ")
        assert validate_submission(draft, [], [], False, True) == MSG_MISSING_UNIT

    def test_pricing_ignored_when_disabled(self):
        draft = ProductDraft(name="Sugar", description="ICUMSA 45", category="sugar", price="-5", unit="")
        assert validate_submission(draft, [], [], False, False) is None

    def test_single_empty_rows_are_accepted(self):
        draft = ProductDraft(name="Oil", description="Sunflower", category="oil")
        assert validate_submission(draft, [SpecificationRow()], [""], True, False) is None

    def test_several_empty_specification_rows_rejected(self):
        draft = ProductDraft(name="Oil", description="Sunflower", category="oil")
        rows = [SpecificationRow(), SpecificationRow(key="Purity", value=" ")]
        assert validate_submission(draft, rows, [""], True, False) == MSG_INVALID_SPECIFICATIONS

    def test_several_empty_key_feature_rows_rejected(self):
        draft = ProductDraft(name="Oil", description="Sunflower", category="oil")
        assert validate_submission(draft, [SpecificationRow()], ["", "  "], True, False) == MSG_INVALID_KEY_FEATURES

    def test_advanced_rows_ignored_when_disabled(self):
        draft = ProductDraft(name="Oil", description="Sunflower", category="oil")
        rows = [SpecificationRow(), SpecificationRow()]
        assert validate_submission(draft, rows, ["", ""], False, False) is None


class TestAssembleDocument:
    def test_collect_specifications_drops_incomplete_rows(self):
        rows = [
            SpecificationRow(),
            SpecificationRow(key=" Purity ", value=" 99% "),
            SpecificationRow(key="Origin", value=""),
        ]
        assert collect_specifications(rows) == {"Purity": "99%"}

    def test_collect_key_features_drops_blank_entries(self):
        assert collect_key_features(["", " Long grain ", "   ", "Aged"]) == ["Long grain", "Aged"]

    def test_pricing_disabled_omits_price_and_unit(self):
        draft = ProductDraft(name="Rice", description="Premium", price="12.5", unit="per kg")
        document = assemble_document(draft, PLACEHOLDER, [], [], False, False, "admin", NOW)

        assert "price" not in document
        assert "unit" not in document
        assert document["showPricing"] is False

    def test_pricing_enabled_adds_numeric_price(self):
        draft = ProductDraft(name="Rice", description="Premium", price="12.5", unit="per kg")
        document = assemble_document(draft, PLACEHOLDER, [], [], False, True, "admin", NOW)

        assert document["price"] == 12.5
        assert isinstance(document["price"], float)
        assert document["unit"] == "per kg"

    def test_advanced_disabled_discards_entered_values(self):
        draft = ProductDraft(name="Rice", description="Premium")
        rows = [SpecificationRow(key="Purity", value="99%")]
        document = assemble_document(draft, PLACEHOLDER, rows, ["Aged"], False, False, "admin", NOW)

        assert document["specifications"] == {}
        assert document["keyFeatures"] == []

    def test_document_shape(self):
        draft = ProductDraft(name="Rice", description="Premium", featured=True, in_stock=False)
        document = assemble_document(draft, "https://img/1.jpg", [], [], True, False, "ops@occ.com", NOW)

        assert document == {
            "name": "Rice",
            "description": "Premium",
            "category": "rice",
            "imageUrl": "https://img/1.jpg",
            "featured": True,
            "inStock": False,
            "createdAt": NOW,
            "updatedAt": NOW,
            "updatedBy": "ops@occ.com",
            "keyFeatures": [],
            "specifications": {},
            "showPricing": False,
        }


class TestProductSubmissionWorkflow:
    @pytest.mark.asyncio
    async def test_basic_product_without_image(self, store, uploader, system_log):
        """Scenario: plain draft, no image, pricing off."""
        workflow = make_workflow(store, uploader, system_log)
        fill_basics(workflow)

        result = await workflow.submit()

        assert result.status == SubmissionStatus.ACCEPTED
        assert result.product_id == "product-1"
        document = store.documents[0]
        assert document["imageUrl"] == PLACEHOLDER
        assert "price" not in document and "unit" not in document
        assert document["specifications"] == {}
        assert document["keyFeatures"] == []
        assert document["updatedBy"] == ADMIN.email
        assert document["createdAt"] == NOW
        assert uploader.calls == []

    @pytest.mark.asyncio
    async def test_pricing_enabled(self, store, uploader, system_log):
        workflow = make_workflow(store, uploader, system_log)
        fill_basics(workflow)
        workflow.set_pricing_enabled(True)
        workflow.update_field("price", "12.5")
        workflow.update_field("unit", "per kg")

        result = await workflow.submit()

        assert result.ok
        assert store.documents[0]["price"] == 12.5
        assert store.documents[0]["unit"] == "per kg"
        assert store.documents[0]["showPricing"] is True

    @pytest.mark.asyncio
    async def test_rejected_draft_never_reaches_store(self, store, uploader, system_log):
        workflow = make_workflow(store, uploader, system_log)
        workflow.update_field("name", "Basmati Rice")
        workflow.set_image(ImageFile(filename="rice.jpg", content=b"\xff\xd8"))

        result = await workflow.submit()

        assert result.status == SubmissionStatus.REJECTED
        assert result.message == MSG_REQUIRED_FIELDS
        assert store.documents == []
        assert uploader.calls == []
        assert system_log.messages(LogSeverity.ERROR) == [MSG_REQUIRED_FIELDS]
        # Draft is kept so the user can correct it
        assert workflow.draft.name == "Basmati Rice"
        assert workflow.image is not None

    @pytest.mark.asyncio
    async def test_invalid_price_rejected(self, store, uploader, system_log):
        workflow = make_workflow(store, uploader, system_log)
        fill_basics(workflow)
        workflow.set_pricing_enabled(True)
        workflow.update_field("price", "0")
        workflow.update_field("unit", "per kg")

        result = await workflow.submit()

        assert result.status == SubmissionStatus.REJECTED
        assert result.message == MSG_INVALID_PRICE
        assert store.documents == []

    @pytest.mark.asyncio
    async def test_uploaded_image_url_is_used(self, store, uploader, system_log):
        workflow = make_workflow(store, uploader, system_log, upload_folder="products")
        fill_basics(workflow)
        workflow.set_image(ImageFile(filename="rice.jpg", content=b"\xff\xd8", content_type="image/jpeg"))

        result = await workflow.submit()

        assert result.ok
        assert uploader.calls == [("rice.jpg", "products")]
        assert store.documents[0]["imageUrl"] == uploader.url
        assert f"Image uploaded successfully: {uploader.url}" in system_log.messages(LogSeverity.SUCCESS)

    @pytest.mark.asyncio
    async def test_upload_failure_falls_back_to_placeholder(self, store, system_log):
        """Scenario: upload raises, submission still succeeds with the placeholder."""
        uploader = FakeUploader(fail_with=RuntimeError("host unreachable"))
        workflow = make_workflow(store, uploader, system_log)
        fill_basics(workflow)
        workflow.set_image(ImageFile(filename="rice.jpg", content=b"\xff\xd8"))

        result = await workflow.submit()

        assert result.ok
        assert store.documents[0]["imageUrl"] == PLACEHOLDER
        assert "Error uploading image: host unreachable" in system_log.messages(LogSeverity.ERROR)

    @pytest.mark.asyncio
    async def test_specifications_filtered(self, store, uploader, system_log):
        """Scenario: one empty row and one filled row give exactly one entry."""
        workflow = make_workflow(store, uploader, system_log)
        fill_basics(workflow)
        workflow.set_advanced_enabled(True)
        workflow.add_specification_row()
        workflow.update_specification(1, key="Purity", value="99%")
        workflow.update_key_feature(0, "Long grain")

        result = await workflow.submit()

        assert result.ok
        assert store.documents[0]["specifications"] == {"Purity": "99%"}
        assert store.documents[0]["keyFeatures"] == ["Long grain"]
        assert "Added 1 specifications to product" in system_log.messages(LogSeverity.INFO)

    @pytest.mark.asyncio
    async def test_advanced_fields_require_master_admin(self, store, uploader, system_log):
        editor = CurrentUser(email="editor@occworldtrade.com", is_master_admin=False)
        workflow = make_workflow(store, uploader, system_log, user=editor)
        fill_basics(workflow)
        workflow.set_advanced_enabled(True)
        workflow.update_specification(0, key="Purity", value="99%")

        result = await workflow.submit()

        assert result.ok
        assert workflow.advanced_fields_visible is False
        assert store.documents[0]["specifications"] == {}

    @pytest.mark.asyncio
    async def test_hidden_advanced_values_are_not_persisted(self, store, uploader, system_log):
        workflow = make_workflow(store, uploader, system_log)
        fill_basics(workflow)
        workflow.set_advanced_enabled(True)
        workflow.update_specification(0, key="Purity", value="99%")
        workflow.set_advanced_enabled(False)

        # Still held by the form while hidden
        assert workflow.specifications[0].key == "Purity"

        await workflow.submit()

        assert store.documents[0]["specifications"] == {}

    @pytest.mark.asyncio
    async def test_fallback_user_when_no_email(self, store, uploader, system_log):
        workflow = make_workflow(store, uploader, system_log, user=CurrentUser(), fallback_user="admin")
        fill_basics(workflow)

        await workflow.submit()

        assert store.documents[0]["updatedBy"] == "admin"

    @pytest.mark.asyncio
    async def test_success_resets_form_and_calls_continuation(self, store, uploader, system_log):
        added = []
        closed = []
        workflow = make_workflow(
            store, uploader, system_log,
            on_product_added=added.append,
            on_close=lambda: closed.append(True),
        )
        fill_basics(workflow)
        workflow.set_pricing_enabled(True)
        workflow.update_field("price", "10")
        workflow.update_field("unit", "per kg")
        workflow.add_specification_row()
        workflow.add_key_feature_row()
        workflow.update_key_feature(0, "Aged")

        result = await workflow.submit()

        assert added == [result.product_id]
        assert closed == []
        assert workflow.draft == ProductDraft()
        assert workflow.pricing_enabled is False
        assert workflow.image is None
        assert workflow.specifications == [SpecificationRow()]
        assert workflow.key_features == [""]
        assert workflow.state == SubmissionState.IDLE
        assert f"Product Basmati Rice added with ID: {result.product_id}" in system_log.messages(LogSeverity.SUCCESS)

    @pytest.mark.asyncio
    async def test_success_closes_without_continuation(self, store, uploader, system_log):
        closed = []
        workflow = make_workflow(store, uploader, system_log, on_close=lambda: closed.append(True))
        fill_basics(workflow)

        await workflow.submit()

        assert closed == [True]

    @pytest.mark.asyncio
    async def test_store_failure_keeps_draft(self, uploader, system_log):
        store = RecordingStore(fail_with=RuntimeError("permission denied"))
        workflow = make_workflow(store, uploader, system_log)
        fill_basics(workflow)

        result = await workflow.submit()

        assert result.status == SubmissionStatus.FAILED
        assert "Error adding product: permission denied" in system_log.messages(LogSeverity.ERROR)
        assert workflow.draft.name == "Basmati Rice"
        assert workflow.is_submitting is False

        # Retry succeeds once the store recovers
        store.fail_with = None
        retry = await workflow.submit()
        assert retry.ok

    @pytest.mark.asyncio
    async def test_concurrent_submit_is_refused(self, uploader, system_log):
        release = asyncio.Event()

        class SlowStore:
            def __init__(self):
                self.calls = 0

            async def add_product(self, document):
                self.calls += 1
                await release.wait()
                return "slow-1"

        store = SlowStore()
        workflow = make_workflow(store, uploader, system_log)
        fill_basics(workflow)

        first = asyncio.create_task(workflow.submit())
        await asyncio.sleep(0)
        assert workflow.state == SubmissionState.PERSISTING
        assert workflow.is_submitting

        second = await workflow.submit()
        assert second.status == SubmissionStatus.BUSY
        assert workflow.cancel() is False

        release.set()
        assert (await first).ok
        assert store.calls == 1


class TestFormEditing:
    def test_unknown_field_raises(self, store, uploader, system_log):
        workflow = make_workflow(store, uploader, system_log)
        with pytest.raises(KeyError):
            workflow.update_field("sku", "X-1")

    def test_numeric_text_fields_stored_as_text(self, store, uploader, system_log):
        workflow = make_workflow(store, uploader, system_log)
        workflow.update_field("price", 12.5)
        workflow.update_field("unit", 5)

        assert workflow.draft.price == "12.5"
        assert workflow.draft.unit == "5"

    @pytest.mark.asyncio
    async def test_numeric_price_submits(self, store, uploader, system_log):
        workflow = make_workflow(store, uploader, system_log)
        fill_basics(workflow)
        workflow.set_pricing_enabled(True)
        workflow.update_field("price", 12.5)
        workflow.update_field("unit", "per kg")

        result = await workflow.submit()

        assert result.ok
        assert store.documents[0]["price"] == 12.5

    @pytest.mark.asyncio
    async def test_numeric_unit_does_not_raise(self, store, uploader, system_log):
        workflow = make_workflow(store, uploader, system_log)
        fill_basics(workflow)
        workflow.set_pricing_enabled(True)
        workflow.update_field("price", "40")
        workflow.update_field("unit", 5)

        result = await workflow.submit()

        assert result.ok
        assert store.documents[0]["unit"] == "5"

    def test_removing_last_row_leaves_empty_row(self, store, uploader, system_log):
        workflow = make_workflow(store, uploader, system_log)
        workflow.update_specification(0, key="Purity", value="99%")
        workflow.remove_specification_row(0)
        workflow.update_key_feature(0, "Aged")
        workflow.remove_key_feature_row(0)

        assert workflow.specifications == [SpecificationRow()]
        assert workflow.key_features == [""]

    def test_cancel_resets_and_closes(self, store, uploader, system_log):
        closed = []
        workflow = make_workflow(store, uploader, system_log, on_close=lambda: closed.append(True))
        fill_basics(workflow)

        assert workflow.cancel() is True
        assert workflow.draft == ProductDraft()
        assert closed == [True]
