"""Admin product endpoints."""

import json
import logging
from typing import Any, Optional, Union

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError, field_validator

from src.api.controller.dependencies import get_current_user, get_services
from src.catalog import ProductSubmissionWorkflow, SubmissionStatus
from src.models import DEFAULT_CATEGORY, CurrentUser, ImageFile, LogSeverity

logger = logging.getLogger(__name__)

router = APIRouter(tags=["products"])

_STATUS_CODES = {
    SubmissionStatus.ACCEPTED: 201,
    SubmissionStatus.REJECTED: 422,
    SubmissionStatus.FAILED: 502,
    SubmissionStatus.BUSY: 409,
}


class SpecificationRowModel(BaseModel):
    key: str = ""
    value: str = ""


class ProductSubmissionRequest(BaseModel):
    """Add-product form contents as sent by the admin UI."""

    name: str = ""
    description: str = ""
    category: str = DEFAULT_CATEGORY
    featured: bool = False
    in_stock: bool = True
    show_pricing: bool = False
    price: str = ""
    unit: str = ""
    show_advanced: bool = False
    key_features: list[str] = [""]
    specifications: list[SpecificationRowModel] = [SpecificationRowModel()]

    @field_validator("price", mode="before")
    @classmethod
    def _price_as_text(cls, value: Union[str, int, float, None]) -> str:
        # The form holds the price as typed text; numbers are accepted too.
        if value is None:
            return ""
        return str(value)


class SubmissionResponse(BaseModel):
    status: str
    product_id: Optional[str] = None
    message: Optional[str] = None


class SystemLogEntryResponse(BaseModel):
    message: str
    severity: str
    timestamp: str


def _populate(workflow: ProductSubmissionWorkflow, request: ProductSubmissionRequest) -> None:
    for field_name in ("name", "description", "category", "featured", "in_stock", "price", "unit"):
        workflow.update_field(field_name, getattr(request, field_name))
    workflow.set_pricing_enabled(request.show_pricing)
    workflow.set_advanced_enabled(request.show_advanced)

    for index, row in enumerate(request.specifications):
        if index > 0:
            workflow.add_specification_row()
        workflow.update_specification(index, key=row.key, value=row.value)
    for index, feature in enumerate(request.key_features):
        if index > 0:
            workflow.add_key_feature_row()
        workflow.update_key_feature(index, feature)


@router.post("/products")
async def create_product(
    payload: str = Form(...),
    image: Optional[UploadFile] = File(default=None),
    user: CurrentUser = Depends(get_current_user),
    services=Depends(get_services),
) -> JSONResponse:
    """
    Submit the add-product form.

    Multipart body:
    - payload: JSON encoded ProductSubmissionRequest
    - image: optional product image file

    Responds 201 with the new product id, 422 when validation rejects the
    draft, 502 when the product store fails.
    """
    try:
        request = ProductSubmissionRequest.model_validate_json(payload)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=json.loads(e.json()))

    config = services.config
    workflow = ProductSubmissionWorkflow(
        add_product=services.products.add_product,
        image_uploader=services.image_uploader,
        system_log=services.system_log,
        user=user,
        placeholder_image_url=config.catalog.placeholder_image_url,
        upload_folder=config.image_hosting.folder,
        fallback_user=config.catalog.fallback_user,
    )
    _populate(workflow, request)

    if image is not None and image.filename:
        content = await image.read()
        if content:
            workflow.set_image(
                ImageFile(
                    filename=image.filename,
                    content=content,
                    content_type=image.content_type or "application/octet-stream",
                )
            )

    result = await workflow.submit()
    response = SubmissionResponse(
        status=result.status.value,
        product_id=result.product_id,
        message=result.message,
    )
    return JSONResponse(status_code=_STATUS_CODES[result.status], content=response.model_dump())


@router.get("/products")
async def list_products(category: Optional[str] = None, services=Depends(get_services)) -> list[dict[str, Any]]:
    return await services.products.list_products(category)


@router.get("/products/{product_id}")
async def get_product(product_id: str, services=Depends(get_services)) -> dict[str, Any]:
    product = await services.products.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail=f"Product '{product_id}' not found")
    return product


@router.get("/system-log")
async def get_system_log(
    severity: Optional[LogSeverity] = None,
    services=Depends(get_services),
) -> list[SystemLogEntryResponse]:
    return [
        SystemLogEntryResponse(
            message=entry.message,
            severity=entry.severity.value,
            timestamp=entry.timestamp.isoformat(),
        )
        for entry in services.system_log.entries(severity)
    ]
