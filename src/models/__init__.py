"""Data models module."""

from src.models.achievement import Achievement, Milestone, Testimonial
from src.models.category import StaticCategory
from src.models.product import (
    DEFAULT_CATEGORY,
    ImageFile,
    ProductCategory,
    ProductDraft,
    SpecificationRow,
)
from src.models.system_log import LogSeverity, SystemLogEntry
from src.models.user import CurrentUser

__all__ = [
    "Achievement",
    "Milestone",
    "Testimonial",
    "StaticCategory",
    "DEFAULT_CATEGORY",
    "ImageFile",
    "ProductCategory",
    "ProductDraft",
    "SpecificationRow",
    "LogSeverity",
    "SystemLogEntry",
    "CurrentUser",
]
