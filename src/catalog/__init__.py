"""Catalog domain: product submission, category lookup and page content."""

from src.catalog.categories import (
    STATIC_CATEGORIES,
    get_all_category_slugs,
    get_static_category_by_slug,
)
from src.catalog.manifest import build_manifest
from src.catalog.pages import AchievementsPage, build_achievements_page
from src.catalog.submission import (
    ProductSubmissionWorkflow,
    SubmissionResult,
    SubmissionState,
    SubmissionStatus,
    assemble_document,
    collect_key_features,
    collect_specifications,
    parse_price,
    validate_submission,
)

__all__ = [
    "STATIC_CATEGORIES",
    "get_all_category_slugs",
    "get_static_category_by_slug",
    "build_manifest",
    "AchievementsPage",
    "build_achievements_page",
    "ProductSubmissionWorkflow",
    "SubmissionResult",
    "SubmissionState",
    "SubmissionStatus",
    "assemble_document",
    "collect_key_features",
    "collect_specifications",
    "parse_price",
    "validate_submission",
]
