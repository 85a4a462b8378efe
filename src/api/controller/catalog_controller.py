"""Public catalog endpoints: achievements, categories and the web manifest."""

from fastapi import APIRouter, Depends, HTTPException

from src.api.controller.dependencies import get_services
from src.catalog import (
    STATIC_CATEGORIES,
    build_achievements_page,
    build_manifest,
    get_all_category_slugs,
    get_static_category_by_slug,
)

router = APIRouter(tags=["catalog"])


@router.get("/achievements")
async def get_achievements(refresh: bool = False, services=Depends(get_services)):
    """Achievements page content. Loads the data source on first access."""
    achievement_service = services.achievements
    if achievement_service.loading or refresh:
        await achievement_service.load()
    return build_achievements_page(achievement_service.achievements, achievement_service.loading)


@router.get("/categories")
async def list_categories():
    return list(STATIC_CATEGORIES)


@router.get("/categories/slugs")
async def list_category_slugs() -> list[str]:
    return get_all_category_slugs()


@router.get("/categories/{slug}")
async def get_category(slug: str):
    category = get_static_category_by_slug(slug)
    if category is None:
        raise HTTPException(status_code=404, detail=f"Category '{slug}' not found")
    return category


@router.get("/manifest.webmanifest")
async def get_manifest() -> dict:
    return build_manifest()
