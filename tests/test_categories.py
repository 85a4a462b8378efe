"""Tests for static category lookup and the web manifest."""

from src.catalog import (
    STATIC_CATEGORIES,
    build_manifest,
    get_all_category_slugs,
    get_static_category_by_slug,
)
from src.models import ProductCategory


class TestStaticCategories:
    def test_slugs_match_product_categories(self):
        assert get_all_category_slugs() == ProductCategory.ids()

    def test_lookup_by_slug(self):
        category = get_static_category_by_slug("bromine-salt")

        assert category is not None
        assert category.title == "Bromine"
        assert category.product_count == 0

    def test_unknown_slug(self):
        assert get_static_category_by_slug("metals") is None

    def test_featured_categories(self):
        assert [c.slug for c in STATIC_CATEGORIES if c.featured] == ["rice", "seeds"]

    def test_display_names(self):
        assert ProductCategory.SPECIAL_CATEGORY.display_name == "Special Category"


class TestManifest:
    def test_manifest(self):
        manifest = build_manifest()

        assert manifest["name"] == "OCC World Trade"
        assert manifest["display"] == "standalone"
        assert manifest["icons"][0]["type"] == "image/jpeg"
