"""Product models used by the admin add-product workflow."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class ProductCategory(str, Enum):
    """Categories selectable when adding a product."""

    RICE = "rice"
    SEEDS = "seeds"
    OIL = "oil"
    MINERALS = "minerals"
    BROMINE_SALT = "bromine-salt"
    SUGAR = "sugar"
    SPECIAL_CATEGORY = "special-category"

    @property
    def display_name(self) -> str:
        return _CATEGORY_NAMES[self]

    @classmethod
    def ids(cls) -> List[str]:
        return [category.value for category in cls]


_CATEGORY_NAMES = {
    ProductCategory.RICE: "Rice",
    ProductCategory.SEEDS: "Seeds",
    ProductCategory.OIL: "Oil",
    ProductCategory.MINERALS: "Minerals",
    ProductCategory.BROMINE_SALT: "Bromine",
    ProductCategory.SUGAR: "Sugar",
    ProductCategory.SPECIAL_CATEGORY: "Special Category",
}

DEFAULT_CATEGORY = ProductCategory.RICE.value


@dataclass
class ProductDraft:
    """Transient, not-yet-persisted product record held by the form.

    Price and unit are kept as the raw text the user typed; they are only
    parsed when pricing is enabled at submission time.
    """

    name: str = ""
    description: str = ""
    category: str = DEFAULT_CATEGORY
    image_url: str = ""
    featured: bool = False
    in_stock: bool = True
    price: str = ""
    unit: str = ""


@dataclass
class SpecificationRow:
    """One editable specification key/value row."""

    key: str = ""
    value: str = ""


@dataclass(frozen=True)
class ImageFile:
    """Binary image payload selected in the form."""

    filename: str
    content: bytes = field(repr=False)
    content_type: str = "application/octet-stream"
