"""Static category model used for static page generation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StaticCategory:
    """Category entry with the data needed to render its landing page."""

    id: str
    title: str
    slug: str  # Matches a ProductCategory id
    description: str
    image: str
    product_count: int = 0
    featured: bool = False
