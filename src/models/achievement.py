"""Achievement page models."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Achievement:
    """A milestone, certification or award shown on the Achievements page."""

    id: str
    title: str
    year: str
    description: str
    image_url: Optional[str] = None
    certificate_url: Optional[str] = None


@dataclass(frozen=True)
class Milestone:
    number: str  # Display figure, e.g. "55+"
    label: str


@dataclass(frozen=True)
class Testimonial:
    quote: str
    author: str = ""
    position: str = ""
