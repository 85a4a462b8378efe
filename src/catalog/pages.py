"""Achievements page content."""

from dataclasses import dataclass, field
from typing import Optional, Sequence

from src.models import Achievement, Milestone, Testimonial

HERO_TITLE = "Our Achievements"
HERO_SUBTITLE = "Recognized for excellence, quality, and innovation in the B2B industry"

INTRO = (
    "Since 2020, we have been reliably supplying high-quality materials and agricultural "
    "commodities to businesses across industries. We take pride in being a trusted partner "
    "for companies seeking excellence and consistency in their supply chain."
)

CERTIFICATIONS_TITLE = "Certifications & Awards"
TESTIMONIALS_TITLE = "What Our Partners Say"

EMPTY_MESSAGE = "No achievements found."

MILESTONES: tuple[Milestone, ...] = (
    Milestone(number="55+", label="Global Partners"),
    Milestone(number="30+", label="Countries Served"),
    Milestone(number="5+", label="Years Experience"),
    Milestone(number="50000+", label="Products Delivered"),
)

TESTIMONIALS: tuple[Testimonial, ...] = (
    Testimonial(
        quote="B2B Showcase has been an invaluable partner in our supply chain. "
        "Their quality and reliability are unmatched."
    ),
    Testimonial(
        quote="The team's expertise and commitment to excellence have helped us "
        "streamline our operations significantly."
    ),
    Testimonial(quote="Their customer service is exceptional. They truly understand the needs of B2B clients."),
)


@dataclass(frozen=True)
class AchievementsPage:
    """Everything the Achievements page renders.

    While ``loading`` is true the achievements list is empty and no empty-state
    message is shown; the page shows a loading indicator instead.
    """

    hero_title: str
    hero_subtitle: str
    intro: str
    certifications_title: str
    testimonials_title: str
    loading: bool
    milestones: Sequence[Milestone] = field(default_factory=tuple)
    achievements: Sequence[Achievement] = field(default_factory=tuple)
    testimonials: Sequence[Testimonial] = field(default_factory=tuple)
    empty_message: Optional[str] = None


def build_achievements_page(achievements: Sequence[Achievement], loading: bool) -> AchievementsPage:
    shown = () if loading else tuple(achievements)
    return AchievementsPage(
        hero_title=HERO_TITLE,
        hero_subtitle=HERO_SUBTITLE,
        intro=INTRO,
        certifications_title=CERTIFICATIONS_TITLE,
        testimonials_title=TESTIMONIALS_TITLE,
        loading=loading,
        milestones=MILESTONES,
        achievements=shown,
        testimonials=TESTIMONIALS,
        empty_message=EMPTY_MESSAGE if not loading and not shown else None,
    )
