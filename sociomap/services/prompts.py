"""Policy categories and the prompt sent to the text-generation provider."""

from __future__ import annotations

from dataclasses import dataclass

SYSTEM_ROLE = (
    "You are SocioMap®, an AI policy advisor specialized in social equity "
    "and community resilience."
)


@dataclass(frozen=True)
class Category:
    """A policy domain: URL slug, human label and combined-response key."""

    slug: str
    label: str
    key: str


ECONOMIC_EQUITY = Category("economic-equity", "Economic Equity", "economicEquity")
PUBLIC_HEALTH = Category("public-health", "Public Health", "publicHealth")
DISASTER_PREPAREDNESS = Category(
    "disaster-preparedness", "Disaster Preparedness", "disasterPreparedness"
)

CATEGORIES: tuple[Category, ...] = (ECONOMIC_EQUITY, PUBLIC_HEALTH, DISASTER_PREPAREDNESS)


def build_prompt(location: str, description: str, category: Category | str) -> str:
    """Return the recommendation instructions for one category.

    ``category`` may be a :class:`Category` or a bare label string.
    """
    label = category.label if isinstance(category, Category) else category
    return (
        f"Generate policy recommendations for {label} for a community located "
        f"in {location} with the following description: {description}.\n"
        "The recommendations should be specific, actionable, and relevant to "
        "the local context.\n"
        "Format the response with 3-5 specific policy recommendations, each "
        "with a title and explanation."
    )
