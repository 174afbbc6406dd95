"""Recommendation generation for one category or all three at once."""

from __future__ import annotations

import asyncio
import logging

from sociomap.errors import UpstreamGenerationError
from sociomap.services.generator import TextGenerator
from sociomap.services.metrics import metrics
from sociomap.services.prompts import CATEGORIES, SYSTEM_ROLE, Category, build_prompt

logger = logging.getLogger(__name__)


async def generate_recommendations(
    generator: TextGenerator,
    location: str,
    description: str,
    category: Category,
) -> str:
    """Build the prompt for ``category`` and return the provider's text."""
    prompt = build_prompt(location, description, category)
    try:
        text = await generator.generate(SYSTEM_ROLE, prompt)
    except UpstreamGenerationError:
        metrics.inc_generation(category.slug, False)
        raise
    metrics.inc_generation(category.slug, True)
    logger.debug("Generated %d chars for %s", len(text), category.slug)
    return text


async def generate_all_recommendations(
    generator: TextGenerator,
    location: str,
    description: str,
) -> dict[str, str]:
    """Generate every category concurrently, keyed by ``Category.key``.

    Fails fast: the first exception propagates and the other calls' results
    are discarded.
    """
    results = await asyncio.gather(
        *(
            generate_recommendations(generator, location, description, category)
            for category in CATEGORIES
        )
    )
    return {category.key: text for category, text in zip(CATEGORIES, results)}
