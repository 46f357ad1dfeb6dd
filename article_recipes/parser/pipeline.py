"""Orchestrator: decide whether generated text holds a recipe and build its canonical record."""

import logging

from article_recipes.models import CanonicalRecipeRecord, Provenance
from article_recipes.normalize import canonicalize
from article_recipes.parser.fields import extract_fields
from article_recipes.parser.indicators import has_recipe_indicators

logger = logging.getLogger(__name__)


def extract_recipe(text: str, keyword: str) -> CanonicalRecipeRecord | None:
    """Extract a canonical recipe from generated article text, or None if there isn't one."""
    if not isinstance(text, str) or not text:
        logger.warning("Content is not a non-empty string, cannot extract recipe for %r", keyword)
        return None

    logger.info("Extracting recipe data for keyword %r", keyword)
    if not has_recipe_indicators(text):
        logger.info("No recipe indicators found for %r", keyword)
        return None

    candidate = extract_fields(text, keyword)
    if not candidate.ingredients or not candidate.instructions:
        logger.info(
            "Insufficient recipe data for %r (%d ingredients, %d instructions)",
            keyword,
            len(candidate.ingredients),
            len(candidate.instructions),
        )
        return None

    record = canonicalize(candidate, keyword, Provenance.EXTRACTED)
    logger.info(
        "Extracted recipe %r with %d ingredients and %d steps",
        record.title,
        len(record.ingredients),
        len(record.instructions),
    )
    return record
