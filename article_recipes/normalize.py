"""Validate and default recipe data into a canonical record.

Applies to extraction results and AI JSON replies alike. Every rule only
fills what is missing, so running it on its own output changes nothing.
"""

import logging
from typing import Any

from article_recipes.models import (
    NOT_AVAILABLE,
    CanonicalRecipeRecord,
    Nutrition,
    Provenance,
    RecipeCandidate,
)
from article_recipes.parser.quantities import (
    DEFAULT_SERVINGS,
    parse_servings,
    parse_time_minutes,
)

logger = logging.getLogger(__name__)

DEFAULT_TIME_MINUTES = 30
DEFAULT_YIELD_UNIT = "servings"
MISSING_INGREDIENTS = "Please check the recipe description for ingredients"
MISSING_INSTRUCTIONS = "Please follow the instructions in the article"

_NUTRIENT_KEYS = {
    "calories": ("calories",),
    "protein": ("protein",),
    "carbs": ("carbs", "carbohydrates"),
    "fat": ("fat",),
}


def capitalize_keyword(keyword: str) -> str:
    """Upper-case the first letter only, leaving the rest as typed."""
    return keyword[:1].upper() + keyword[1:]


def default_title(keyword: str) -> str:
    return f"{capitalize_keyword(keyword)} Recipe".strip()


def default_description(keyword: str) -> str:
    return f"A delicious {keyword} recipe."


def candidate_from_record(record: CanonicalRecipeRecord) -> RecipeCandidate:
    return RecipeCandidate(
        title=record.title,
        description=record.description,
        ingredients=list(record.ingredients),
        instructions=list(record.instructions),
        prep_time=record.prep_time_minutes,
        cook_time=record.cook_time_minutes,
        yield_=record.yield_servings,
        yield_unit=record.yield_unit,
        notes=list(record.notes),
        nutrition_info=record.nutrition.as_dict(),
    )


def canonicalize(
    source: RecipeCandidate | CanonicalRecipeRecord | dict[str, Any] | None,
    keyword: str,
    provenance: Provenance | None = None,
) -> CanonicalRecipeRecord:
    if isinstance(source, CanonicalRecipeRecord):
        provenance = provenance or source.provenance
        candidate = candidate_from_record(source)
    elif isinstance(source, RecipeCandidate):
        candidate = source
    else:
        candidate = RecipeCandidate.model_validate(source if isinstance(source, dict) else {})

    missing = [
        name
        for name, value in (
            ("title", candidate.title),
            ("ingredients", candidate.ingredients),
            ("instructions", candidate.instructions),
        )
        if not value
    ]
    if missing:
        logger.info("Defaulting missing recipe fields for %r: %s", keyword, ", ".join(missing))

    return CanonicalRecipeRecord(
        title=candidate.title or default_title(keyword),
        description=candidate.description or default_description(keyword),
        ingredients=candidate.ingredients or [MISSING_INGREDIENTS],
        instructions=candidate.instructions or [MISSING_INSTRUCTIONS],
        prep_time_minutes=_minutes(candidate.prep_time),
        cook_time_minutes=_minutes(candidate.cook_time),
        yield_servings=(
            DEFAULT_SERVINGS if candidate.yield_ is None else parse_servings(candidate.yield_)
        ),
        yield_unit=candidate.yield_unit or DEFAULT_YIELD_UNIT,
        notes=candidate.notes,
        nutrition=_nutrition(candidate.nutrition_info),
        provenance=provenance or Provenance.EXTRACTED,
    )


def _minutes(value: str | int | None) -> int:
    if value is None:
        return DEFAULT_TIME_MINUTES
    return parse_time_minutes(value)


def _nutrition(info: dict[str, str]) -> Nutrition:
    lowered = {key.lower(): value for key, value in info.items()}
    values = {}
    for field, keys in _NUTRIENT_KEYS.items():
        values[field] = next(
            (lowered[key] for key in keys if lowered.get(key)), NOT_AVAILABLE
        )
    return Nutrition(**values)
