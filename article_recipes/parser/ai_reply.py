"""Direct-JSON path: ask the generator for recipe JSON and recover whatever comes back."""

import json
import logging
import re
from typing import Any

from article_recipes.models import NOT_AVAILABLE, CanonicalRecipeRecord, Provenance
from article_recipes.normalize import (
    MISSING_INGREDIENTS,
    MISSING_INSTRUCTIONS,
    canonicalize,
    default_description,
    default_title,
)

logger = logging.getLogger(__name__)

_JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)

RECIPE_SYSTEM_PROMPT = (
    "You are a professional chef specializing in creating structured recipe data "
    "in perfect JSON format. You only output valid JSON."
)

DEFAULT_RECIPE_PROMPT = """Generate a complete recipe related to "{keyword}".

Format the response as a structured JSON object with the following fields:
{
  "title": "Recipe title",
  "description": "Brief description of the dish",
  "ingredients": ["ingredient 1", "ingredient 2", ...],
  "instructions": ["step 1", "step 2", ...],
  "prep_time": "XX mins",
  "cook_time": "XX mins",
  "yield": "X servings",
  "notes": ["note 1", "note 2", ...],
  "nutrition_info": {
    "Calories": "XXX kcal",
    "Protein": "XXg",
    "Carbs": "XXg",
    "Fat": "XXg"
  }
}"""


def build_recipe_prompt(keyword: str, template: str | None = None) -> str:
    """Fill ``{keyword}`` into a custom prompt template, or the default one."""
    if not template or not template.strip():
        template = DEFAULT_RECIPE_PROMPT
    return template.replace("{keyword}", keyword)


def fallback_recipe(keyword: str) -> CanonicalRecipeRecord:
    """Stub record used when the reply holds no usable JSON."""
    return canonicalize(
        {
            "title": default_title(keyword),
            "description": default_description(keyword),
            "ingredients": [MISSING_INGREDIENTS],
            "instructions": [MISSING_INSTRUCTIONS],
            "prep_time": "30 mins",
            "cook_time": "30 mins",
            "yield": "4 servings",
            "notes": ["Recipe generated as fallback"],
            "nutrition_info": {
                "Calories": NOT_AVAILABLE,
                "Protein": NOT_AVAILABLE,
                "Carbs": NOT_AVAILABLE,
                "Fat": NOT_AVAILABLE,
            },
        },
        keyword,
        Provenance.FALLBACK,
    )


def load_reply_json(reply: str) -> dict[str, Any] | None:
    """Parse the reply strictly, then from the outermost braces, else give up."""
    if not isinstance(reply, str) or not reply.strip():
        return None

    try:
        data = json.loads(reply)
    except (ValueError, RecursionError):
        logger.debug("Direct JSON parsing failed, looking for an embedded object")
        match = _JSON_OBJECT_RE.search(reply)
        if not match:
            return None
        try:
            data = json.loads(match.group(0))
        except (ValueError, RecursionError):
            logger.debug("Embedded JSON object did not parse")
            return None

    if not isinstance(data, dict):
        logger.debug("Reply JSON is a %s, not an object", type(data).__name__)
        return None
    return data


def parse_ai_reply(reply: str, keyword: str) -> CanonicalRecipeRecord:
    """Turn a generator reply into a canonical record. Always returns a record."""
    data = load_reply_json(reply)
    if data is None:
        preview = reply[:200] if isinstance(reply, str) else repr(reply)
        logger.warning("No usable recipe JSON for %r, using fallback. Reply: %s", keyword, preview)
        return fallback_recipe(keyword)

    record = canonicalize(data, keyword, Provenance.AI_STRUCTURED)
    logger.info(
        "Parsed AI recipe %r: %d ingredients, %d instructions",
        record.title,
        len(record.ingredients),
        len(record.instructions),
    )
    return record
