"""Render a canonical recipe into flat text or structured groups."""

import logging
import re

from article_recipes.config import DEFAULT_FLAT_TEMPLATE, FormatTemplates, RecipeFormatConfig
from article_recipes.models import (
    CanonicalRecipeRecord,
    FlatText,
    IngredientGroup,
    StructuredGroups,
)
from article_recipes.render.grouping import group_instructions

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


def substitute(template: str, values: dict[str, str]) -> str:
    """Replace known ``{name}`` placeholders in one pass. Unknown ones stay as written."""
    return _PLACEHOLDER_RE.sub(lambda m: values.get(m.group(1), m.group(0)), template)


def render_recipe(
    record: CanonicalRecipeRecord, config: RecipeFormatConfig
) -> FlatText | StructuredGroups:
    if config.structured_output:
        logger.debug("Rendering %r as structured groups", record.title)
        return render_structured(record)
    if not config.custom_formatting_enabled:
        logger.debug("Rendering %r with the default template", record.title)
        return render_flat(record, FormatTemplates())
    if config.use_fixed_template:
        logger.debug("Rendering %r with the fixed step template", record.title)
        return render_fixed(record)
    logger.debug("Rendering %r with the custom template", record.title)
    return render_flat(record, config.templates)


def render_structured(record: CanonicalRecipeRecord) -> StructuredGroups:
    return StructuredGroups(
        ingredient_groups=(IngredientGroup(entries=record.ingredients),),
        instruction_groups=group_instructions(record.instructions),
    )


def render_flat(record: CanonicalRecipeRecord, templates: FormatTemplates) -> FlatText:
    ingredients = "\n".join(
        substitute(templates.ingredient_item_format, {"ingredient": item, "number": str(n)})
        for n, item in enumerate(record.ingredients, start=1)
    )
    instructions = "\n\n".join(
        substitute(templates.instruction_item_format, {"instruction": step, "number": str(n)})
        for n, step in enumerate(record.instructions, start=1)
    )
    body = substitute(
        templates.flat_template,
        {"ingredients": ingredients, "instructions": instructions},
    )
    return FlatText(body=body)


def render_fixed(record: CanonicalRecipeRecord) -> FlatText:
    """Bulleted ingredients, then each step group as a bold title over numbered lines."""
    ingredients = "\n".join(f"* {item}" for item in record.ingredients)
    instructions = "\n\n".join(
        f"**{group.name}**\n"
        + "\n".join(f"{step.sequence_index + 1}- {step.text}" for step in group.steps)
        for group in group_instructions(record.instructions)
    )
    body = substitute(
        DEFAULT_FLAT_TEMPLATE,
        {"ingredients": ingredients, "instructions": instructions},
    )
    return FlatText(body=body)
