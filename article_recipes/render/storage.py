"""Build the JSON body a recipe-plugin storage API expects for a structured rendering."""

from typing import Any

from article_recipes.models import CanonicalRecipeRecord, StructuredGroups
from article_recipes.parser.quantities import nutrition_value

DEFAULT_CONTENT = "A delicious recipe."


def build_storage_payload(
    record: CanonicalRecipeRecord,
    rendered: StructuredGroups,
    parent_post_id: int,
) -> dict[str, Any]:
    if not isinstance(rendered, StructuredGroups):
        raise TypeError(
            f"Storage payload needs a structured rendering, got {type(rendered).__name__}"
        )

    return {
        "title": record.title,
        "status": "publish",
        "content": record.description or DEFAULT_CONTENT,
        "recipe": {
            "parent_post_id": parent_post_id,
            "image_id": 0,
            "name": record.title,
            "summary": record.description,
            "servings": record.yield_servings,
            "servings_unit": record.yield_unit,
            "prep_time": record.prep_time_minutes,
            "cook_time": record.cook_time_minutes,
            "total_time": record.total_time_minutes,
            "notes": "\n\n".join(record.notes),
            "ingredients": [
                {
                    "name": group.name,
                    "uid": -1,
                    "ingredients": [
                        {"uid": uid, "amount": "", "unit": "", "name": entry, "notes": ""}
                        for uid, entry in enumerate(group.entries)
                    ],
                }
                for group in rendered.ingredient_groups
            ],
            "instructions": [
                {
                    "name": group.name,
                    "uid": group.sequence_index,
                    "instructions": [
                        {
                            "uid": step.sequence_index,
                            "name": "",
                            "text": f"<p>{step.text}</p>",
                            "image": step.image,
                            "ingredients": list(step.ingredients),
                        }
                        for step in group.steps
                    ],
                }
                for group in rendered.instruction_groups
            ],
            "nutrition": {
                "calories": nutrition_value(record.nutrition.calories),
                "protein": nutrition_value(record.nutrition.protein),
                "carbohydrates": nutrition_value(record.nutrition.carbs),
                "fat": nutrition_value(record.nutrition.fat),
            },
        },
    }
