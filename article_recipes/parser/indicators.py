"""Cheap pre-filter deciding whether generated text is worth a full extraction pass."""

RECIPE_INDICATORS = (
    "ingredients:",
    "instructions:",
    "preparation time:",
    "cooking time:",
    "servings:",
    "prep time:",
    "cook time:",
)


def has_recipe_indicators(text: str) -> bool:
    if not text or not isinstance(text, str):
        return False
    lowered = text.lower()
    return any(marker in lowered for marker in RECIPE_INDICATORS)
