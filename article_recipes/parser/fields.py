"""Per-field extraction from generated article HTML.

Every field is an ordered tuple of strategies. A strategy is a pure function
from the raw text to a value, or ``None`` when it finds nothing; the first
strategy that returns something wins.
"""

import logging
import re
from collections.abc import Callable, Iterator, Sequence
from typing import TypeVar

from bs4 import BeautifulSoup, NavigableString, PageElement, Tag

from article_recipes.models import RecipeCandidate

logger = logging.getLogger(__name__)

T = TypeVar("T")
Strategy = Callable[[str], T | None]

_HEADING_TAGS = ["h2", "h3"]

_INGREDIENTS_RE = re.compile(r"ingredients", re.IGNORECASE)
_INSTRUCTIONS_RE = re.compile(r"instructions", re.IGNORECASE)
_NOTES_RE = re.compile(r"notes|tips", re.IGNORECASE)
_NUTRITION_RE = re.compile(r"nutrition", re.IGNORECASE)
_RECIPE_RE = re.compile(r"recipe", re.IGNORECASE)
_RECIPE_PREFIX_RE = re.compile(r"^recipe:\s*", re.IGNORECASE)
_RECIPE_SUFFIX_RE = re.compile(r"\s*\brecipe$", re.IGNORECASE)

_UNIT = r"(?:minute|min|hour|hr)s?"
_DURATION = rf"\d+(?:\.\d+)?\s*{_UNIT}(?:\s*(?:and\s+)?\d+\s*(?:minute|min)s?)?"
_PREP_TIME_RE = re.compile(rf"prep(?:aration)?\s+time:?\s*({_DURATION})", re.IGNORECASE)
_COOK_TIME_RE = re.compile(rf"cook(?:ing)?\s+time:?\s*({_DURATION})", re.IGNORECASE)
_SERVINGS_RE = re.compile(
    r"(?:servings|yield|serves):?\s*"
    r"(\d+(?:\s*-\s*\d+)?(?:\s*(?:person|people|serving)s?)?)",
    re.IGNORECASE,
)

_CALORIES_RE = re.compile(r"calories:?\s*(\d+(?:\.\d+)?\s*(?:kcal)?)", re.IGNORECASE)
_NUTRIENT_PATTERNS = {
    "Protein": re.compile(r"protein:?\s*(\d+(?:\.\d+)?\s*g)", re.IGNORECASE),
    "Carbs": re.compile(r"carb(?:ohydrate)?s?:?\s*(\d+(?:\.\d+)?\s*g)", re.IGNORECASE),
    "Fat": re.compile(r"fat:?\s*(\d+(?:\.\d+)?\s*g)", re.IGNORECASE),
}


def first_success(strategies: Sequence[Strategy[T]], text: str) -> T | None:
    """Run strategies in order and return the first non-empty result."""
    for strategy in strategies:
        value = strategy(text)
        if value:
            logger.debug("%s matched", strategy.__name__)
            return value
        logger.debug("%s found nothing", strategy.__name__)
    return None


# -- Markup helpers --


def _soup(text: str) -> BeautifulSoup:
    return BeautifulSoup(text, "html.parser")


def _clean(element: PageElement) -> str:
    """Text of an element with markup removed and whitespace collapsed."""
    return " ".join(element.get_text().split())


def _headings(text: str, pattern: re.Pattern | None = None) -> list[Tag]:
    headings = _soup(text).find_all(_HEADING_TAGS)
    if pattern is None:
        return headings
    return [h for h in headings if pattern.search(h.get_text())]


def _section(heading: Tag) -> Iterator[PageElement]:
    """Elements after a heading, in document order, up to the next h2/h3."""
    inside = {id(node) for node in heading.descendants}
    for element in heading.next_elements:
        if id(element) in inside:
            continue
        if isinstance(element, Tag) and element.name in _HEADING_TAGS:
            return
        yield element


def _first_in_section(heading: Tag, names: Sequence[str]) -> Tag | None:
    for element in _section(heading):
        if isinstance(element, Tag) and element.name in names:
            return element
    return None


def _list_items(list_tag: Tag) -> list[str]:
    items = [_clean(li) for li in list_tag.find_all("li")]
    return [item for item in items if item]


def _list_after_heading(text: str, label: re.Pattern, list_tag: str) -> list[str] | None:
    for heading in _headings(text, label):
        found = _first_in_section(heading, [list_tag])
        if found is None:
            continue
        items = _list_items(found)
        if items:
            return items
    return None


def _first_list(text: str, list_tag: str) -> list[str] | None:
    found = _soup(text).find(list_tag)
    if found is None:
        return None
    return _list_items(found) or None


def _plain_text(text: str) -> str:
    return _soup(text).get_text(" ")


# -- Title --


def title_from_recipe_affix(text: str) -> str | None:
    """A heading like "Recipe: Banana Bread" or "Banana Bread Recipe"."""
    for heading in _headings(text):
        heading_text = _clean(heading)
        stripped = _RECIPE_SUFFIX_RE.sub("", _RECIPE_PREFIX_RE.sub("", heading_text))
        if stripped and stripped != heading_text:
            return stripped.strip()
    return None


def title_from_recipe_heading(text: str) -> str | None:
    for heading in _headings(text, _RECIPE_RE):
        heading_text = _clean(heading)
        if heading_text:
            return heading_text
    return None


def title_before_ingredients(text: str) -> str | None:
    """The heading whose section mentions ingredients before the next heading starts."""
    for heading in _headings(text):
        section_text = "".join(
            str(element) for element in _section(heading) if isinstance(element, NavigableString)
        )
        if _INGREDIENTS_RE.search(section_text):
            heading_text = _clean(heading)
            if heading_text:
                return heading_text
    return None


TITLE_STRATEGIES: tuple[Strategy[str], ...] = (
    title_from_recipe_affix,
    title_from_recipe_heading,
    title_before_ingredients,
)


# -- Ingredients and instructions --


def ingredients_after_heading(text: str) -> list[str] | None:
    return _list_after_heading(text, _INGREDIENTS_RE, "ul")


def first_bulleted_list(text: str) -> list[str] | None:
    return _first_list(text, "ul")


def instructions_after_heading(text: str) -> list[str] | None:
    return _list_after_heading(text, _INSTRUCTIONS_RE, "ol")


def first_ordered_list(text: str) -> list[str] | None:
    return _first_list(text, "ol")


INGREDIENT_STRATEGIES: tuple[Strategy[list[str]], ...] = (
    ingredients_after_heading,
    first_bulleted_list,
)
INSTRUCTION_STRATEGIES: tuple[Strategy[list[str]], ...] = (
    instructions_after_heading,
    first_ordered_list,
)


# -- Timing and yield --


def prep_time(text: str) -> str | None:
    match = _PREP_TIME_RE.search(_plain_text(text))
    return " ".join(match.group(1).split()) if match else None


def cook_time(text: str) -> str | None:
    match = _COOK_TIME_RE.search(_plain_text(text))
    return " ".join(match.group(1).split()) if match else None


def servings(text: str) -> str | None:
    match = _SERVINGS_RE.search(_plain_text(text))
    return " ".join(match.group(1).split()) if match else None


# -- Notes and nutrition --


def notes_after_heading(text: str) -> list[str] | None:
    for heading in _headings(text, _NOTES_RE):
        found = _first_in_section(heading, ["ul", "p"])
        if found is None:
            continue
        if found.name == "ul":
            items = _list_items(found)
            if items:
                return items
        else:
            note = _clean(found)
            if note:
                return [note]
    return None


def nutrition_after_heading(text: str) -> dict[str, str] | None:
    for heading in _headings(text, _NUTRITION_RE):
        found = _first_in_section(heading, ["ul", "p"])
        if found is None:
            continue
        nutrition = parse_nutrition_text(found.get_text(" "))
        if nutrition:
            return nutrition
    return None


def parse_nutrition_text(text: str) -> dict[str, str]:
    nutrition = {}
    calories = _CALORIES_RE.search(text)
    if calories:
        value = calories.group(1).strip()
        if "kcal" not in value.lower():
            value += " kcal"
        nutrition["Calories"] = value
    for name, pattern in _NUTRIENT_PATTERNS.items():
        match = pattern.search(text)
        if match:
            nutrition[name] = match.group(1).strip()
    return nutrition


def extract_fields(text: str, keyword: str) -> RecipeCandidate:
    """Run every field's strategies over the text. Missing fields stay unset."""
    return RecipeCandidate(
        title=first_success(TITLE_STRATEGIES, text) or keyword,
        ingredients=first_success(INGREDIENT_STRATEGIES, text) or [],
        instructions=first_success(INSTRUCTION_STRATEGIES, text) or [],
        prep_time=first_success((prep_time,), text),
        cook_time=first_success((cook_time,), text),
        yield_=first_success((servings,), text),
        notes=first_success((notes_after_heading,), text) or [],
        nutrition_info=first_success((nutrition_after_heading,), text) or {},
    )
