"""String helpers for attaching a recipe to article content before it is published."""

import logging
import re

from article_recipes.config import RecipeSettings
from article_recipes.models import CanonicalRecipeRecord

logger = logging.getLogger(__name__)

_H2_RE = re.compile(r"<h2[^>]*>.*?</h2>", re.IGNORECASE | re.DOTALL)
_SHORTCODE_RE = re.compile(r"\[wprm-recipe[^\]]*\]")
_EXTRA_BLANK_LINES_RE = re.compile(r"\n\n\n+")


def should_add_recipe(keyword: str, settings: RecipeSettings) -> bool:
    """Whether an article for this keyword gets a recipe attached."""
    if not settings.enabled:
        return False
    if settings.add_to_all_keywords:
        return True

    recipe_keywords = [k.strip().lower() for k in settings.keywords.split(",")]
    keyword = keyword.lower()
    matched = any(k and k in keyword for k in recipe_keywords)
    logger.debug("Recipe keyword match for %r: %s", keyword, matched)
    return matched


def render_recipe_blocks(record: CanonicalRecipeRecord) -> str:
    """WordPress block markup for a recipe embedded directly in the post body."""
    ingredients = "\n".join(f"<li>{item}</li>" for item in record.ingredients)
    instructions = "\n".join(f"<li>{step}</li>" for step in record.instructions)
    return (
        "<!-- wp:paragraph -->\n"
        f"<p>{record.description}</p>\n"
        "<!-- /wp:paragraph -->\n\n"
        "<!-- wp:heading -->\n<h2>Ingredients</h2>\n<!-- /wp:heading -->\n\n"
        f"<!-- wp:list -->\n<ul>\n{ingredients}\n</ul>\n<!-- /wp:list -->\n\n"
        "<!-- wp:heading -->\n<h2>Instructions</h2>\n<!-- /wp:heading -->\n\n"
        '<!-- wp:list {"ordered":true} -->\n'
        f"<ol>\n{instructions}\n</ol>\n<!-- /wp:list -->"
    )


def insert_recipe_section(content: str, record: CanonicalRecipeRecord) -> str:
    """Place the recipe before the article's second h2, or at the end."""
    section = (
        f"\n\n<!-- wp:heading -->\n<h2>Recipe: {record.title}</h2>\n<!-- /wp:heading -->\n\n"
        + render_recipe_blocks(record)
    )
    first = _H2_RE.search(content)
    if first:
        second = content.find("<h2", first.end())
        if second != -1:
            return content[:second] + section + "\n\n" + content[second:]
    return content + section


def append_recipe_shortcode(content: str, recipe_id: int) -> str:
    """Append a recipe shortcode, replacing any that are already in the content."""
    existing = _SHORTCODE_RE.findall(content)
    if existing:
        logger.info("Removing %d existing recipe shortcode(s)", len(existing))
        content = _SHORTCODE_RE.sub("", content)
        content = _EXTRA_BLANK_LINES_RE.sub("\n\n", content)
    shortcode = f'[wprm-recipe id="{recipe_id}"]'
    return content.strip() + "\n\n<!-- WP Recipe Maker Recipe -->\n" + shortcode + "\n\n"
