"""Format and publishing settings, passed explicitly into the rendering functions."""

import logging
import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"

DEFAULT_FLAT_TEMPLATE = (
    "**Ingredients**\n**  **\n{ingredients}\n\n**Instructions**\n** **\n{instructions}"
)
DEFAULT_INGREDIENT_FORMAT = "* {ingredient}"
DEFAULT_INSTRUCTION_FORMAT = "Step {number}: {instruction}"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for a host application. The core itself never calls this."""
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )


class FormatTemplates(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    flat_template: str = Field(default=DEFAULT_FLAT_TEMPLATE, alias="customTemplate")
    ingredient_item_format: str = Field(
        default=DEFAULT_INGREDIENT_FORMAT, alias="ingredientFormat"
    )
    instruction_item_format: str = Field(
        default=DEFAULT_INSTRUCTION_FORMAT, alias="instructionFormat"
    )

    @field_validator("flat_template", mode="before")
    @classmethod
    def _blank_flat_template(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            return DEFAULT_FLAT_TEMPLATE
        return value

    @field_validator("ingredient_item_format", mode="before")
    @classmethod
    def _blank_ingredient_format(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            return DEFAULT_INGREDIENT_FORMAT
        return value

    @field_validator("instruction_item_format", mode="before")
    @classmethod
    def _blank_instruction_format(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            return DEFAULT_INSTRUCTION_FORMAT
        return value


class RecipeFormatConfig(BaseModel):
    """How a canonical recipe should be rendered for its target.

    ``structured_output`` is set when the target is a recipe-storage plugin
    that expects grouped ingredients and instructions rather than a text block.
    """

    model_config = ConfigDict(frozen=True)

    structured_output: bool = False
    custom_formatting_enabled: bool = False
    use_fixed_template: bool = False
    templates: FormatTemplates = Field(default_factory=FormatTemplates)

    @classmethod
    def from_settings(cls, settings: dict[str, Any] | None) -> "RecipeFormatConfig":
        """Build a config from the persisted settings JSON layout."""
        settings = settings or {}
        recipe = _section(settings, "recipe")
        custom = _section(_section(settings, "wpRecipeMaker"), "customRecipeFormat")
        flags = {
            field: source[key]
            for field, source, key in (
                ("structured_output", recipe, "useWPRM"),
                ("custom_formatting_enabled", custom, "enabled"),
                ("use_fixed_template", custom, "useFixedTemplate"),
            )
            if source.get(key) is not None
        }
        return cls(
            **flags,
            templates=FormatTemplates.model_validate(
                {
                    key: custom[key]
                    for key in ("customTemplate", "ingredientFormat", "instructionFormat")
                    if key in custom
                }
            ),
        )


class RecipeSettings(BaseModel):
    """Which articles get a recipe attached."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    enabled: bool = False
    add_to_all_keywords: bool = Field(default=False, alias="addToAllKeywords")
    keywords: str = ""

    @field_validator("keywords", mode="before")
    @classmethod
    def _keywords(cls, value: Any) -> str:
        if isinstance(value, (list, tuple)):
            return ",".join(str(v) for v in value)
        return "" if value is None else str(value)


def _section(settings: dict[str, Any], key: str) -> dict[str, Any]:
    value = settings.get(key)
    return value if isinstance(value, dict) else {}
