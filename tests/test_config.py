"""Tests for format settings and logging setup."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from article_recipes.config import (
    DEFAULT_FLAT_TEMPLATE,
    DEFAULT_INGREDIENT_FORMAT,
    DEFAULT_INSTRUCTION_FORMAT,
    RecipeFormatConfig,
    configure_logging,
)

SETTINGS = {
    "recipe": {"enabled": True, "useWPRM": False},
    "wpRecipeMaker": {
        "customRecipeFormat": {
            "enabled": True,
            "useFixedTemplate": False,
            "customTemplate": "Ingredients:\n{ingredients}\n\nSteps:\n{instructions}",
            "instructionFormat": "{number}) {instruction}",
        }
    },
}


def test_defaults():
    config = RecipeFormatConfig()
    assert not config.structured_output
    assert not config.custom_formatting_enabled
    assert not config.use_fixed_template
    assert config.templates.flat_template == DEFAULT_FLAT_TEMPLATE
    assert config.templates.ingredient_item_format == DEFAULT_INGREDIENT_FORMAT
    assert config.templates.instruction_item_format == DEFAULT_INSTRUCTION_FORMAT


def test_from_settings():
    config = RecipeFormatConfig.from_settings(SETTINGS)
    assert not config.structured_output
    assert config.custom_formatting_enabled
    assert not config.use_fixed_template
    assert config.templates.flat_template.startswith("Ingredients:\n{ingredients}")
    assert config.templates.ingredient_item_format == DEFAULT_INGREDIENT_FORMAT
    assert config.templates.instruction_item_format == "{number}) {instruction}"


def test_from_settings_structured_target():
    config = RecipeFormatConfig.from_settings({"recipe": {"useWPRM": True}})
    assert config.structured_output


def test_from_settings_tolerates_missing_or_odd_sections():
    assert RecipeFormatConfig.from_settings(None) == RecipeFormatConfig()
    assert RecipeFormatConfig.from_settings({"wpRecipeMaker": "nope"}) == RecipeFormatConfig()


def test_blank_custom_template_falls_back():
    config = RecipeFormatConfig.from_settings(
        {"wpRecipeMaker": {"customRecipeFormat": {"enabled": True, "customTemplate": ""}}}
    )
    assert config.templates.flat_template == DEFAULT_FLAT_TEMPLATE


def test_config_is_read_only():
    config = RecipeFormatConfig()
    with pytest.raises(ValidationError):
        config.structured_output = True


@patch("article_recipes.config.logging.basicConfig")
def test_configure_logging_reads_env(mock_basic_config, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    configure_logging()
    assert mock_basic_config.call_args.kwargs["level"] == "DEBUG"


@patch("article_recipes.config.logging.basicConfig")
def test_configure_logging_explicit_level(mock_basic_config):
    configure_logging("warning")
    assert mock_basic_config.call_args.kwargs["level"] == "WARNING"


def test_string_flags_are_coerced_not_truthy():
    config = RecipeFormatConfig.from_settings(
        {
            "recipe": {"useWPRM": "false"},
            "wpRecipeMaker": {"customRecipeFormat": {"enabled": "true", "useFixedTemplate": None}},
        }
    )
    assert not config.structured_output
    assert config.custom_formatting_enabled
    assert not config.use_fixed_template
