"""Tests for time, yield and nutrition number parsing."""

from article_recipes.parser.quantities import (
    nutrition_value,
    parse_servings,
    parse_time_minutes,
)

# -- parse_time_minutes --


def test_hours_and_minutes_both_count():
    assert parse_time_minutes("1 hour 15 minutes") == 75


def test_minutes_only():
    assert parse_time_minutes("45 mins") == 45
    assert parse_time_minutes("30 minutes") == 30


def test_hours_only():
    assert parse_time_minutes("2 hrs") == 120
    assert parse_time_minutes("1 Hour") == 60


def test_fractional_hours():
    assert parse_time_minutes("1.5 hours") == 90
    assert parse_time_minutes("2.25 hrs 5 mins") == 140


def test_not_available_is_zero():
    assert parse_time_minutes("N/A") == 0


def test_empty_is_zero():
    assert parse_time_minutes("") == 0
    assert parse_time_minutes("   ") == 0
    assert parse_time_minutes(None) == 0


def test_unparseable_text_is_zero():
    assert parse_time_minutes("a while") == 0


def test_integer_and_bare_number_are_minutes():
    assert parse_time_minutes(25) == 25
    assert parse_time_minutes("25") == 25


def test_negative_integer_is_clamped():
    assert parse_time_minutes(-5) == 0


# -- parse_servings --


def test_range_is_averaged():
    assert parse_servings("4-6 servings") == 5


def test_range_average_rounds_half_up():
    assert parse_servings("4-5 people") == 5
    assert parse_servings("1 - 2") == 2


def test_single_number():
    assert parse_servings("4 servings") == 4
    assert parse_servings("Serves 12") == 12


def test_missing_servings_default_to_four():
    assert parse_servings("") == 4
    assert parse_servings(None) == 4
    assert parse_servings("N/A") == 4
    assert parse_servings("a crowd") == 4


def test_integer_servings():
    assert parse_servings(6) == 6


def test_non_positive_servings_default_to_four():
    assert parse_servings(0) == 4
    assert parse_servings("0 servings") == 4


# -- nutrition_value --


def test_nutrition_value_reads_first_number():
    assert nutrition_value("300 kcal") == 300.0
    assert nutrition_value("12.5g") == 12.5


def test_nutrition_value_missing():
    assert nutrition_value("N/A") == 0.0
    assert nutrition_value("") == 0.0
    assert nutrition_value(None) == 0.0
    assert nutrition_value("lots") == 0.0
