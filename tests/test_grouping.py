"""Tests for grouping flat instructions into named steps."""

from article_recipes.render.grouping import (
    group_instructions,
    is_step_header,
    step_title,
)

FLAT_INSTRUCTIONS = [
    "Preheat the oven to 350F.",
    "Grease a loaf pan.",
    "Whisk eggs and sugar together.",
    "Fold in the flour.",
    "Pour the batter into the pan.",
]


def _shape(groups):
    return [(g.name, [s.text for s in g.steps]) for g in groups]


# -- Header detection --


def test_step_header_detection():
    assert is_step_header("Step 1: Prep")
    assert is_step_header("Stepping stones")
    assert is_step_header("For the sauce: whisk")
    assert not is_step_header("Chop vegetables")
    assert not is_step_header("step one")


# -- Grouping on headers --


def test_groups_follow_step_headers():
    groups = group_instructions(["Step 1: Prep", "Chop vegetables", "Step 2: Cook", "Boil water"])
    assert _shape(groups) == [
        ("Step 1: Prep", ["Chop vegetables"]),
        ("Step 2: Cook", ["Boil water"]),
    ]


def test_sequence_indices_are_zero_based():
    groups = group_instructions(
        ["Step 1: Prep", "Chop onions", "Mince garlic", "Step 2: Cook", "Fry it all"]
    )
    assert [g.sequence_index for g in groups] == [0, 1]
    assert [s.sequence_index for s in groups[0].steps] == [0, 1]
    assert [s.sequence_index for s in groups[1].steps] == [0]


def test_step_placeholders_stay_empty():
    step = group_instructions(["Step 1: Prep", "Chop"])[0].steps[0]
    assert step.image == 0
    assert step.ingredients == ()


def test_header_without_steps_is_dropped():
    groups = group_instructions(["Step 1: Prep", "Step 2: Cook", "Boil water"])
    assert _shape(groups) == [("Step 2: Cook", ["Boil water"])]


def test_lines_before_first_header_join_first_group():
    groups = group_instructions(["Wash your hands", "Step 1: Prep", "Chop"])
    assert _shape(groups) == [("Step 1: Prep", ["Wash your hands", "Chop"])]


# -- Chunking fallback --


def test_flat_list_is_chunked_in_pairs():
    groups = group_instructions(FLAT_INSTRUCTIONS)
    assert [len(g.steps) for g in groups] == [2, 2, 1]
    assert [g.name for g in groups] == [
        "Step 1: Prepare Ingredients",
        "Step 2: Mix Components",
        "Step 3: Cook",
    ]
    assert [s.text for g in groups for s in g.steps] == FLAT_INSTRUCTIONS


def test_chunk_titles_use_cooking_actions():
    groups = group_instructions(["Bake the cake for 30 minutes", "Let it cool"])
    assert groups[0].name == "Step 1: Bake the cake for"


def test_headers_only_fall_back_to_chunking():
    groups = group_instructions(["Step 1: Mix", "Step 2: Bake"])
    assert _shape(groups) == [("Step 1: Mix", ["Step 1: Mix", "Step 2: Bake"])]


def test_empty_instructions():
    assert group_instructions([]) == ()


# -- Step titles --


def test_action_title_takes_up_to_three_following_words():
    assert step_title(1, "Simmer the sauce gently for ten minutes") == "Simmer the sauce gently"
    assert step_title(2, "Now serve") == "serve"


def test_first_listed_action_wins_over_earlier_text():
    # "Chop" appears first in the sentence, but "Cook" comes first in the vocabulary.
    assert step_title(1, "Chop the onions and cook them") == "cook them"


def test_ordinal_titles_without_actions():
    assert step_title(4, "Wait patiently.") == "Combine"
    assert step_title(5, "Wait patiently.") == "Finish and Serve"
    assert step_title(6, "Wait patiently.") == "Step 6"


def test_action_title_slices_at_match_when_lowercasing_changes_length():
    # "İ" lowercases to two characters, shifting offsets in the lowered text.
    assert step_title(1, "İİ then Mix the batter well") == "Mix the batter well"
