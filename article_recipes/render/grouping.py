"""Partition a flat instruction list into named, ordered step groups."""

import re
from collections.abc import Sequence

from article_recipes.models import InstructionGroup, InstructionStep

CHUNK_SIZE = 2

# Listed order decides ties: the first action found anywhere in the
# instruction wins, even if another one appears earlier in the text.
COOKING_ACTIONS = (
    "Prepare",
    "Mix",
    "Combine",
    "Cook",
    "Bake",
    "Grill",
    "Roast",
    "Sauté",
    "Chop",
    "Slice",
    "Dice",
    "Boil",
    "Simmer",
    "Fry",
    "Assemble",
    "Serve",
)

DEFAULT_STEP_TITLES = {
    1: "Prepare Ingredients",
    2: "Mix Components",
    3: "Cook",
    4: "Combine",
    5: "Finish and Serve",
}


def is_step_header(line: str) -> bool:
    return line.startswith("Step") or ":" in line


def step_title(step_number: int, instruction: str) -> str:
    """A short title for a synthesized step: the cooking action and up to three words after it."""
    for action in COOKING_ACTIONS:
        match = re.search(re.escape(action), instruction, re.IGNORECASE)
        if match:
            return " ".join(instruction[match.start() :].split()[:4])
    return DEFAULT_STEP_TITLES.get(step_number, f"Step {step_number}")


def group_instructions(instructions: Sequence[str]) -> tuple[InstructionGroup, ...]:
    named = _split_on_headers(instructions) or _chunk(instructions)
    return tuple(
        InstructionGroup(
            name=name,
            sequence_index=group_index,
            steps=tuple(
                InstructionStep(sequence_index=step_index, text=text)
                for step_index, text in enumerate(lines)
            ),
        )
        for group_index, (name, lines) in enumerate(named)
    )


def _split_on_headers(instructions: Sequence[str]) -> list[tuple[str, list[str]]]:
    # A header with nothing under it is dropped; lines seen before the first
    # header end up under that header.
    groups: list[tuple[str, list[str]]] = []
    header: str | None = None
    pending: list[str] = []
    for line in instructions:
        if is_step_header(line):
            if header is not None and pending:
                groups.append((header, pending))
                pending = []
            header = line
        else:
            pending.append(line)
    if header is not None and pending:
        groups.append((header, pending))
    return groups


def _chunk(instructions: Sequence[str]) -> list[tuple[str, list[str]]]:
    groups = []
    for start in range(0, len(instructions), CHUNK_SIZE):
        lines = list(instructions[start : start + CHUNK_SIZE])
        number = start // CHUNK_SIZE + 1
        groups.append((f"Step {number}: {step_title(number, lines[0])}", lines))
    return groups
