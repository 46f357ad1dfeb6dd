import math
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)

NOT_AVAILABLE = "N/A"


class Provenance(str, Enum):
    EXTRACTED = "extracted"
    AI_STRUCTURED = "ai_structured"
    FALLBACK = "fallback"


def _as_lines(value: Any) -> list[str]:
    """Coerce loosely typed list input into a list of stripped, non-empty strings."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split("\n")
    elif not isinstance(value, (list, tuple)):
        return []
    lines = []
    for item in value:
        if item is None:
            continue
        text = str(item).strip()
        if text:
            lines.append(text)
    return lines


class RecipeCandidate(BaseModel):
    """Recipe fields before validation, as extracted from text or sent back by the AI."""

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    description: str | None = None
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    prep_time: str | int | None = None
    cook_time: str | int | None = None
    yield_: str | int | None = Field(default=None, alias="yield")
    yield_unit: str | None = None
    notes: list[str] = Field(default_factory=list)
    nutrition_info: dict[str, str] = Field(default_factory=dict)

    @field_validator("title", "description", "yield_unit", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("ingredients", "instructions", "notes", mode="before")
    @classmethod
    def _lines(cls, value: Any) -> list[str]:
        return _as_lines(value)

    @field_validator("prep_time", "cook_time", "yield_", mode="before")
    @classmethod
    def _scalar(cls, value: Any) -> str | int | None:
        # bool is an int subclass but never a meaningful duration
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return int(value) if math.isfinite(value) else None
        if isinstance(value, str):
            return value.strip() or None
        return None

    @field_validator("nutrition_info", mode="before")
    @classmethod
    def _nutrition(cls, value: Any) -> dict[str, str]:
        if not isinstance(value, dict):
            return {}
        return {
            str(key): str(val).strip()
            for key, val in value.items()
            if val is not None and str(val).strip()
        }


class Nutrition(BaseModel):
    model_config = ConfigDict(frozen=True)

    calories: str = NOT_AVAILABLE
    protein: str = NOT_AVAILABLE
    carbs: str = NOT_AVAILABLE
    fat: str = NOT_AVAILABLE

    def as_dict(self) -> dict[str, str]:
        return {
            "Calories": self.calories,
            "Protein": self.protein,
            "Carbs": self.carbs,
            "Fat": self.fat,
        }


class CanonicalRecipeRecord(BaseModel):
    """A validated, fully defaulted recipe. The single source of truth for rendering."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    ingredients: tuple[str, ...] = Field(min_length=1)
    instructions: tuple[str, ...] = Field(min_length=1)
    prep_time_minutes: int = Field(ge=0)
    cook_time_minutes: int = Field(ge=0)
    yield_servings: int = Field(ge=1)
    yield_unit: str = "servings"
    notes: tuple[str, ...] = ()
    nutrition: Nutrition = Field(default_factory=Nutrition)
    provenance: Provenance

    @computed_field
    @property
    def total_time_minutes(self) -> int:
        return self.prep_time_minutes + self.cook_time_minutes


class InstructionStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    sequence_index: int
    text: str
    # Present in the storage schema, never populated.
    image: int = 0
    ingredients: tuple[int, ...] = ()


class InstructionGroup(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    sequence_index: int
    steps: tuple[InstructionStep, ...]


class IngredientGroup(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    entries: tuple[str, ...]


class FlatText(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["flat_text"] = "flat_text"
    body: str


class StructuredGroups(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["structured_groups"] = "structured_groups"
    ingredient_groups: tuple[IngredientGroup, ...]
    instruction_groups: tuple[InstructionGroup, ...]


RenderedRecipe = Annotated[Union[FlatText, StructuredGroups], Field(discriminator="kind")]
