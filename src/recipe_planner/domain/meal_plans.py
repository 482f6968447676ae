"""Domain models for meal plan assignments."""

import datetime
from dataclasses import dataclass
from enum import Enum, StrEnum

from recipe_planner.domain.recipes import Recipe


class MealSlot(StrEnum):
    """Meal slot of a calendar day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset.UNSET


@dataclass(frozen=True)
class MealAssignment:
    """A recipe placed on a date and meal slot with requested servings."""

    id: str
    date: datetime.date
    slot: MealSlot
    recipe: Recipe
    servings: int
    note: str | None = None


@dataclass(frozen=True)
class MealAssignmentPatch:
    """Partial update for a meal assignment.

    Fields left as ``UNSET`` are not changed. ``note=None`` clears the note.
    """

    date: datetime.date | str | _Unset = UNSET
    slot: MealSlot | str | _Unset = UNSET
    servings: int | _Unset = UNSET
    note: str | None | _Unset = UNSET
