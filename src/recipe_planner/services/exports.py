"""Plain-text exports of shopping lists and meal plans."""

import re
from collections.abc import Iterable, Mapping, Sequence
from datetime import date

from recipe_planner.domain.meal_plans import MealAssignment, MealSlot
from recipe_planner.domain.shopping import ShoppingListItem
from recipe_planner.domain.suggestions import MealPlanSuggestion

CHECKED_GLYPH = "✓"
UNCHECKED_GLYPH = "○"
SHARE_BULLET = "•"

_SLOT_ORDER = {slot: index for index, slot in enumerate(MealSlot)}
_UNSAFE_FILENAME = re.compile(r"[\\/:*?\"<>|]+")


def format_amount(amount: float) -> str:
    """Render an amount without a trailing .0 for whole numbers."""
    if float(amount).is_integer():
        return str(int(amount))
    return str(amount)


def render_shopping_list_text(
    groups: Mapping[str, Sequence[ShoppingListItem]],
) -> str:
    """Render grouped items with checked-state glyphs."""
    blocks = []
    for group, items in groups.items():
        lines = [group.upper()]
        for item in items:
            glyph = CHECKED_GLYPH if item.checked else UNCHECKED_GLYPH
            lines.append(f"{glyph} {_item_line(item)}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def render_shopping_list_share_text(
    groups: Mapping[str, Sequence[ShoppingListItem]],
) -> str:
    """Render grouped items as bullet points for sharing."""
    blocks = []
    for group, items in groups.items():
        lines = [group]
        lines.extend(f"{SHARE_BULLET} {_item_line(item)}" for item in items)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def render_meal_plan_text(assignments: Iterable[MealAssignment]) -> str:
    """Render assignments as one block per day, ordered by date and slot."""
    by_day: dict[date, list[MealAssignment]] = {}
    for assignment in sorted(
        assignments, key=lambda entry: (entry.date, _SLOT_ORDER[entry.slot])
    ):
        by_day.setdefault(assignment.date, []).append(assignment)

    blocks = []
    for day, entries in by_day.items():
        lines = [f"{day:%A}, {day.isoformat()}"]
        for entry in entries:
            noun = "serving" if entry.servings == 1 else "servings"
            lines.append(
                f"{entry.slot.value.capitalize()}: {entry.recipe.title} "
                f"({entry.servings} {noun})"
            )
            if entry.note:
                lines.append(f"  Note: {entry.note}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def render_meal_plan_suggestion_text(suggestion: MealPlanSuggestion, days: int) -> str:
    """Render an AI meal plan the way it is downloaded."""
    return (
        f"{days}-Day AI Meal Plan\n\n{suggestion.meal_plan}\n\n"
        f"Why This Plan Works:\n{suggestion.explanation}"
    )


def export_filename(name: str) -> str:
    """Return a safe .txt file name for an export."""
    cleaned = _UNSAFE_FILENAME.sub("", name).strip() or "export"
    return f"{cleaned}.txt"


def _item_line(item: ShoppingListItem) -> str:
    parts = [format_amount(item.amount), item.unit, item.ingredient]
    return " ".join(part for part in parts if part)
