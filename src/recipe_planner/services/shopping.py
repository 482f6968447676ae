"""Shopping list aggregation from meal assignments."""

import logging
import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import uuid4

from recipe_planner.domain.meal_plans import MealAssignment
from recipe_planner.domain.shopping import (
    GroupBy,
    ItemFilter,
    ShoppingList,
    ShoppingListItem,
)
from recipe_planner.services.meal_plans import MealPlanService

OTHER_GROUP = "Other"

_logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid4())


def build_shopping_list(
    assignments: Iterable[MealAssignment],
    name: str,
    *,
    list_id: str | None = None,
    now: datetime | None = None,
    id_factory: Callable[[], str] = _new_id,
) -> ShoppingList:
    """Merge the ingredients of all assignments into a shopping list.

    Ingredient amounts are multiplied by the assignment's servings as-is,
    without dividing by the recipe's own serving count. Ingredients merge on
    their clean name; unit and aisle come from the first occurrence.
    """
    merged: dict[str, ShoppingListItem] = {}
    for assignment in assignments:
        title = assignment.recipe.title
        for ingredient in assignment.recipe.ingredients:
            scaled = ingredient.amount * assignment.servings
            existing = merged.get(ingredient.key)
            if existing is None:
                merged[ingredient.key] = ShoppingListItem(
                    id=id_factory(),
                    ingredient=ingredient.key,
                    amount=scaled,
                    unit=ingredient.unit,
                    recipes=[title],
                    aisle=ingredient.aisle,
                )
                continue
            existing.amount += scaled
            if title not in existing.recipes:
                existing.recipes.append(title)

    items = list(merged.values())
    for item in items:
        item.amount = round_amount(item.amount)
    return ShoppingList(
        id=list_id or id_factory(),
        name=name,
        created_at=now or datetime.now(tz=UTC),
        items=items,
    )


def round_amount(amount: float) -> float:
    """Round to two decimals with halves rounded up."""
    return math.floor(amount * 100 + 0.5) / 100


def filter_items(
    items: Iterable[ShoppingListItem], item_filter: ItemFilter = ItemFilter.ALL
) -> list[ShoppingListItem]:
    """Return items matching the checked-state filter."""
    if item_filter == ItemFilter.CHECKED:
        return [item for item in items if item.checked]
    if item_filter == ItemFilter.UNCHECKED:
        return [item for item in items if not item.checked]
    return list(items)


def group_items(
    items: Iterable[ShoppingListItem], group_by: GroupBy = GroupBy.AISLE
) -> dict[str, list[ShoppingListItem]]:
    """Group items for display, sorting each group by ingredient name."""
    grouped: dict[str, list[ShoppingListItem]] = {}
    for item in items:
        grouped.setdefault(_group_key(item, group_by), []).append(item)
    for group in grouped.values():
        group.sort(key=lambda item: item.ingredient.casefold())
    return grouped


def organize(
    shopping_list: ShoppingList,
    group_by: GroupBy = GroupBy.AISLE,
    item_filter: ItemFilter = ItemFilter.ALL,
) -> dict[str, list[ShoppingListItem]]:
    """Filter then group the items of a shopping list."""
    return group_items(filter_items(shopping_list.items, item_filter), group_by)


def _group_key(item: ShoppingListItem, group_by: GroupBy) -> str:
    if group_by == GroupBy.RECIPE:
        return item.recipes[0] if item.recipes else OTHER_GROUP
    if group_by == GroupBy.ALPHABETICAL:
        return item.ingredient[:1].upper()
    return item.aisle or OTHER_GROUP


class ShoppingListRepository(Protocol):
    """Persistence interface for generated shopping lists."""

    def load(self) -> list[ShoppingList]:
        """Return all stored shopping lists."""

    def save(self, shopping_lists: list[ShoppingList]) -> bool:
        """Replace the stored shopping lists, returning False on failure."""


@dataclass
class ShoppingListService:
    """Generates shopping lists and keeps their checked state."""

    repository: ShoppingListRepository

    def generate(
        self, name: str, assignments: Sequence[MealAssignment]
    ) -> ShoppingList | None:
        """Build a shopping list from assignments and store it."""
        shopping_list = build_shopping_list(assignments, name)
        stored = self._load()
        if stored is None:
            return None
        if not self._save([*stored, shopping_list]):
            return None
        _logger.info(
            "Generated shopping list %s with %s items",
            shopping_list.id,
            shopping_list.total_items,
        )
        return shopping_list

    def generate_for_range(
        self,
        name: str,
        meal_plans: MealPlanService,
        start: date | str | None = None,
        end: date | str | None = None,
    ) -> ShoppingList | None:
        """Build a shopping list from the meal plan, optionally date bounded."""
        if start is None or end is None:
            assignments = meal_plans.list_all()
        else:
            assignments = meal_plans.list_for_range(start, end)
        return self.generate(name, assignments)

    def list_all(self) -> list[ShoppingList]:
        """Return all stored shopping lists."""
        return self._load() or []

    def get(self, list_id: str) -> ShoppingList | None:
        """Return a stored shopping list by id."""
        for shopping_list in self.list_all():
            if shopping_list.id == list_id:
                return shopping_list
        return None

    def toggle_item(self, list_id: str, item_id: str) -> ShoppingList | None:
        """Flip the checked state of one item and return the updated list."""
        stored = self._load()
        if stored is None:
            return None
        for shopping_list in stored:
            if shopping_list.id != list_id:
                continue
            for item in shopping_list.items:
                if item.id == item_id:
                    item.checked = not item.checked
                    break
            else:
                _logger.info("Item %s not found in list %s", item_id, list_id)
                return None
            if not self._save(stored):
                return None
            return shopping_list
        _logger.info("Shopping list %s not found", list_id)
        return None

    def delete(self, list_id: str) -> None:
        """Delete a stored shopping list. Unknown ids are ignored."""
        stored = self._load()
        if stored is None:
            return
        remaining = [entry for entry in stored if entry.id != list_id]
        if len(remaining) != len(stored):
            self._save(remaining)

    def _load(self) -> list[ShoppingList] | None:
        try:
            return list(self.repository.load())
        except Exception:
            _logger.exception("Failed to load shopping lists")
            return None

    def _save(self, shopping_lists: list[ShoppingList]) -> bool:
        try:
            saved = self.repository.save(shopping_lists)
        except Exception:
            _logger.exception("Failed to save shopping lists")
            return False
        if not saved:
            _logger.error("Shopping list storage rejected the update")
        return bool(saved)
