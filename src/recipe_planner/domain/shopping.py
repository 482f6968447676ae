"""Domain models for shopping lists."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum


class GroupBy(StrEnum):
    """How shopping list items are grouped for display."""

    AISLE = "aisle"
    RECIPE = "recipe"
    ALPHABETICAL = "alphabetical"


class ItemFilter(StrEnum):
    """Which shopping list items are shown."""

    ALL = "all"
    CHECKED = "checked"
    UNCHECKED = "unchecked"


@dataclass
class ShoppingListItem:
    """Merged ingredient entry of a shopping list."""

    id: str
    ingredient: str
    amount: float
    unit: str
    checked: bool = False
    recipes: list[str] = field(default_factory=list)
    aisle: str | None = None


@dataclass
class ShoppingList:
    """Named shopping list generated from meal assignments."""

    id: str
    name: str
    created_at: datetime
    items: list[ShoppingListItem] = field(default_factory=list)

    @property
    def total_items(self) -> int:
        """Return the number of items."""
        return len(self.items)

    @property
    def checked_items(self) -> int:
        """Return the number of checked items."""
        return sum(1 for item in self.items if item.checked)
