"""Repositories that keep JSON payloads in a key-value store."""

from dataclasses import dataclass

from recipe_planner.adapters.recipe_payloads import (
    assignment_to_payload,
    parse_assignment,
    parse_recipe,
    parse_shopping_list,
    recipe_to_payload,
    shopping_list_to_payload,
)
from recipe_planner.domain.errors import StoredDataError
from recipe_planner.domain.meal_plans import MealAssignment
from recipe_planner.domain.recipes import Recipe
from recipe_planner.domain.shopping import ShoppingList
from recipe_planner.services.favorites import FavoritesRepository
from recipe_planner.services.meal_plans import MealPlanRepository
from recipe_planner.services.shopping import ShoppingListRepository
from recipe_planner.services.storage import KeyValueStore

FAVORITES_KEY = "recipe-finder-favorites"
MEAL_PLANS_KEY = "recipe-finder-meal-plans"
SHOPPING_LISTS_KEY = "recipe-finder-shopping-lists"


def storage_key(base: str, namespace: str | None) -> str:
    """Return the key, prefixed with the namespace when one is set."""
    return f"{namespace}:{base}" if namespace else base


def _load_list(store: KeyValueStore, key: str) -> list[object]:
    raw = store.get(key)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise StoredDataError(
            f"Expected a list under {key!r}, got {type(raw).__name__}"
        )
    return raw


@dataclass
class KeyValueMealPlanRepository(MealPlanRepository):
    """Meal assignments stored as one JSON array."""

    store: KeyValueStore
    namespace: str | None = None

    @property
    def key(self) -> str:
        return storage_key(MEAL_PLANS_KEY, self.namespace)

    def load(self) -> list[MealAssignment]:
        entries = _load_list(self.store, self.key)
        return [parse_assignment(entry) for entry in entries]

    def save(self, assignments: list[MealAssignment]) -> bool:
        payload = [assignment_to_payload(entry) for entry in assignments]
        self.store.set(self.key, payload)
        return True


@dataclass
class KeyValueShoppingListRepository(ShoppingListRepository):
    """Shopping lists stored as one JSON array."""

    store: KeyValueStore
    namespace: str | None = None

    @property
    def key(self) -> str:
        return storage_key(SHOPPING_LISTS_KEY, self.namespace)

    def load(self) -> list[ShoppingList]:
        entries = _load_list(self.store, self.key)
        return [parse_shopping_list(entry) for entry in entries]

    def save(self, shopping_lists: list[ShoppingList]) -> bool:
        self.store.set(
            self.key, [shopping_list_to_payload(entry) for entry in shopping_lists]
        )
        return True


@dataclass
class KeyValueFavoritesRepository(FavoritesRepository):
    """Favorite recipes stored as one JSON array."""

    store: KeyValueStore
    namespace: str | None = None

    @property
    def key(self) -> str:
        return storage_key(FAVORITES_KEY, self.namespace)

    def load(self) -> list[Recipe]:
        return [parse_recipe(entry) for entry in _load_list(self.store, self.key)]

    def save(self, recipes: list[Recipe]) -> bool:
        self.store.set(self.key, [recipe_to_payload(recipe) for recipe in recipes])
        return True
