"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date

import pytest

from recipe_planner.adapters.kv_repositories import (
    KeyValueFavoritesRepository,
    KeyValueMealPlanRepository,
    KeyValueShoppingListRepository,
)
from recipe_planner.config import Settings
from recipe_planner.containers import AppContainer
from recipe_planner.domain.meal_plans import MealAssignment, MealSlot
from recipe_planner.domain.recipes import Ingredient, Nutrient, Recipe, SearchFilters
from recipe_planner.services.cache import InMemoryCache
from recipe_planner.services.favorites import FavoritesService
from recipe_planner.services.meal_plans import MealPlanRepository, MealPlanService
from recipe_planner.services.recipes import RecipeClient, RecipeService
from recipe_planner.services.shopping import ShoppingListService
from recipe_planner.services.storage import InMemoryKeyValueStore
from recipe_planner.services.suggestions import CompletionClient, SuggestionService


def make_ingredient(
    name: str,
    amount: float,
    unit: str = "",
    aisle: str | None = None,
    name_clean: str | None = None,
) -> Ingredient:
    return Ingredient(
        name_clean=name if name_clean is None else name_clean,
        name=name,
        original=f"{amount} {unit} {name}".strip(),
        amount=amount,
        unit=unit,
        aisle=aisle,
    )


def make_recipe(  # noqa: PLR0913
    recipe_id: int = 1,
    title: str = "Spaghetti",
    ingredients: tuple[Ingredient, ...] = (),
    nutrients: tuple[Nutrient, ...] = (),
    ready_in_minutes: int = 30,
    servings: int = 4,
) -> Recipe:
    return Recipe(
        id=recipe_id,
        title=title,
        image=f"https://img.example/{recipe_id}.jpg",
        ready_in_minutes=ready_in_minutes,
        servings=servings,
        ingredients=ingredients,
        nutrients=nutrients,
    )


def make_assignment(
    recipe: Recipe,
    day: date,
    servings: int = 1,
    slot: MealSlot = MealSlot.DINNER,
    assignment_id: str | None = None,
) -> MealAssignment:
    return MealAssignment(
        id=assignment_id or f"{recipe.id}-{day.isoformat()}-{slot.value}",
        date=day,
        slot=slot,
        recipe=recipe,
        servings=servings,
    )


def recipe_payload(recipe_id: int = 1, title: str = "Spaghetti") -> dict[str, object]:
    """Spoonacular-shaped recipe payload."""
    return {
        "id": recipe_id,
        "title": title,
        "image": f"https://img.example/{recipe_id}.jpg",
        "readyInMinutes": 25,
        "servings": 2,
        "extendedIngredients": [
            {
                "name": "pasta",
                "nameClean": "pasta",
                "original": "0.5 lb pasta",
                "amount": 0.5,
                "unit": "lb",
                "aisle": "Pasta and Rice",
            }
        ],
        "nutrition": {
            "nutrients": [
                {"name": "Calories", "amount": 600, "unit": "kcal"},
                {"name": "Protein", "amount": 20, "unit": "g"},
            ]
        },
        "diets": ["vegetarian"],
        "cuisines": ["Italian"],
    }


@dataclass
class FlakyMealPlanRepository(MealPlanRepository):
    """Meal plan repository with switchable load and save failures."""

    entries: list[MealAssignment] = field(default_factory=list)
    fail_load: bool = False
    fail_save: bool = False
    reject_save: bool = False
    save_calls: int = 0

    def load(self) -> list[MealAssignment]:
        if self.fail_load:
            raise RuntimeError("storage unavailable")
        return list(self.entries)

    def save(self, assignments: list[MealAssignment]) -> bool:
        self.save_calls += 1
        if self.fail_save:
            raise OSError("quota exceeded")
        if self.reject_save:
            return False
        self.entries = list(assignments)
        return True


@dataclass
class FakeRecipeClient(RecipeClient):
    """Recipe client with canned payloads and an optional error."""

    search_payload: dict[str, object] = field(
        default_factory=lambda: {
            "results": [recipe_payload()],
            "offset": 0,
            "number": 1,
            "totalResults": 1,
        }
    )
    recipe: dict[str, object] = field(default_factory=recipe_payload)
    error: Exception | None = None
    search_calls: int = 0
    recipe_calls: int = 0

    async def search_recipes(self, filters: SearchFilters) -> dict[str, object]:
        self.search_calls += 1
        if self.error is not None:
            raise self.error
        return self.search_payload

    async def get_recipe(self, recipe_id: int) -> dict[str, object]:
        self.recipe_calls += 1
        if self.error is not None:
            raise self.error
        return {**self.recipe, "id": recipe_id}

    async def random_recipes(self, count: int) -> list[dict[str, object]]:
        if self.error is not None:
            raise self.error
        return [{**self.recipe, "id": index} for index in range(1, count + 1)]


@dataclass
class FakeCompletionClient(CompletionClient):
    """Completion client returning a fixed reply and recording prompts."""

    reply: str = ""
    error: Exception | None = None
    calls: list[tuple[str, float, int]] = field(default_factory=list)

    async def complete(
        self, prompt: str, *, temperature: float, max_tokens: int
    ) -> str:
        self.calls.append((prompt, temperature, max_tokens))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url=None,
        supabase_service_key=None,
        spoonacular_api_key=None,
        openrouter_api_key=None,
        allowed_origins=None,
    )


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def completion_client() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def recipe_client() -> FakeRecipeClient:
    return FakeRecipeClient()


@pytest.fixture
def container(
    settings: Settings,
    store: InMemoryKeyValueStore,
    completion_client: FakeCompletionClient,
    recipe_client: FakeRecipeClient,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        store=store,
        meal_plan_service=MealPlanService(KeyValueMealPlanRepository(store)),
        shopping_list_service=ShoppingListService(
            KeyValueShoppingListRepository(store)
        ),
        favorites_service=FavoritesService(KeyValueFavoritesRepository(store)),
        recipe_service=RecipeService(
            primary=recipe_client,
            fallback=FakeRecipeClient(),
            cache=InMemoryCache(),
        ),
        suggestion_service=SuggestionService(completion_client),
        close_resources=close_resources,
    )
