"""TheMealDB client used when Spoonacular is unavailable.

MealDB meals are normalized into the Spoonacular recipe payload shape so the
rest of the application only deals with one format.
"""

from dataclasses import dataclass

import httpx

from recipe_planner.domain.errors import RecipeNotFoundError
from recipe_planner.domain.recipes import SearchFilters
from recipe_planner.services.recipes import RecipeClient

DEFAULT_READY_IN_MINUTES = 30
DEFAULT_SERVINGS = 4
SUMMARY_LENGTH = 200
MAX_INGREDIENTS = 20


@dataclass
class HttpxMealDbClient(RecipeClient):
    """HTTPX-backed TheMealDB client."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxMealDbClient":
        """Create a MealDB client with a managed httpx session."""
        return cls(base_url=base_url, http_client=httpx.AsyncClient())

    async def search_recipes(self, filters: SearchFilters) -> dict[str, object]:
        """Search meals by name. Other filters are not supported by MealDB."""
        meals = await self._get_meals("search.php", {"s": filters.query})
        results = [mealdb_meal_to_payload(meal) for meal in meals]
        return {
            "results": results,
            "offset": 0,
            "number": len(results),
            "totalResults": len(results),
        }

    async def get_recipe(self, recipe_id: int) -> dict[str, object]:
        """Look up one meal by id."""
        meals = await self._get_meals("lookup.php", {"i": recipe_id})
        if not meals:
            raise RecipeNotFoundError(recipe_id)
        return mealdb_meal_to_payload(meals[0])

    async def random_recipes(self, count: int) -> list[dict[str, object]]:
        """Fetch random meals, one request per meal."""
        recipes = []
        for _ in range(count):
            meals = await self._get_meals("random.php", {})
            if meals:
                recipes.append(mealdb_meal_to_payload(meals[0]))
        return recipes

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _get_meals(
        self, endpoint: str, params: dict[str, object]
    ) -> list[dict[str, object]]:
        response = await self.http_client.get(
            f"{self.base_url}/{endpoint}", params=params, timeout=15
        )
        response.raise_for_status()
        return response.json().get("meals") or []


def mealdb_meal_to_payload(meal: dict[str, object]) -> dict[str, object]:
    """Convert a MealDB meal into a Spoonacular-shaped recipe payload."""
    instructions = str(meal.get("strInstructions") or "")
    steps = [step.strip() for step in instructions.split(".") if step.strip()]
    area = meal.get("strArea")
    category = meal.get("strCategory")
    return {
        "id": int(meal["idMeal"]),
        "title": meal.get("strMeal", ""),
        "image": meal.get("strMealThumb") or "",
        "readyInMinutes": DEFAULT_READY_IN_MINUTES,
        "servings": DEFAULT_SERVINGS,
        "cuisines": [area] if area else [],
        "dishTypes": [category] if category else [],
        "diets": [],
        "analyzedInstructions": (
            [
                {
                    "name": "",
                    "steps": [
                        {"number": index, "step": step}
                        for index, step in enumerate(steps, start=1)
                    ],
                }
            ]
            if steps
            else []
        ),
        "extendedIngredients": _ingredients(meal),
        "summary": f"{instructions[:SUMMARY_LENGTH]}..." if instructions else "",
        "instructions": instructions,
    }


def _ingredients(meal: dict[str, object]) -> list[dict[str, object]]:
    ingredients = []
    for number in range(1, MAX_INGREDIENTS + 1):
        name = str(meal.get(f"strIngredient{number}") or "").strip()
        if not name:
            continue
        measure = str(meal.get(f"strMeasure{number}") or "").strip()
        ingredients.append(
            {
                "id": len(ingredients) + 1,
                "aisle": "",
                "name": name,
                "nameClean": name,
                "original": f"{measure} {name}".strip(),
                "amount": 1,
                "unit": measure,
            }
        )
    return ingredients
