"""Spoonacular recipe API client."""

from dataclasses import dataclass

import httpx

from recipe_planner.domain.recipes import SearchFilters
from recipe_planner.services.recipes import RecipeClient

SEARCH_PAGE_SIZE = 12


@dataclass
class HttpxSpoonacularClient(RecipeClient):
    """HTTPX-backed Spoonacular client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxSpoonacularClient":
        """Create a Spoonacular client with a managed httpx session."""
        return cls(api_key=api_key, base_url=base_url, http_client=httpx.AsyncClient())

    async def search_recipes(self, filters: SearchFilters) -> dict[str, object]:
        """Search recipes with full recipe information and ingredients."""
        params: dict[str, object] = {
            "apiKey": self.api_key,
            "query": filters.query,
            "number": SEARCH_PAGE_SIZE,
            "addRecipeInformation": "true",
            "fillIngredients": "true",
        }
        optional = {
            "diet": filters.diet,
            "intolerances": filters.intolerances,
            "cuisine": filters.cuisine,
            "type": filters.dish_type,
            "maxReadyTime": filters.max_ready_time,
            "sort": filters.sort,
        }
        params.update({key: value for key, value in optional.items() if value})
        response = await self.http_client.get(
            f"{self.base_url}/complexSearch", params=params, timeout=15
        )
        response.raise_for_status()
        return response.json()

    async def get_recipe(self, recipe_id: int) -> dict[str, object]:
        """Fetch one recipe including nutrition data."""
        response = await self.http_client.get(
            f"{self.base_url}/{recipe_id}/information",
            params={"apiKey": self.api_key, "includeNutrition": "true"},
            timeout=15,
        )
        response.raise_for_status()
        return response.json()

    async def random_recipes(self, count: int) -> list[dict[str, object]]:
        """Fetch random recipes."""
        response = await self.http_client.get(
            f"{self.base_url}/random",
            params={
                "apiKey": self.api_key,
                "number": count,
                "addRecipeInformation": "true",
            },
            timeout=15,
        )
        response.raise_for_status()
        return response.json().get("recipes", [])

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
