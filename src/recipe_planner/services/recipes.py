"""Recipe lookups with a MealDB fallback and caching."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from recipe_planner.adapters.recipe_payloads import parse_recipe, parse_search_results
from recipe_planner.domain.errors import RecipeNotFoundError
from recipe_planner.domain.recipes import Recipe, SearchFilters, SearchResults
from recipe_planner.services.cache import Cache

_logger = logging.getLogger(__name__)


class RecipeClient(Protocol):
    """Interface for recipe sources returning Spoonacular-shaped payloads."""

    async def search_recipes(self, filters: SearchFilters) -> dict[str, object]:
        """Search recipes and return the raw paged response."""

    async def get_recipe(self, recipe_id: int) -> dict[str, object]:
        """Return the raw payload of one recipe."""

    async def random_recipes(self, count: int) -> list[dict[str, object]]:
        """Return raw payloads of random recipes."""


@dataclass
class RecipeService:
    """Searches recipes on the primary source, falling back to MealDB.

    Searches fall back when no primary source is configured, when it rejects
    the API key, or when it fails for any other reason. Recipe details and
    random picks use whichever source is configured and propagate errors.
    """

    primary: RecipeClient | None
    fallback: RecipeClient
    cache: Cache
    search_ttl_seconds: int = 600
    recipe_ttl_seconds: int = 3600

    async def search(self, filters: SearchFilters) -> SearchResults:
        """Search recipes with caching."""
        cache_key = _search_cache_key(filters)
        cached = self.cache.get(cache_key)
        if isinstance(cached, SearchResults):
            return cached

        results = parse_search_results(await self._search_payload(filters))
        self.cache.set(cache_key, results, ttl_seconds=self.search_ttl_seconds)
        for recipe in results.results:
            self.cache.set(
                f"recipes:detail:{recipe.id}",
                recipe,
                ttl_seconds=self.recipe_ttl_seconds,
            )
        return results

    async def get_recipe(self, recipe_id: int) -> Recipe:
        """Return full recipe details, including nutrition when available."""
        cache_key = f"recipes:detail:{recipe_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, Recipe) and cached.nutrients:
            return cached

        source = self.primary or self.fallback
        try:
            payload = await source.get_recipe(recipe_id)
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == httpx.codes.NOT_FOUND:
                raise RecipeNotFoundError(recipe_id) from exc
            raise
        recipe = parse_recipe(payload)
        self.cache.set(cache_key, recipe, ttl_seconds=self.recipe_ttl_seconds)
        return recipe

    async def random(self, count: int = 12) -> list[Recipe]:
        """Return random recipes from the configured source."""
        source = self.primary or self.fallback
        payloads = await source.random_recipes(count)
        return [parse_recipe(payload) for payload in payloads]

    async def _search_payload(self, filters: SearchFilters) -> dict[str, object]:
        if self.primary is None:
            _logger.info("No Spoonacular key configured, searching MealDB")
            return await self.fallback.search_recipes(filters)
        try:
            return await self.primary.search_recipes(filters)
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == httpx.codes.UNAUTHORIZED:
                _logger.error("Spoonacular rejected the API key, searching MealDB")
            else:
                _logger.warning(
                    "Spoonacular search failed (status=%s), searching MealDB",
                    exc.response.status_code,
                )
        except Exception:
            _logger.exception("Spoonacular search failed, searching MealDB")
        return await self.fallback.search_recipes(filters)


def _search_cache_key(filters: SearchFilters) -> str:
    parts = [
        filters.query.strip().lower(),
        filters.diet or "",
        filters.intolerances or "",
        filters.cuisine or "",
        filters.dish_type or "",
        str(filters.max_ready_time or ""),
        filters.sort or "",
    ]
    return "recipes:search:" + "|".join(parts)
