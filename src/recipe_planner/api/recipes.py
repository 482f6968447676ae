"""Recipe search endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx
from fastapi import APIRouter, HTTPException, Query, Request, status

from recipe_planner.adapters.recipe_payloads import recipe_to_payload
from recipe_planner.domain.errors import RecipeNotFoundError
from recipe_planner.domain.recipes import SearchFilters

if TYPE_CHECKING:
    from recipe_planner.containers import AppContainer

_logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.get("/search")
async def search_recipes(  # noqa: PLR0913
    request: Request,
    query: str = "",
    diet: str | None = None,
    intolerances: str | None = None,
    cuisine: str | None = None,
    dish_type: str | None = Query(default=None, alias="type"),
    max_ready_time: int | None = Query(default=None, alias="maxReadyTime"),
    sort: str | None = None,
) -> dict[str, object]:
    """Search recipes, falling back to MealDB when Spoonacular is unavailable."""
    container: AppContainer = request.app.state.container
    filters = SearchFilters(
        query=query,
        diet=diet,
        intolerances=intolerances,
        cuisine=cuisine,
        dish_type=dish_type,
        max_ready_time=max_ready_time,
        sort=sort,
    )
    try:
        results = await container.recipe_service.search(filters)
    except httpx.HTTPError as exc:
        _logger.exception("Recipe search failed on every source")
        raise HTTPException(status.HTTP_502_BAD_GATEWAY) from exc
    return {
        "results": [recipe_to_payload(recipe) for recipe in results.results],
        "offset": results.offset,
        "number": results.number,
        "totalResults": results.total_results,
    }


@router.get("/random")
async def random_recipes(
    request: Request, count: int = Query(default=12, ge=1, le=50)
) -> dict[str, object]:
    """Return random recipes."""
    container: AppContainer = request.app.state.container
    try:
        recipes = await container.recipe_service.random(count)
    except httpx.HTTPError as exc:
        _logger.exception("Random recipes failed")
        raise HTTPException(status.HTTP_502_BAD_GATEWAY) from exc
    return {"recipes": [recipe_to_payload(recipe) for recipe in recipes]}


@router.get("/{recipe_id}")
async def get_recipe(recipe_id: int, request: Request) -> dict[str, object]:
    """Return recipe details including nutrition when available."""
    container: AppContainer = request.app.state.container
    try:
        recipe = await container.recipe_service.get_recipe(recipe_id)
    except RecipeNotFoundError as exc:
        raise HTTPException(status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except httpx.HTTPError as exc:
        _logger.exception("Recipe lookup failed", extra={"recipe_id": recipe_id})
        raise HTTPException(status.HTTP_502_BAD_GATEWAY) from exc
    return recipe_to_payload(recipe)
