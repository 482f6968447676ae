"""Favorite recipe endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from recipe_planner.adapters.recipe_payloads import parse_recipe, recipe_to_payload
from recipe_planner.api.schemas import FavoriteCreate
from recipe_planner.domain.errors import StoredDataError

if TYPE_CHECKING:
    from recipe_planner.containers import AppContainer

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("")
async def list_favorites(request: Request) -> dict[str, object]:
    """Return all favorite recipes."""
    container: AppContainer = request.app.state.container
    return {
        "favorites": [
            recipe_to_payload(recipe)
            for recipe in container.favorites_service.list_all()
        ]
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_favorite(body: FavoriteCreate, request: Request) -> dict[str, object]:
    """Add a recipe to favorites."""
    container: AppContainer = request.app.state.container
    try:
        recipe = parse_recipe(body.recipe)
    except StoredDataError as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if not container.favorites_service.add(recipe):
        raise HTTPException(
            status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save favorites"
        )
    return {"id": recipe.id, "favorite": True}


@router.get("/{recipe_id}")
async def is_favorite(recipe_id: int, request: Request) -> dict[str, object]:
    """Return whether a recipe is a favorite."""
    container: AppContainer = request.app.state.container
    favorite = container.favorites_service.is_member(recipe_id)
    return {"id": recipe_id, "favorite": favorite}


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite(recipe_id: int, request: Request) -> None:
    """Remove a recipe from favorites."""
    container: AppContainer = request.app.state.container
    container.favorites_service.remove(recipe_id)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_favorites(request: Request) -> None:
    """Remove every favorite."""
    container: AppContainer = request.app.state.container
    container.favorites_service.clear()
