"""AI suggestion endpoints and the raw completion proxy."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import JSONResponse
from openai import APIStatusError

from recipe_planner.adapters.recipe_payloads import assignment_to_payload, parse_recipe
from recipe_planner.api.schemas import (
    CompletionRequest,
    MealPlanRequest,
    ModifyRecipeRequest,
    PlanSuggestionRequest,
    RecommendationRequest,
    ShoppingOptimizationRequest,
)
from recipe_planner.domain.errors import StoredDataError, SuggestionUnavailableError
from recipe_planner.services.exports import render_meal_plan_suggestion_text
from recipe_planner.services.suggestions import suggestion_to_recipe

if TYPE_CHECKING:
    from recipe_planner.containers import AppContainer

_logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/recommendations")
async def recommendations(
    body: RecommendationRequest, request: Request
) -> dict[str, object]:
    """Suggest recipes for the given preferences."""
    container: AppContainer = request.app.state.container
    suggestions = await container.suggestion_service.recommend_recipes(
        body.preferences, body.count
    )
    return {
        "recommendations": [
            suggestion.model_dump(by_alias=True) for suggestion in suggestions
        ]
    }


@router.post("/recommendations/plan", status_code=status.HTTP_201_CREATED)
async def plan_recommendation(
    body: PlanSuggestionRequest, request: Request
) -> dict[str, object]:
    """Place an AI suggested recipe on the meal plan."""
    container: AppContainer = request.app.state.container
    recipe = suggestion_to_recipe(
        body.suggestion, servings=container.settings.default_servings
    )
    service = container.meal_plan_service
    assignment_id = service.create(recipe, body.date, body.meal_type, body.servings)
    assignment = service.get(assignment_id) if assignment_id else None
    if assignment is None:
        raise HTTPException(
            status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save meal plan"
        )
    return assignment_to_payload(assignment)


@router.post("/meal-plan")
async def meal_plan(body: MealPlanRequest, request: Request) -> dict[str, object]:
    """Suggest a free-text meal plan along with its downloadable text."""
    container: AppContainer = request.app.state.container
    suggestion = await container.suggestion_service.suggest_meal_plan(
        body.preferences, body.days
    )
    return {
        **suggestion.model_dump(by_alias=True),
        "text": render_meal_plan_suggestion_text(suggestion, body.days),
    }


@router.post("/modify")
async def modify(body: ModifyRecipeRequest, request: Request) -> dict[str, object]:
    """Rewrite a recipe according to the requested modifications."""
    container: AppContainer = request.app.state.container
    try:
        recipe = parse_recipe(body.recipe)
    except StoredDataError as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    modification = await container.suggestion_service.modify_recipe(
        recipe, body.modifications
    )
    return modification.model_dump(by_alias=True)


@router.post("/shopping-optimization")
async def shopping_optimization(
    body: ShoppingOptimizationRequest, request: Request
) -> dict[str, object]:
    """Organize ingredients by store section with saving tips."""
    container: AppContainer = request.app.state.container
    optimization = await container.suggestion_service.optimize_shopping_list(
        body.ingredients, body.budget, body.store_type
    )
    return optimization.model_dump(by_alias=True)


@router.post("/openrouter")
async def openrouter_proxy(
    request: Request, body: CompletionRequest | None = None
) -> JSONResponse:
    """Forward a raw prompt and wrap the reply as ``{success, data, error}``."""
    container: AppContainer = request.app.state.container
    if body is None or not body.prompt:
        return _envelope(status.HTTP_400_BAD_REQUEST, error="Missing prompt")
    try:
        content = await container.suggestion_service.complete(
            body.prompt, temperature=body.temperature, max_tokens=body.max_tokens
        )
    except SuggestionUnavailableError as exc:
        return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, error=str(exc))
    except APIStatusError as exc:
        _logger.warning("OpenRouter returned status %s", exc.status_code)
        return _envelope(exc.status_code, error=exc.message)
    except Exception as exc:
        _logger.exception("OpenRouter completion failed")
        return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, error=str(exc))
    return _envelope(status.HTTP_200_OK, data={"content": content})


@router.api_route("/openrouter", methods=["GET", "PUT", "PATCH", "DELETE"])
async def openrouter_method_not_allowed() -> JSONResponse:
    """Reject non-POST proxy calls with the proxy envelope."""
    return _envelope(status.HTTP_405_METHOD_NOT_ALLOWED, error="Method not allowed")


def _envelope(
    status_code: int,
    *,
    data: dict[str, object] | None = None,
    error: str | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": error is None, "data": data, "error": error},
    )
