"""Meal plan endpoints."""

from __future__ import annotations

import datetime  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import PlainTextResponse

from recipe_planner.adapters.recipe_payloads import assignment_to_payload, parse_recipe
from recipe_planner.api.schemas import (
    MealAssignmentCreate,
    MealAssignmentMove,
    MealAssignmentUpdate,
)
from recipe_planner.domain.errors import StoredDataError
from recipe_planner.domain.meal_plans import UNSET, MealAssignmentPatch
from recipe_planner.services.exports import export_filename, render_meal_plan_text

if TYPE_CHECKING:
    from recipe_planner.containers import AppContainer
    from recipe_planner.domain.meal_plans import MealAssignment

router = APIRouter(prefix="/meal-plans", tags=["meal-plans"])


@router.get("")
async def list_meal_plans(
    request: Request,
    start: datetime.date | None = None,
    end: datetime.date | None = None,
) -> dict[str, object]:
    """Return planned meals, optionally limited to an inclusive date range."""
    container: AppContainer = request.app.state.container
    assignments = _assignments_in_range(container, start, end)
    return {"mealPlans": [assignment_to_payload(entry) for entry in assignments]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_meal_plan(
    body: MealAssignmentCreate, request: Request
) -> dict[str, object]:
    """Place a recipe on a date and meal slot."""
    container: AppContainer = request.app.state.container
    try:
        recipe = parse_recipe(body.recipe)
    except StoredDataError as exc:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    assignment_id = container.meal_plan_service.create(
        recipe, body.date, body.meal_type, body.servings, body.notes
    )
    if assignment_id is None:
        raise HTTPException(
            status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save meal plan"
        )
    return {"id": assignment_id}


@router.get("/export", response_class=PlainTextResponse)
async def export_meal_plans(
    request: Request,
    start: datetime.date | None = None,
    end: datetime.date | None = None,
) -> PlainTextResponse:
    """Download the meal plan as plain text."""
    container: AppContainer = request.app.state.container
    text = render_meal_plan_text(_assignments_in_range(container, start, end))
    filename = export_filename("meal-plan")
    return PlainTextResponse(
        text, headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.get("/{assignment_id}")
async def get_meal_plan(assignment_id: str, request: Request) -> dict[str, object]:
    """Return one planned meal."""
    container: AppContainer = request.app.state.container
    return _payload_or_404(container, assignment_id)


@router.patch("/{assignment_id}")
async def update_meal_plan(
    assignment_id: str, body: MealAssignmentUpdate, request: Request
) -> dict[str, object]:
    """Apply a partial update to a planned meal."""
    container: AppContainer = request.app.state.container
    fields = body.model_fields_set
    patch = MealAssignmentPatch(
        date=body.date if "date" in fields else UNSET,
        slot=body.meal_type if "meal_type" in fields else UNSET,
        servings=body.servings if "servings" in fields else UNSET,
        note=body.notes if "notes" in fields else UNSET,
    )
    _require_assignment(container, assignment_id)
    if not container.meal_plan_service.update(assignment_id, patch):
        raise HTTPException(
            status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save meal plan"
        )
    return _payload_or_404(container, assignment_id)


@router.post("/{assignment_id}/move")
async def move_meal_plan(
    assignment_id: str, body: MealAssignmentMove, request: Request
) -> dict[str, object]:
    """Move a planned meal to another date and slot."""
    container: AppContainer = request.app.state.container
    _require_assignment(container, assignment_id)
    if not container.meal_plan_service.move(assignment_id, body.date, body.meal_type):
        raise HTTPException(
            status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save meal plan"
        )
    return _payload_or_404(container, assignment_id)


@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal_plan(assignment_id: str, request: Request) -> None:
    """Remove a planned meal. Unknown ids are ignored."""
    container: AppContainer = request.app.state.container
    container.meal_plan_service.remove(assignment_id)


def _assignments_in_range(
    container: AppContainer,
    start: datetime.date | None,
    end: datetime.date | None,
) -> list[MealAssignment]:
    if start is None and end is None:
        return container.meal_plan_service.list_all()
    if start is None or end is None:
        raise HTTPException(
            status.HTTP_400_BAD_REQUEST, detail="Provide both start and end"
        )
    return container.meal_plan_service.list_for_range(start, end)


def _payload_or_404(container: AppContainer, assignment_id: str) -> dict[str, object]:
    return assignment_to_payload(_require_assignment(container, assignment_id))


def _require_assignment(container: AppContainer, assignment_id: str) -> MealAssignment:
    assignment = container.meal_plan_service.get(assignment_id)
    if assignment is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND)
    return assignment
