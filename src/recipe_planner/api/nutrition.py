"""Nutrition endpoints."""

from __future__ import annotations

import datetime  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from recipe_planner.api.schemas import nutrition_to_payload
from recipe_planner.services.nutrition import estimate_nutrition

if TYPE_CHECKING:
    from recipe_planner.containers import AppContainer

router = APIRouter(prefix="/nutrition", tags=["nutrition"])


@router.get("")
async def get_nutrition(
    request: Request,
    start: datetime.date | None = None,
    end: datetime.date | None = None,
    today: datetime.date | None = None,
) -> dict[str, object]:
    """Estimate nutrition over the planned meals.

    The weekly calorie series covers the week containing ``today``.
    """
    container: AppContainer = request.app.state.container
    service = container.meal_plan_service
    if start is None and end is None:
        assignments = service.list_all()
    elif start is None or end is None:
        raise HTTPException(
            status.HTTP_400_BAD_REQUEST, detail="Provide both start and end"
        )
    else:
        assignments = service.list_for_range(start, end)
    snapshot = estimate_nutrition(
        assignments,
        today=today,
        daily_target=container.settings.daily_calorie_target,
    )
    return nutrition_to_payload(snapshot)
