"""Shopping list endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from fastapi import APIRouter, HTTPException, Query, Request, status
from fastapi.responses import PlainTextResponse

from recipe_planner.adapters.recipe_payloads import shopping_list_to_payload
from recipe_planner.api.schemas import ShoppingListCreate, grouped_items_to_payload
from recipe_planner.domain.shopping import GroupBy, ItemFilter
from recipe_planner.services.exports import (
    export_filename,
    render_shopping_list_share_text,
    render_shopping_list_text,
)
from recipe_planner.services.shopping import organize

if TYPE_CHECKING:
    from recipe_planner.containers import AppContainer
    from recipe_planner.domain.shopping import ShoppingList

router = APIRouter(prefix="/shopping-lists", tags=["shopping-lists"])


@router.get("")
async def list_shopping_lists(request: Request) -> dict[str, object]:
    """Return all stored shopping lists."""
    container: AppContainer = request.app.state.container
    return {
        "shoppingLists": [
            shopping_list_to_payload(entry)
            for entry in container.shopping_list_service.list_all()
        ]
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_shopping_list(
    body: ShoppingListCreate, request: Request
) -> dict[str, object]:
    """Generate a shopping list from the meal plan."""
    container: AppContainer = request.app.state.container
    if (body.start is None) != (body.end is None):
        raise HTTPException(
            status.HTTP_400_BAD_REQUEST, detail="Provide both start and end"
        )
    shopping_list = container.shopping_list_service.generate_for_range(
        body.name, container.meal_plan_service, body.start, body.end
    )
    if shopping_list is None:
        raise HTTPException(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save shopping list",
        )
    return shopping_list_to_payload(shopping_list)


@router.get("/{list_id}")
async def get_shopping_list(
    list_id: str,
    request: Request,
    group_by: GroupBy = GroupBy.AISLE,
    item_filter: ItemFilter = Query(default=ItemFilter.ALL, alias="filter"),
) -> dict[str, object]:
    """Return a shopping list with its items grouped for display."""
    container: AppContainer = request.app.state.container
    shopping_list = _get_or_404(container, list_id)
    return {
        **shopping_list_to_payload(shopping_list),
        "groups": grouped_items_to_payload(
            organize(shopping_list, group_by, item_filter)
        ),
    }


@router.post("/{list_id}/items/{item_id}/toggle")
async def toggle_item(
    list_id: str, item_id: str, request: Request
) -> dict[str, object]:
    """Flip the checked state of one item."""
    container: AppContainer = request.app.state.container
    shopping_list = container.shopping_list_service.toggle_item(list_id, item_id)
    if shopping_list is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND)
    return shopping_list_to_payload(shopping_list)


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shopping_list(list_id: str, request: Request) -> None:
    """Delete a shopping list. Unknown ids are ignored."""
    container: AppContainer = request.app.state.container
    container.shopping_list_service.delete(list_id)


@router.get("/{list_id}/export", response_class=PlainTextResponse)
async def export_shopping_list(  # noqa: PLR0913
    list_id: str,
    request: Request,
    variant: Literal["text", "share"] = "text",
    group_by: GroupBy = GroupBy.AISLE,
    item_filter: ItemFilter = Query(default=ItemFilter.ALL, alias="filter"),
) -> PlainTextResponse:
    """Download a shopping list as text, or as shareable bullet points."""
    container: AppContainer = request.app.state.container
    shopping_list = _get_or_404(container, list_id)
    groups = organize(shopping_list, group_by, item_filter)
    if variant == "share":
        return PlainTextResponse(render_shopping_list_share_text(groups))
    filename = export_filename(shopping_list.name)
    return PlainTextResponse(
        render_shopping_list_text(groups),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _get_or_404(container: AppContainer, list_id: str) -> ShoppingList:
    shopping_list = container.shopping_list_service.get(list_id)
    if shopping_list is None:
        raise HTTPException(status.HTTP_404_NOT_FOUND)
    return shopping_list
