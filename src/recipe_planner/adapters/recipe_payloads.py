"""Conversion between domain models and camelCase JSON payloads.

Recipes use the Spoonacular response shape (``readyInMinutes``,
``extendedIngredients``, ``nutrition.nutrients``). Stored meal plans and
shopping lists embed recipes in the same shape so saved data stays readable
by anything that understands the recipe API.
"""

from collections.abc import Mapping
from datetime import date, datetime

from recipe_planner.domain.errors import StoredDataError
from recipe_planner.domain.meal_plans import MealAssignment, MealSlot
from recipe_planner.domain.recipes import Ingredient, Nutrient, Recipe, SearchResults
from recipe_planner.domain.shopping import ShoppingList, ShoppingListItem


def parse_recipe(payload: object) -> Recipe:
    """Parse a recipe payload, filling absent optional fields with defaults."""
    row = _require_mapping(payload, "recipe")
    try:
        nutrition = row.get("nutrition") or {}
        return Recipe(
            id=int(row["id"]),
            title=str(row.get("title", "")),
            image=str(row.get("image") or ""),
            ready_in_minutes=int(row.get("readyInMinutes") or 0),
            servings=int(row.get("servings") or 0),
            ingredients=tuple(
                _parse_ingredient(item)
                for item in row.get("extendedIngredients") or []
            ),
            nutrients=tuple(
                _parse_nutrient(item) for item in nutrition.get("nutrients") or []
            ),
            diets=tuple(str(diet) for diet in row.get("diets") or []),
            cuisines=tuple(str(cuisine) for cuisine in row.get("cuisines") or []),
            dish_types=tuple(str(kind) for kind in row.get("dishTypes") or []),
            summary=str(row.get("summary") or ""),
            instructions=str(row.get("instructions") or ""),
            steps=_parse_steps(row.get("analyzedInstructions") or []),
        )
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise StoredDataError(f"Malformed recipe payload: {exc}") from exc


def recipe_to_payload(recipe: Recipe) -> dict[str, object]:
    """Serialize a recipe to its camelCase payload."""
    payload: dict[str, object] = {
        "id": recipe.id,
        "title": recipe.title,
        "image": recipe.image,
        "readyInMinutes": recipe.ready_in_minutes,
        "servings": recipe.servings,
        "extendedIngredients": [
            {
                "name": ingredient.name,
                "nameClean": ingredient.name_clean,
                "original": ingredient.original,
                "amount": ingredient.amount,
                "unit": ingredient.unit,
                "aisle": ingredient.aisle,
            }
            for ingredient in recipe.ingredients
        ],
        "diets": list(recipe.diets),
        "cuisines": list(recipe.cuisines),
        "dishTypes": list(recipe.dish_types),
        "summary": recipe.summary,
        "instructions": recipe.instructions,
        "analyzedInstructions": (
            [
                {
                    "name": "",
                    "steps": [
                        {"number": index, "step": step}
                        for index, step in enumerate(recipe.steps, start=1)
                    ],
                }
            ]
            if recipe.steps
            else []
        ),
    }
    if recipe.nutrients:
        payload["nutrition"] = {
            "nutrients": [
                {"name": item.name, "amount": item.amount, "unit": item.unit}
                for item in recipe.nutrients
            ]
        }
    return payload


def parse_search_results(payload: object) -> SearchResults:
    """Parse a paged recipe search response."""
    row = _require_mapping(payload, "search results")
    results = [parse_recipe(item) for item in row.get("results") or []]
    try:
        return SearchResults(
            results=results,
            offset=int(row.get("offset") or 0),
            number=int(row.get("number") or len(results)),
            total_results=int(row.get("totalResults") or len(results)),
        )
    except (TypeError, ValueError) as exc:
        raise StoredDataError(f"Malformed search results: {exc}") from exc


def parse_assignment(payload: object) -> MealAssignment:
    """Parse a stored meal plan entry."""
    row = _require_mapping(payload, "meal plan")
    try:
        servings = row["servings"]
        if isinstance(servings, bool) or not isinstance(servings, int):
            raise ValueError(f"servings must be an integer, got {servings!r}")
        return MealAssignment(
            id=str(row["id"]),
            date=date.fromisoformat(str(row["date"])),
            slot=MealSlot(row["mealType"]),
            recipe=parse_recipe(row["recipe"]),
            servings=servings,
            note=row.get("notes"),
        )
    except StoredDataError:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise StoredDataError(f"Malformed meal plan entry: {exc}") from exc


def assignment_to_payload(assignment: MealAssignment) -> dict[str, object]:
    """Serialize a meal assignment for storage."""
    payload: dict[str, object] = {
        "id": assignment.id,
        "date": assignment.date.isoformat(),
        "mealType": assignment.slot.value,
        "recipe": recipe_to_payload(assignment.recipe),
        "servings": assignment.servings,
    }
    if assignment.note is not None:
        payload["notes"] = assignment.note
    return payload


def parse_shopping_list(payload: object) -> ShoppingList:
    """Parse a stored shopping list."""
    row = _require_mapping(payload, "shopping list")
    try:
        return ShoppingList(
            id=str(row["id"]),
            name=str(row.get("name", "")),
            created_at=datetime.fromisoformat(str(row["dateCreated"])),
            items=[_parse_item(item) for item in row.get("items") or []],
        )
    except StoredDataError:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise StoredDataError(f"Malformed shopping list: {exc}") from exc


def shopping_list_to_payload(shopping_list: ShoppingList) -> dict[str, object]:
    """Serialize a shopping list for storage."""
    return {
        "id": shopping_list.id,
        "name": shopping_list.name,
        "dateCreated": shopping_list.created_at.isoformat(),
        "items": [shopping_item_to_payload(item) for item in shopping_list.items],
        "totalItems": shopping_list.total_items,
        "checkedItems": shopping_list.checked_items,
    }


def shopping_item_to_payload(item: ShoppingListItem) -> dict[str, object]:
    """Serialize one shopping list item."""
    return {
        "id": item.id,
        "ingredient": item.ingredient,
        "amount": item.amount,
        "unit": item.unit,
        "checked": item.checked,
        "recipes": list(item.recipes),
        "aisle": item.aisle,
    }


def _parse_ingredient(item: Mapping[str, object]) -> Ingredient:
    name = str(item.get("name") or "")
    return Ingredient(
        name_clean=str(item.get("nameClean") or ""),
        name=name,
        original=str(item.get("original") or name),
        amount=float(item.get("amount") or 0.0),
        unit=str(item.get("unit") or ""),
        aisle=item.get("aisle") or None,
    )


def _parse_nutrient(item: Mapping[str, object]) -> Nutrient:
    return Nutrient(
        name=str(item["name"]),
        amount=float(item.get("amount") or 0.0),
        unit=str(item.get("unit") or ""),
    )


def _parse_steps(instructions: list[Mapping[str, object]]) -> tuple[str, ...]:
    return tuple(
        str(step["step"])
        for block in instructions
        for step in block.get("steps") or []
        if step.get("step")
    )


def _parse_item(item: Mapping[str, object]) -> ShoppingListItem:
    return ShoppingListItem(
        id=str(item["id"]),
        ingredient=str(item["ingredient"]),
        amount=float(item.get("amount") or 0.0),
        unit=str(item.get("unit") or ""),
        checked=bool(item.get("checked", False)),
        recipes=[str(title) for title in item.get("recipes") or []],
        aisle=item.get("aisle") or None,
    )


def _require_mapping(payload: object, label: str) -> Mapping[str, object]:
    if not isinstance(payload, Mapping):
        raise StoredDataError(f"Expected {label} object, got {type(payload).__name__}")
    return payload
