"""Tests for recipe, meal plan and shopping list payloads."""

from datetime import date

import pytest

from recipe_planner.adapters.recipe_payloads import (
    assignment_to_payload,
    parse_assignment,
    parse_recipe,
    parse_search_results,
    parse_shopping_list,
    recipe_to_payload,
)
from recipe_planner.domain.errors import StoredDataError
from recipe_planner.domain.meal_plans import MealSlot
from tests.conftest import make_recipe, recipe_payload


def _stored_assignment(**overrides: object) -> dict[str, object]:
    return {
        "id": "a1",
        "date": "2024-01-15",
        "mealType": "dinner",
        "recipe": recipe_payload(),
        "servings": 2,
        **overrides,
    }


def test_parse_recipe_reads_spoonacular_shape() -> None:
    payload = {
        **recipe_payload(),
        "analyzedInstructions": [
            {"name": "", "steps": [{"number": 1, "step": "Boil water"}]},
            {"name": "Sauce", "steps": [{"number": 1, "step": "Simmer"}]},
        ],
    }

    recipe = parse_recipe(payload)

    assert recipe.ready_in_minutes == 25
    assert recipe.ingredients[0].name_clean == "pasta"
    assert recipe.ingredients[0].aisle == "Pasta and Rice"
    assert recipe.nutrient("Calories").amount == 600
    assert recipe.nutrient("Fat") is None
    assert recipe.diets == ("vegetarian",)
    assert recipe.steps == ("Boil water", "Simmer")


def test_parse_recipe_defaults_missing_optionals() -> None:
    recipe = parse_recipe({"id": "12", "title": "Toast"})

    assert recipe.id == 12
    assert recipe.image == ""
    assert recipe.ingredients == ()
    assert recipe.nutrients == ()


@pytest.mark.parametrize("payload", [None, [], {"title": "no id"}, {"id": "abc"}])
def test_parse_recipe_rejects_malformed(payload: object) -> None:
    with pytest.raises(StoredDataError):
        parse_recipe(payload)


def test_recipe_payload_roundtrip_keeps_steps_and_nutrition() -> None:
    recipe = parse_recipe(
        {
            **recipe_payload(),
            "analyzedInstructions": [{"steps": [{"step": "Boil water"}]}],
        }
    )

    assert parse_recipe(recipe_to_payload(recipe)) == recipe
    assert "nutrition" not in recipe_to_payload(make_recipe())


def test_parse_search_results() -> None:
    results = parse_search_results(
        {"results": [recipe_payload(1), recipe_payload(2)], "totalResults": 40}
    )

    assert [recipe.id for recipe in results.results] == [1, 2]
    assert results.number == 2
    assert results.total_results == 40


def test_parse_assignment() -> None:
    assignment = parse_assignment(_stored_assignment(notes="extra cheese"))

    assert assignment.date == date(2024, 1, 15)
    assert assignment.slot is MealSlot.DINNER
    assert assignment.servings == 2
    assert assignment.note == "extra cheese"
    assert assignment_to_payload(assignment)["notes"] == "extra cheese"


@pytest.mark.parametrize(
    "overrides",
    [
        {"servings": "2"},
        {"servings": True},
        {"servings": 1.5},
        {"mealType": "brunch"},
        {"date": "next week"},
        {"recipe": "spaghetti"},
    ],
)
def test_parse_assignment_rejects_malformed(overrides: dict[str, object]) -> None:
    with pytest.raises(StoredDataError):
        parse_assignment(_stored_assignment(**overrides))


def test_parse_shopping_list() -> None:
    shopping_list = parse_shopping_list(
        {
            "id": "list-1",
            "name": "Week",
            "dateCreated": "2024-01-15T10:00:00+00:00",
            "items": [
                {
                    "id": "i1",
                    "ingredient": "pasta",
                    "amount": 2.5,
                    "unit": "lb",
                    "checked": True,
                    "recipes": ["Spaghetti"],
                    "aisle": "Pasta and Rice",
                }
            ],
            "totalItems": 1,
            "checkedItems": 1,
        }
    )

    assert shopping_list.created_at.year == 2024
    assert shopping_list.items[0].checked is True
    assert shopping_list.checked_items == 1


def test_parse_shopping_list_rejects_missing_item_fields() -> None:
    with pytest.raises(StoredDataError):
        parse_shopping_list(
            {"id": "x", "dateCreated": "2024-01-15T10:00:00", "items": [{}]}
        )
