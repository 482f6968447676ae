"""Request models and response serializers for the HTTP API."""

import datetime
from dataclasses import asdict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from recipe_planner.adapters.recipe_payloads import shopping_item_to_payload
from recipe_planner.domain.meal_plans import MealSlot
from recipe_planner.domain.nutrition import NutritionSnapshot
from recipe_planner.domain.shopping import ShoppingListItem
from recipe_planner.domain.suggestions import CookingPreferences, RecipeSuggestion


class _CamelModel(BaseModel):
    """Accepts both camelCase aliases and field names."""

    model_config = ConfigDict(populate_by_name=True)


class MealAssignmentCreate(_CamelModel):
    """Body for placing a recipe on the calendar."""

    recipe: dict[str, object]
    date: datetime.date
    meal_type: MealSlot = Field(alias="mealType")
    servings: int = Field(ge=1)
    notes: str | None = None


class MealAssignmentUpdate(_CamelModel):
    """Partial update; only fields present in the body are applied."""

    date: datetime.date | None = None
    meal_type: MealSlot | None = Field(default=None, alias="mealType")
    servings: int | None = Field(default=None, ge=1)
    notes: str | None = None

    @field_validator("date", "meal_type", "servings", mode="before")
    @classmethod
    def _reject_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class MealAssignmentMove(_CamelModel):
    """Body for moving an assignment to another date and slot."""

    date: datetime.date
    meal_type: MealSlot = Field(alias="mealType")


class ShoppingListCreate(BaseModel):
    """Body for generating a shopping list, optionally over a date range."""

    name: str = Field(min_length=1)
    start: datetime.date | None = None
    end: datetime.date | None = None


class FavoriteCreate(BaseModel):
    """Body for adding a favorite recipe."""

    recipe: dict[str, object]


class RecommendationRequest(BaseModel):
    """Body for AI recipe recommendations."""

    preferences: CookingPreferences = Field(default_factory=CookingPreferences)
    count: int = Field(default=3, ge=1, le=10)


class MealPlanRequest(BaseModel):
    """Body for an AI meal plan over a number of days."""

    preferences: CookingPreferences = Field(default_factory=CookingPreferences)
    days: int = Field(default=7, ge=1, le=14)


class PlanSuggestionRequest(_CamelModel):
    """Body for planning an AI suggestion as a meal assignment."""

    suggestion: RecipeSuggestion
    date: datetime.date
    meal_type: MealSlot = Field(alias="mealType")
    servings: int = Field(default=4, ge=1)


class ModifyRecipeRequest(BaseModel):
    """Body for adapting a recipe to a list of changes."""

    recipe: dict[str, object]
    modifications: list[str] = Field(min_length=1)


class ShoppingOptimizationRequest(_CamelModel):
    """Body for AI shopping list optimization."""

    ingredients: list[str]
    budget: str | None = None
    store_type: str | None = Field(default=None, alias="storeType")


class CompletionRequest(BaseModel):
    """Raw prompt forwarded to the language model."""

    prompt: str | None = None
    temperature: float = 0.8
    max_tokens: int = 2000


def grouped_items_to_payload(
    groups: dict[str, list[ShoppingListItem]],
) -> dict[str, list[dict[str, object]]]:
    """Serialize grouped shopping list items."""
    return {
        group: [shopping_item_to_payload(item) for item in items]
        for group, items in groups.items()
    }


def nutrition_to_payload(snapshot: NutritionSnapshot) -> dict[str, object]:
    """Serialize a nutrition snapshot with ISO dates."""
    return {
        "totals": asdict(snapshot.totals),
        "dailyAverage": asdict(snapshot.daily_average),
        "daily": [
            {**asdict(day), "day": day.day.isoformat()} for day in snapshot.daily
        ],
        "macroBreakdown": asdict(snapshot.macro_breakdown),
        "weeklyCalories": [
            {**asdict(entry), "date": entry.date.isoformat()}
            for entry in snapshot.weekly_calories
        ],
    }

