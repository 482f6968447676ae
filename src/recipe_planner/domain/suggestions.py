"""Models for AI recipe and meal plan suggestions."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CookingPreferences(BaseModel):
    """Preferences used to personalize AI suggestions."""

    favorite_ingredients: list[str] = Field(default_factory=list)
    dietary_restrictions: list[str] = Field(default_factory=list)
    disliked_ingredients: list[str] = Field(default_factory=list)
    preferred_cuisines: list[str] = Field(default_factory=list)
    cooking_skill_level: Literal["beginner", "intermediate", "advanced"] = (
        "intermediate"
    )
    time_available: int = Field(default=30, ge=1)
    recent_meals: list[str] = Field(default_factory=list)


class RecipeSuggestion(BaseModel):
    """Recipe idea returned by the language model."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str = ""
    ingredients: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    cooking_time: int = Field(default=30, ge=0, alias="cookingTime")
    difficulty: Literal["easy", "medium", "hard"] = "medium"
    cuisine: str = ""
    dietary_tags: list[str] = Field(default_factory=list, alias="dietaryTags")


class MealPlanSuggestion(BaseModel):
    """Free-text meal plan with its rationale."""

    model_config = ConfigDict(populate_by_name=True)

    meal_plan: str = Field(alias="mealPlan")
    explanation: str


class RecipeModification(BaseModel):
    """Modified recipe text with a summary of the changes."""

    model_config = ConfigDict(populate_by_name=True)

    modified_recipe: str = Field(alias="modifiedRecipe")
    changes: str


class ShoppingOptimization(BaseModel):
    """Store-section ordered shopping list with saving tips."""

    model_config = ConfigDict(populate_by_name=True)

    optimized_list: str = Field(alias="optimizedList")
    tips: list[str] = Field(default_factory=list)
