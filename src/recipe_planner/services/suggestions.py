"""AI recipe, meal plan and shopping suggestions.

Every suggestion call degrades to a fixed fallback when the language model is
not configured, fails, or returns something that does not validate.
"""

import json
import logging
import zlib
from dataclasses import dataclass
from typing import Protocol

from pydantic import TypeAdapter

from recipe_planner.domain.errors import SuggestionUnavailableError
from recipe_planner.domain.recipes import Ingredient, Recipe
from recipe_planner.domain.suggestions import (
    CookingPreferences,
    MealPlanSuggestion,
    RecipeModification,
    RecipeSuggestion,
    ShoppingOptimization,
)

_logger = logging.getLogger(__name__)

_SUGGESTION_LIST = TypeAdapter(list[RecipeSuggestion])

FALLBACK_RECIPES = (
    RecipeSuggestion(
        title="Quick Vegetable Stir Fry",
        description=(
            "A healthy and colorful vegetable stir fry perfect for any skill level"
        ),
        ingredients=["mixed vegetables", "soy sauce", "garlic", "ginger", "oil"],
        instructions=[
            "Heat oil in pan",
            "Add garlic and ginger",
            "Add vegetables",
            "Stir fry for 5-7 minutes",
            "Add soy sauce",
        ],
        cooking_time=15,
        difficulty="easy",
        cuisine="Asian",
        dietary_tags=["vegetarian", "vegan", "quick"],
    ),
    RecipeSuggestion(
        title="Classic Pasta with Marinara",
        description="Simple and delicious pasta dish that never goes out of style",
        ingredients=["pasta", "marinara sauce", "garlic", "basil", "parmesan cheese"],
        instructions=[
            "Boil pasta",
            "Heat sauce with garlic",
            "Combine pasta and sauce",
            "Garnish with basil and cheese",
        ],
        cooking_time=20,
        difficulty="easy",
        cuisine="Italian",
        dietary_tags=["vegetarian"],
    ),
    RecipeSuggestion(
        title="Grilled Chicken Salad",
        description="Light and nutritious salad with perfectly grilled chicken",
        ingredients=[
            "chicken breast",
            "mixed greens",
            "tomatoes",
            "cucumber",
            "olive oil",
            "lemon",
        ],
        instructions=[
            "Season and grill chicken",
            "Prepare salad ingredients",
            "Make dressing",
            "Combine and serve",
        ],
        cooking_time=25,
        difficulty="medium",
        cuisine="Mediterranean",
        dietary_tags=["high-protein", "low-carb"],
    ),
)

FALLBACK_MEAL_PLAN = MealPlanSuggestion(
    meal_plan=(
        "Sample 7-day meal plan:\n\n"
        "Day 1:\nBreakfast: Oatmeal with berries\nLunch: Caesar salad\n"
        "Dinner: Grilled chicken with vegetables\n\n"
        "Day 2:\nBreakfast: Greek yogurt with granola\nLunch: Quinoa bowl\n"
        "Dinner: Pasta with marinara sauce\n\n"
        "... (continue for remaining days)"
    ),
    explanation=(
        "This meal plan provides balanced nutrition with a variety of proteins, "
        "carbohydrates, and vegetables."
    ),
)

FALLBACK_SHOPPING_TIPS = (
    "Buy seasonal produce for better prices",
    "Check for sales and coupons",
    "Consider generic brands",
)


class CompletionClient(Protocol):
    """Interface for single-prompt text completions."""

    async def complete(
        self, prompt: str, *, temperature: float, max_tokens: int
    ) -> str:
        """Return the completion text for a prompt."""


@dataclass
class SuggestionService:
    """Builds prompts, validates model output, and supplies fallbacks."""

    client: CompletionClient | None

    async def recommend_recipes(
        self, preferences: CookingPreferences, count: int = 3
    ) -> list[RecipeSuggestion]:
        """Suggest recipes matching the preferences."""
        try:
            content = await self._complete(
                recommendation_prompt(preferences, count),
                temperature=0.8,
                max_tokens=2000,
            )
            raw = _parse_json(content)
            if not isinstance(raw, list):
                raw = [raw]
            return _SUGGESTION_LIST.validate_python(raw)
        except Exception:
            _logger.exception("Recipe recommendations failed, using fallback")
            return list(FALLBACK_RECIPES[:count])

    async def suggest_meal_plan(
        self, preferences: CookingPreferences, days: int = 7
    ) -> MealPlanSuggestion:
        """Suggest a free-text meal plan for a number of days."""
        try:
            content = await self._complete(
                meal_plan_prompt(preferences, days), temperature=0.7, max_tokens=1500
            )
            return MealPlanSuggestion.model_validate(_parse_json(content))
        except Exception:
            _logger.exception("Meal plan suggestion failed, using fallback")
            return FALLBACK_MEAL_PLAN

    async def modify_recipe(
        self, recipe: Recipe, modifications: list[str]
    ) -> RecipeModification:
        """Rewrite a recipe according to requested modifications."""
        try:
            content = await self._complete(
                modification_prompt(recipe, modifications),
                temperature=0.6,
                max_tokens=1200,
            )
            return RecipeModification.model_validate(_parse_json(content))
        except Exception:
            _logger.exception("Recipe modification failed, using fallback")
            return RecipeModification(
                modified_recipe=(
                    f"Modified {recipe.title}\n\n"
                    "This is a placeholder for the modified recipe."
                ),
                changes="AI modification service is currently unavailable.",
            )

    async def optimize_shopping_list(
        self,
        ingredients: list[str],
        budget: str | None = None,
        store_type: str | None = None,
    ) -> ShoppingOptimization:
        """Organize a shopping list by store section with saving tips."""
        try:
            content = await self._complete(
                shopping_prompt(ingredients, budget, store_type),
                temperature=0.5,
                max_tokens=800,
            )
            return ShoppingOptimization.model_validate(_parse_json(content))
        except Exception:
            _logger.exception("Shopping optimization failed, using fallback")
            return ShoppingOptimization(
                optimized_list="\n- ".join(ingredients),
                tips=list(FALLBACK_SHOPPING_TIPS),
            )

    async def complete(
        self, prompt: str, temperature: float = 0.8, max_tokens: int = 2000
    ) -> str:
        """Forward a raw prompt. Errors propagate to the caller."""
        return await self._complete(
            prompt, temperature=temperature, max_tokens=max_tokens
        )

    async def _complete(
        self, prompt: str, *, temperature: float, max_tokens: int
    ) -> str:
        if self.client is None:
            raise SuggestionUnavailableError("OpenRouter API key not configured")
        content = await self.client.complete(
            prompt, temperature=temperature, max_tokens=max_tokens
        )
        if not content:
            raise RuntimeError("No response from AI")
        return content


def suggestion_to_recipe(
    suggestion: RecipeSuggestion, recipe_id: int | None = None, servings: int = 4
) -> Recipe:
    """Convert an AI suggestion into a recipe that can be planned.

    Ingredient lines become amount 1 with no unit. Without an explicit id the
    recipe gets a negative id derived from its title, which never collides
    with ids from the recipe APIs.
    """
    if recipe_id is None:
        recipe_id = -(zlib.crc32(suggestion.title.encode("utf-8")) or 1)
    return Recipe(
        id=recipe_id,
        title=suggestion.title,
        image="",
        ready_in_minutes=suggestion.cooking_time,
        servings=servings,
        ingredients=tuple(
            Ingredient(
                name_clean=line.strip(),
                name=line.strip(),
                original=line,
                amount=1.0,
                unit="",
            )
            for line in suggestion.ingredients
            if line.strip()
        ),
        diets=tuple(suggestion.dietary_tags),
        cuisines=(suggestion.cuisine,) if suggestion.cuisine else (),
        summary=suggestion.description,
        steps=tuple(suggestion.instructions),
    )


def recommendation_prompt(preferences: CookingPreferences, count: int) -> str:
    """Build the recipe recommendation prompt."""
    return (
        "You are a professional chef AI assistant. Based on the user's "
        f"preferences, suggest {count} personalized recipes.\n\n"
        "User Preferences:\n"
        f"- Favorite ingredients: "
        f"{_joined(preferences.favorite_ingredients, 'None specified')}\n"
        f"- Dietary restrictions: {_joined(preferences.dietary_restrictions, 'None')}\n"
        f"- Disliked ingredients: {_joined(preferences.disliked_ingredients, 'None')}\n"
        f"- Preferred cuisines: {_joined(preferences.preferred_cuisines, 'Any')}\n"
        f"- Cooking skill: {preferences.cooking_skill_level}\n"
        f"- Time available: {preferences.time_available} minutes\n"
        "- Recent meals (avoid similar): "
        f"{_joined(preferences.recent_meals, 'None')}\n\n"
        f"Please respond with a JSON array of {count} recipe objects, each with:\n"
        "{\n"
        '  "title": "Recipe Name",\n'
        '  "description": "Brief appealing description",\n'
        '  "ingredients": ["ingredient 1", "ingredient 2", ...],\n'
        '  "instructions": ["step 1", "step 2", ...],\n'
        '  "cookingTime": number_in_minutes,\n'
        '  "difficulty": "easy|medium|hard",\n'
        '  "cuisine": "cuisine_type",\n'
        '  "dietaryTags": ["tag1", "tag2", ...]\n'
        "}\n\n"
        "Ensure recipes are diverse, match preferences, and avoid recent meals. "
        "Only return valid JSON."
    )


def meal_plan_prompt(preferences: CookingPreferences, days: int) -> str:
    """Build the meal plan prompt."""
    return (
        "You are a nutrition and meal planning expert. "
        f"Create a {days}-day meal plan for someone with these preferences:\n\n"
        f"- Dietary restrictions: {_joined(preferences.dietary_restrictions, 'None')}\n"
        f"- Preferred cuisines: {_joined(preferences.preferred_cuisines, 'Varied')}\n"
        f"- Cooking skill: {preferences.cooking_skill_level}\n"
        f"- Time per meal: {preferences.time_available} minutes max\n"
        "- Favorite ingredients to include: "
        f"{_joined(preferences.favorite_ingredients, 'Flexible')}\n"
        "- Ingredients to avoid: "
        f"{_joined(preferences.disliked_ingredients, 'None')}\n\n"
        "Please provide:\n"
        f"1. A detailed meal plan with breakfast, lunch, dinner for {days} days\n"
        "2. An explanation of the nutritional balance and why this plan works\n\n"
        "Format as JSON:\n"
        "{\n"
        '  "mealPlan": "Day 1:\\nBreakfast: ...\\nLunch: ...\\nDinner: ...'
        '\\n\\nDay 2: ...",\n'
        '  "explanation": "This meal plan provides balanced nutrition because..."\n'
        "}"
    )


def modification_prompt(recipe: Recipe, modifications: list[str]) -> str:
    """Build the recipe modification prompt."""
    ingredients = ", ".join(ingredient.original for ingredient in recipe.ingredients)
    return (
        "You are a chef AI assistant. "
        f"Modify this recipe to be {', '.join(modifications)}:\n\n"
        "Original Recipe:\n"
        f"Title: {recipe.title}\n"
        f"Ingredients: {ingredients}\n"
        f"Instructions: {recipe.instructions or 'See analyzedInstructions'}\n"
        f"Servings: {recipe.servings}\n"
        f"Cooking Time: {recipe.ready_in_minutes} minutes\n\n"
        "Please provide the modified recipe and explain what changes were made.\n\n"
        "Format as JSON:\n"
        "{\n"
        '  "modifiedRecipe": "Modified Title\\n\\nIngredients:\\n- ingredient 1'
        "\\n- ingredient 2\\n\\nInstructions:\\n1. Step 1\\n2. Step 2"
        '\\n\\nServings: X\\nTime: Y minutes",\n'
        '  "changes": "Explanation of what was changed and why"\n'
        "}"
    )


def shopping_prompt(
    ingredients: list[str], budget: str | None, store_type: str | None
) -> str:
    """Build the shopping list optimization prompt."""
    resolved_budget = budget or "medium"
    return (
        "You are a smart shopping assistant. Optimize this shopping list for "
        f"efficiency and {resolved_budget} budget:\n\n"
        f"Ingredients needed: {', '.join(ingredients)}\n"
        f"Budget preference: {resolved_budget}\n"
        f"Store type: {store_type or 'regular grocery store'}\n\n"
        "Please provide:\n"
        "1. An organized shopping list grouped by store sections\n"
        "2. Money-saving tips and substitutions\n"
        "3. Quantity recommendations for best value\n\n"
        "Format as JSON:\n"
        "{\n"
        '  "optimizedList": "PRODUCE:\\n- item 1\\n- item 2\\n\\nDAIRY:'
        '\\n- item 3\\n\\nMEAT:\\n- item 4",\n'
        '  "tips": ["tip 1", "tip 2", "tip 3"]\n'
        "}"
    )


def _joined(values: list[str], empty: str) -> str:
    return ", ".join(values) or empty


def _parse_json(content: str) -> object:
    """Decode JSON from model output, tolerating a Markdown code fence."""
    text = content.strip()
    if text.startswith("```"):
        text = text.split("\n", 1)[1] if "\n" in text else ""
        text = text.rsplit("```", 1)[0]
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Model returned invalid JSON: {exc}") from exc
