"""Nutrition estimates over planned meals."""

import math
from collections.abc import Iterable
from datetime import date, timedelta

from recipe_planner.domain.meal_plans import MealAssignment
from recipe_planner.domain.nutrition import (
    DailyTotals,
    MacroBreakdown,
    MacroTotals,
    NutritionSnapshot,
    WeeklyCalories,
)
from recipe_planner.domain.recipes import Recipe

CALORIES_PER_MINUTE = 20
PROTEIN_SHARE = 0.15
CARBS_SHARE = 0.50
FAT_SHARE = 0.35
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9
DEFAULT_DAILY_TARGET = 2000.0
DEFAULT_BREAKDOWN = MacroBreakdown(protein=33, carbs=34, fat=33)
WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

_ZERO = MacroTotals(calories=0.0, protein_g=0.0, carbs_g=0.0, fat_g=0.0)


def recipe_macros(recipe: Recipe) -> MacroTotals:
    """Return per-serving macros, estimating the ones the recipe lacks.

    Calories fall back to 20 kcal per minute of preparation time. Missing
    macros are derived from calories with a 15/50/35 protein/carbs/fat split.
    """
    calories = _nutrient_amount(recipe, "Calories")
    if calories is None:
        calories = float(recipe.ready_in_minutes * CALORIES_PER_MINUTE)
    protein = _nutrient_amount(recipe, "Protein")
    if protein is None:
        protein = calories * PROTEIN_SHARE / KCAL_PER_G_PROTEIN
    carbs = _nutrient_amount(recipe, "Carbohydrates")
    if carbs is None:
        carbs = calories * CARBS_SHARE / KCAL_PER_G_CARBS
    fat = _nutrient_amount(recipe, "Fat")
    if fat is None:
        fat = calories * FAT_SHARE / KCAL_PER_G_FAT
    return MacroTotals(calories=calories, protein_g=protein, carbs_g=carbs, fat_g=fat)


def assignment_macros(assignment: MealAssignment) -> MacroTotals:
    """Return macros for an assignment scaled by its servings."""
    base = recipe_macros(assignment.recipe)
    return _scale(base, assignment.servings)


def estimate_nutrition(
    assignments: Iterable[MealAssignment],
    *,
    today: date | None = None,
    daily_target: float = DEFAULT_DAILY_TARGET,
) -> NutritionSnapshot:
    """Compute totals, daily averages, macro split and the weekly series."""
    reference_day = today or date.today()
    totals = _ZERO
    by_day: dict[date, MacroTotals] = {}
    for assignment in assignments:
        macros = assignment_macros(assignment)
        totals = _add(totals, macros)
        by_day[assignment.date] = _add(by_day.get(assignment.date, _ZERO), macros)

    day_count = len(by_day)
    daily_average = _divide(totals, day_count) if day_count else _ZERO
    daily = [
        DailyTotals(
            day=day,
            calories=macros.calories,
            protein_g=macros.protein_g,
            carbs_g=macros.carbs_g,
            fat_g=macros.fat_g,
        )
        for day, macros in sorted(by_day.items())
    ]
    return NutritionSnapshot(
        totals=totals,
        daily_average=daily_average,
        daily=daily,
        macro_breakdown=macro_breakdown(totals),
        weekly_calories=_weekly_calories(by_day, reference_day, daily_target),
    )


def macro_breakdown(totals: MacroTotals) -> MacroBreakdown:
    """Return the share of calories from protein, carbs and fat."""
    protein_kcal = totals.protein_g * KCAL_PER_G_PROTEIN
    carbs_kcal = totals.carbs_g * KCAL_PER_G_CARBS
    fat_kcal = totals.fat_g * KCAL_PER_G_FAT
    total_kcal = protein_kcal + carbs_kcal + fat_kcal
    if total_kcal <= 0:
        return DEFAULT_BREAKDOWN
    return MacroBreakdown(
        protein=_round_percent(protein_kcal, total_kcal),
        carbs=_round_percent(carbs_kcal, total_kcal),
        fat=_round_percent(fat_kcal, total_kcal),
    )


def week_start(day: date) -> date:
    """Return the Monday of the week containing day."""
    return day - timedelta(days=day.weekday())


def _weekly_calories(
    by_day: dict[date, MacroTotals], reference_day: date, target: float
) -> list[WeeklyCalories]:
    monday = week_start(reference_day)
    series = []
    for offset, label in enumerate(WEEKDAY_LABELS):
        day = monday + timedelta(days=offset)
        series.append(
            WeeklyCalories(
                day=label,
                date=day,
                calories=by_day.get(day, _ZERO).calories,
                target=target,
            )
        )
    return series


def _nutrient_amount(recipe: Recipe, name: str) -> float | None:
    nutrient = recipe.nutrient(name)
    if nutrient is None:
        return None
    return float(nutrient.amount)


def _round_percent(part: float, whole: float) -> int:
    return math.floor(part / whole * 100 + 0.5)


def _scale(macros: MacroTotals, factor: float) -> MacroTotals:
    return MacroTotals(
        calories=macros.calories * factor,
        protein_g=macros.protein_g * factor,
        carbs_g=macros.carbs_g * factor,
        fat_g=macros.fat_g * factor,
    )


def _divide(macros: MacroTotals, divisor: int) -> MacroTotals:
    return MacroTotals(
        calories=macros.calories / divisor,
        protein_g=macros.protein_g / divisor,
        carbs_g=macros.carbs_g / divisor,
        fat_g=macros.fat_g / divisor,
    )


def _add(left: MacroTotals, right: MacroTotals) -> MacroTotals:
    return MacroTotals(
        calories=left.calories + right.calories,
        protein_g=left.protein_g + right.protein_g,
        carbs_g=left.carbs_g + right.carbs_g,
        fat_g=left.fat_g + right.fat_g,
    )
