"""Nutrition domain models."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class MacroTotals:
    """Calories and macronutrients in grams."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class DailyTotals:
    """Macro totals for one calendar day."""

    day: date
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class MacroBreakdown:
    """Share of macro calories in whole percent."""

    protein: int
    carbs: int
    fat: int


@dataclass(frozen=True)
class WeeklyCalories:
    """Calories planned for one weekday of the reference week."""

    day: str
    date: date
    calories: float
    target: float


@dataclass(frozen=True)
class NutritionSnapshot:
    """Nutrition estimate over a set of meal assignments."""

    totals: MacroTotals
    daily_average: MacroTotals
    daily: list[DailyTotals]
    macro_breakdown: MacroBreakdown
    weekly_calories: list[WeeklyCalories]
