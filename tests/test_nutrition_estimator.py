"""Tests for nutrition estimates."""

from datetime import date

import pytest

from recipe_planner.domain.nutrition import MacroBreakdown, MacroTotals
from recipe_planner.domain.recipes import Nutrient
from recipe_planner.services.nutrition import (
    DEFAULT_BREAKDOWN,
    estimate_nutrition,
    macro_breakdown,
    recipe_macros,
    week_start,
)
from tests.conftest import make_assignment, make_recipe


def test_heuristics_fill_in_missing_nutrients() -> None:
    macros = recipe_macros(make_recipe(ready_in_minutes=30))

    assert macros.calories == 600
    assert macros.protein_g == pytest.approx(22.5)
    assert macros.carbs_g == pytest.approx(75)
    assert macros.fat_g == pytest.approx(23.333, abs=0.001)


def test_authoritative_nutrients_take_precedence() -> None:
    recipe = make_recipe(
        nutrients=(
            Nutrient("Calories", 400, "kcal"),
            Nutrient("Protein", 30, "g"),
            Nutrient("protein", 99, "g"),
        )
    )

    snapshot = estimate_nutrition(
        [make_assignment(recipe, date(2024, 1, 15), servings=2)],
        today=date(2024, 1, 15),
    )

    assert snapshot.totals.calories == 800
    assert snapshot.totals.protein_g == 60
    assert snapshot.totals.carbs_g == pytest.approx(100)
    assert snapshot.totals.fat_g == pytest.approx(31.111, abs=0.001)


def test_daily_average_uses_distinct_dates() -> None:
    recipe = make_recipe(ready_in_minutes=30)
    assignments = [
        make_assignment(recipe, date(2024, 1, 16), assignment_id="a"),
        make_assignment(recipe, date(2024, 1, 15), assignment_id="b"),
        make_assignment(recipe, date(2024, 1, 15), assignment_id="c"),
    ]

    snapshot = estimate_nutrition(assignments, today=date(2024, 1, 15))

    assert snapshot.totals.calories == 1800
    assert snapshot.daily_average.calories == 900
    assert [entry.day for entry in snapshot.daily] == [
        date(2024, 1, 15),
        date(2024, 1, 16),
    ]
    assert snapshot.daily[0].calories == 1200


def test_empty_assignments_use_default_breakdown() -> None:
    snapshot = estimate_nutrition([], today=date(2024, 1, 17))

    assert snapshot.totals == MacroTotals(0.0, 0.0, 0.0, 0.0)
    assert snapshot.daily_average.calories == 0
    assert snapshot.daily == []
    assert snapshot.macro_breakdown == DEFAULT_BREAKDOWN
    assert [entry.calories for entry in snapshot.weekly_calories] == [0.0] * 7


def test_macro_breakdown_from_heuristic_split() -> None:
    totals = recipe_macros(make_recipe(ready_in_minutes=30))

    assert macro_breakdown(totals) == MacroBreakdown(protein=15, carbs=50, fat=35)


def test_weekly_series_covers_week_of_today() -> None:
    recipe = make_recipe(ready_in_minutes=10)
    assignments = [
        make_assignment(recipe, date(2024, 1, 15), assignment_id="mon"),
        make_assignment(recipe, date(2024, 1, 21), servings=2, assignment_id="sun"),
        make_assignment(recipe, date(2024, 1, 22), assignment_id="next"),
    ]

    snapshot = estimate_nutrition(
        assignments, today=date(2024, 1, 17), daily_target=1800
    )

    weekly = snapshot.weekly_calories
    assert [entry.day for entry in weekly] == [
        "Mon",
        "Tue",
        "Wed",
        "Thu",
        "Fri",
        "Sat",
        "Sun",
    ]
    assert weekly[0].date == date(2024, 1, 15)
    assert weekly[0].calories == 200
    assert weekly[6].calories == 400
    assert sum(entry.calories for entry in weekly) == 600
    assert {entry.target for entry in weekly} == {1800}
    assert snapshot.totals.calories == 800


def test_week_start_is_monday() -> None:
    assert week_start(date(2024, 1, 21)) == date(2024, 1, 15)
    assert week_start(date(2024, 1, 15)) == date(2024, 1, 15)
