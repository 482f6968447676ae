"""Tests for the meal plan service."""

from datetime import date
from itertools import count

from recipe_planner.domain.meal_plans import MealAssignmentPatch, MealSlot
from recipe_planner.services.meal_plans import MealPlanService
from tests.conftest import FlakyMealPlanRepository, make_recipe


def _service(repository: FlakyMealPlanRepository) -> MealPlanService:
    ids = count(1)
    return MealPlanService(repository, id_factory=lambda: f"id-{next(ids)}")


def test_create_persists_and_lists_in_insertion_order() -> None:
    repository = FlakyMealPlanRepository()
    service = _service(repository)
    recipe = make_recipe()

    first = service.create(recipe, "2024-01-16", "dinner", 2)
    second = service.create(recipe, date(2024, 1, 15), MealSlot.LUNCH, 1, note="x")

    assert first == "id-1"
    assert second == "id-2"
    listed = service.list_all()
    assert [entry.id for entry in listed] == ["id-1", "id-2"]
    assert listed[0].date == date(2024, 1, 16)
    assert listed[0].slot is MealSlot.DINNER
    assert listed[1].note == "x"
    assert repository.save_calls == 2


def test_create_rejects_invalid_fields() -> None:
    repository = FlakyMealPlanRepository()
    service = _service(repository)
    recipe = make_recipe()

    assert service.create(recipe, "2024-01-15", "dinner", 0) is None
    assert service.create(recipe, "2024-01-15", "dinner", True) is None
    assert service.create(recipe, "2024-01-15", "dinner", 1.5) is None
    assert service.create(recipe, "15/01/2024", "dinner", 1) is None
    assert service.create(recipe, "2024-01-15", "brunch", 1) is None
    assert service.list_all() == []
    assert repository.save_calls == 0


def test_create_returns_none_when_save_fails() -> None:
    repository = FlakyMealPlanRepository(fail_save=True)
    service = _service(repository)

    assert service.create(make_recipe(), "2024-01-15", "dinner", 1) is None

    repository.fail_save = False
    assert service.list_all() == []


def test_create_returns_none_when_save_is_rejected() -> None:
    repository = FlakyMealPlanRepository(reject_save=True)
    service = _service(repository)

    assert service.create(make_recipe(), "2024-01-15", "dinner", 1) is None
    assert service.list_all() == []


def test_mutations_abort_when_load_fails() -> None:
    repository = FlakyMealPlanRepository()
    service = _service(repository)
    assignment_id = service.create(make_recipe(), "2024-01-15", "dinner", 1)
    repository.fail_load = True

    assert service.list_all() == []
    assert service.create(make_recipe(), "2024-01-16", "dinner", 1) is None
    assert service.move(assignment_id, "2024-01-20", "lunch") is False
    service.remove(assignment_id)

    repository.fail_load = False
    assert [entry.id for entry in service.list_all()] == [assignment_id]
    assert repository.save_calls == 1


def test_move_changes_only_date_and_slot() -> None:
    service = _service(FlakyMealPlanRepository())
    recipe = make_recipe()
    assignment_id = service.create(recipe, "2024-01-15", "dinner", 3, note="keep")

    assert service.move(assignment_id, "2024-01-17", "lunch") is True

    moved = service.get(assignment_id)
    assert moved is not None
    assert moved.date == date(2024, 1, 17)
    assert moved.slot is MealSlot.LUNCH
    assert moved.servings == 3
    assert moved.note == "keep"
    assert moved.recipe == recipe


def test_move_unknown_id_is_a_no_op() -> None:
    repository = FlakyMealPlanRepository()
    service = _service(repository)
    service.create(make_recipe(), "2024-01-15", "dinner", 1)

    assert service.move("missing", "2024-01-17", "lunch") is False
    assert repository.save_calls == 1


def test_update_applies_only_present_fields() -> None:
    service = _service(FlakyMealPlanRepository())
    assignment_id = service.create(make_recipe(), "2024-01-15", "dinner", 1, "n")

    assert service.update(assignment_id, MealAssignmentPatch(servings=4)) is True
    updated = service.get(assignment_id)
    assert updated.servings == 4
    assert updated.note == "n"
    assert updated.date == date(2024, 1, 15)

    assert service.update(assignment_id, MealAssignmentPatch(note=None)) is True
    assert service.get(assignment_id).note is None


def test_update_rejects_invalid_servings() -> None:
    service = _service(FlakyMealPlanRepository())
    assignment_id = service.create(make_recipe(), "2024-01-15", "dinner", 2)

    assert service.update(assignment_id, MealAssignmentPatch(servings=0)) is False
    assert service.get(assignment_id).servings == 2


def test_remove_is_idempotent() -> None:
    repository = FlakyMealPlanRepository()
    service = _service(repository)
    assignment_id = service.create(make_recipe(), "2024-01-15", "dinner", 1)

    service.remove(assignment_id)
    service.remove(assignment_id)

    assert service.list_all() == []
    assert repository.save_calls == 2


def test_list_for_range_is_inclusive() -> None:
    service = _service(FlakyMealPlanRepository())
    recipe = make_recipe()
    for day in ("2024-01-14", "2024-01-15", "2024-01-17", "2024-01-18"):
        service.create(recipe, day, "dinner", 1)

    in_range = service.list_for_range("2024-01-15", "2024-01-17")

    assert [entry.date.day for entry in in_range] == [15, 17]
    assert service.list_for_date("2024-01-18")[0].date == date(2024, 1, 18)
    assert len(service.list_for_week("2024-01-12")) == 4
    assert service.list_for_range("bad", "2024-01-17") == []


def test_single_day_range_excludes_neighbours() -> None:
    service = _service(FlakyMealPlanRepository())
    recipe = make_recipe()
    before = service.create(recipe, "2024-01-17", "dinner", 1)
    on_day = service.create(recipe, "2024-01-18", "lunch", 1)
    after = service.create(recipe, "2024-01-19", "dinner", 1)

    single_day = service.list_for_range("2024-01-18", "2024-01-18")
    assert [entry.id for entry in single_day] == [on_day]
    assert [entry.id for entry in service.list_for_date(date(2024, 1, 18))] == [on_day]
    assert {before, after}.isdisjoint(
        entry.id for entry in service.list_for_date("2024-01-18")
    )


def test_moved_entry_leaves_old_date_range() -> None:
    service = _service(FlakyMealPlanRepository())
    assignment_id = service.create(make_recipe(), "2024-01-15", "dinner", 1)

    service.move(assignment_id, "2024-01-20", "breakfast")

    assert service.list_for_range("2024-01-15", "2024-01-15") == []
    moved = service.list_for_range("2024-01-20", "2024-01-20")
    assert [entry.id for entry in moved] == [assignment_id]
    assert moved[0].slot is MealSlot.BREAKFAST
