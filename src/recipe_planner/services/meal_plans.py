"""Meal plan store: dated, typed recipe assignments."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from typing import Protocol
from uuid import uuid4

from recipe_planner.domain.meal_plans import (
    UNSET,
    MealAssignment,
    MealAssignmentPatch,
    MealSlot,
)
from recipe_planner.domain.recipes import Recipe

_logger = logging.getLogger(__name__)


class MealPlanRepository(Protocol):
    """Persistence interface for meal assignments."""

    def load(self) -> list[MealAssignment]:
        """Return all stored assignments in insertion order."""

    def save(self, assignments: list[MealAssignment]) -> bool:
        """Replace the stored assignments, returning False on failure."""


class MealPlanValidationError(ValueError):
    """Raised internally when an assignment field is invalid."""


def _new_id() -> str:
    return str(uuid4())


@dataclass
class MealPlanService:
    """Owns meal assignments and persists every mutation."""

    repository: MealPlanRepository
    id_factory: Callable[[], str] = _new_id

    def create(
        self,
        recipe: Recipe,
        day: date | str,
        slot: MealSlot | str,
        servings: int,
        note: str | None = None,
    ) -> str | None:
        """Place a recipe on a date and slot, returning the new id."""
        try:
            assignment = MealAssignment(
                id=self.id_factory(),
                date=parse_day(day),
                slot=parse_slot(slot),
                recipe=recipe,
                servings=validate_servings(servings),
                note=note,
            )
        except MealPlanValidationError as exc:
            _logger.warning("Rejected meal assignment: %s", exc)
            return None

        entries = self._load()
        if entries is None:
            return None
        if not self._save([*entries, assignment]):
            return None
        return assignment.id

    def update(self, assignment_id: str, patch: MealAssignmentPatch) -> bool:
        """Apply a partial update. Returns False when nothing was changed."""
        entries = self._load()
        if entries is None:
            return False
        for index, entry in enumerate(entries):
            if entry.id != assignment_id:
                continue
            try:
                updated = _apply_patch(entry, patch)
            except MealPlanValidationError as exc:
                _logger.warning("Rejected update for %s: %s", assignment_id, exc)
                return False
            entries[index] = updated
            return self._save(entries)
        _logger.info("Meal assignment %s not found for update", assignment_id)
        return False

    def move(
        self, assignment_id: str, new_day: date | str, new_slot: MealSlot | str
    ) -> bool:
        """Move an assignment to another date and slot."""
        return self.update(
            assignment_id, MealAssignmentPatch(date=new_day, slot=new_slot)
        )

    def remove(self, assignment_id: str) -> None:
        """Remove an assignment. Unknown ids are ignored."""
        entries = self._load()
        if entries is None:
            return
        remaining = [entry for entry in entries if entry.id != assignment_id]
        if len(remaining) == len(entries):
            return
        self._save(remaining)

    def get(self, assignment_id: str) -> MealAssignment | None:
        """Return an assignment by id, if present."""
        for entry in self.list_all():
            if entry.id == assignment_id:
                return entry
        return None

    def list_all(self) -> list[MealAssignment]:
        """Return every assignment in insertion order."""
        return self._load() or []

    def list_for_range(
        self, start: date | str, end: date | str
    ) -> list[MealAssignment]:
        """Return assignments dated within the inclusive range."""
        try:
            start_day = parse_day(start)
            end_day = parse_day(end)
        except MealPlanValidationError as exc:
            _logger.warning("Rejected date range: %s", exc)
            return []
        return [
            entry for entry in self.list_all() if start_day <= entry.date <= end_day
        ]

    def list_for_date(self, day: date | str) -> list[MealAssignment]:
        """Return assignments for a single date."""
        return self.list_for_range(day, day)

    def list_for_week(self, week_start: date | str) -> list[MealAssignment]:
        """Return assignments for the seven days starting at week_start."""
        try:
            start_day = parse_day(week_start)
        except MealPlanValidationError as exc:
            _logger.warning("Rejected week start: %s", exc)
            return []
        return self.list_for_range(start_day, start_day + timedelta(days=6))

    def _load(self) -> list[MealAssignment] | None:
        try:
            return list(self.repository.load())
        except Exception:
            _logger.exception("Failed to load meal plans")
            return None

    def _save(self, entries: list[MealAssignment]) -> bool:
        try:
            saved = self.repository.save(entries)
        except Exception:
            _logger.exception("Failed to save meal plans")
            return False
        if not saved:
            _logger.error("Meal plan storage rejected the update")
        return bool(saved)


def parse_day(value: date | str) -> date:
    """Parse an ISO calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise MealPlanValidationError(f"Invalid date: {value!r}") from exc
    raise MealPlanValidationError(f"Invalid date: {value!r}")


def parse_slot(value: MealSlot | str) -> MealSlot:
    """Parse a meal slot name."""
    try:
        return MealSlot(value)
    except ValueError as exc:
        raise MealPlanValidationError(f"Invalid meal slot: {value!r}") from exc


def validate_servings(value: int) -> int:
    """Ensure servings is a positive integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise MealPlanValidationError(f"Servings must be an integer: {value!r}")
    if value < 1:
        raise MealPlanValidationError(f"Servings must be at least 1: {value}")
    return value


def _apply_patch(entry: MealAssignment, patch: MealAssignmentPatch) -> MealAssignment:
    changes: dict[str, object] = {}
    if patch.date is not UNSET:
        changes["date"] = parse_day(patch.date)
    if patch.slot is not UNSET:
        changes["slot"] = parse_slot(patch.slot)
    if patch.servings is not UNSET:
        changes["servings"] = validate_servings(patch.servings)
    if patch.note is not UNSET:
        changes["note"] = patch.note
    return replace(entry, **changes)
