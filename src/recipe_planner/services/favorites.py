"""Favorite recipes."""

import logging
from dataclasses import dataclass
from typing import Protocol

from recipe_planner.domain.recipes import Recipe

_logger = logging.getLogger(__name__)


class FavoritesRepository(Protocol):
    """Persistence interface for favorite recipes."""

    def load(self) -> list[Recipe]:
        """Return the stored favorites in insertion order."""

    def save(self, recipes: list[Recipe]) -> bool:
        """Replace the stored favorites, returning False on failure."""


@dataclass
class FavoritesService:
    """Set of favorite recipes keyed by recipe id."""

    repository: FavoritesRepository

    def add(self, recipe: Recipe) -> bool:
        """Add a recipe unless it is already a favorite."""
        stored = self._load()
        if stored is None:
            return False
        if any(entry.id == recipe.id for entry in stored):
            return True
        return self._save([*stored, recipe])

    def remove(self, recipe_id: int) -> bool:
        """Remove a recipe from favorites. Unknown ids are ignored."""
        stored = self._load()
        if stored is None:
            return False
        remaining = [entry for entry in stored if entry.id != recipe_id]
        if len(remaining) == len(stored):
            return True
        return self._save(remaining)

    def is_member(self, recipe_id: int) -> bool:
        """Return True when the recipe is a favorite."""
        return any(entry.id == recipe_id for entry in self.list_all())

    def list_all(self) -> list[Recipe]:
        """Return all favorites."""
        return self._load() or []

    def clear(self) -> bool:
        """Remove every favorite."""
        return self._save([])

    def _load(self) -> list[Recipe] | None:
        try:
            return list(self.repository.load())
        except Exception:
            _logger.exception("Failed to load favorites")
            return None

    def _save(self, recipes: list[Recipe]) -> bool:
        try:
            saved = self.repository.save(recipes)
        except Exception:
            _logger.exception("Failed to save favorites")
            return False
        if not saved:
            _logger.error("Favorites storage rejected the update")
        return bool(saved)
