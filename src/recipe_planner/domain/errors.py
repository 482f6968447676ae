"""Errors raised across service boundaries."""


class RecipeNotFoundError(LookupError):
    """Raised when a recipe source has no recipe with the requested id."""

    def __init__(self, recipe_id: int) -> None:
        super().__init__(f"Recipe {recipe_id} not found")
        self.recipe_id = recipe_id


class StoredDataError(ValueError):
    """Raised when a recipe or stored payload cannot be decoded."""


class SuggestionUnavailableError(RuntimeError):
    """Raised when the language model backend is not configured."""
