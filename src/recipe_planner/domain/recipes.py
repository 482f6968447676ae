"""Domain models for recipes supplied by external recipe sources."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Ingredient:
    """Single ingredient line of a recipe."""

    name_clean: str
    name: str
    original: str
    amount: float
    unit: str
    aisle: str | None = None

    @property
    def key(self) -> str:
        """Return the name used to merge identical ingredients."""
        return self.name_clean or self.name


@dataclass(frozen=True)
class Nutrient:
    """Authoritative nutrient amount for one serving."""

    name: str
    amount: float
    unit: str


@dataclass(frozen=True)
class Recipe:
    """Immutable snapshot of a recipe."""

    id: int
    title: str
    image: str
    ready_in_minutes: int
    servings: int
    ingredients: tuple[Ingredient, ...] = ()
    nutrients: tuple[Nutrient, ...] = ()
    diets: tuple[str, ...] = ()
    cuisines: tuple[str, ...] = ()
    dish_types: tuple[str, ...] = ()
    summary: str = ""
    instructions: str = ""
    steps: tuple[str, ...] = ()

    def nutrient(self, name: str) -> Nutrient | None:
        """Return the nutrient with the exact given name, if present."""
        for nutrient in self.nutrients:
            if nutrient.name == name:
                return nutrient
        return None


@dataclass(frozen=True)
class SearchFilters:
    """Filters accepted by recipe searches."""

    query: str
    diet: str | None = None
    intolerances: str | None = None
    cuisine: str | None = None
    dish_type: str | None = None
    max_ready_time: int | None = None
    sort: str | None = None


@dataclass(frozen=True)
class SearchResults:
    """Page of recipe search results."""

    results: list[Recipe]
    offset: int
    number: int
    total_results: int
