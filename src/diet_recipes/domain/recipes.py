"""Recipe domain models."""

from dataclasses import dataclass, field
from enum import StrEnum


class MatchMode(StrEnum):
    """How recipes are filtered against the selected ingredients."""

    ALL = "all"
    EXACT = "exact"
    PARTIAL = "partial"


@dataclass(frozen=True)
class RecipeIngredient:
    """Single ingredient line of a recipe."""

    ingredient: str
    measure: str


@dataclass(frozen=True)
class Recipe:
    """Recipe from TheMealDB with its parsed ingredient list."""

    id: str
    name: str
    category: str | None
    area: str | None
    instructions: str | None
    thumbnail: str | None
    tags: str | None = None
    youtube: str | None = None
    ingredients: list[RecipeIngredient] = field(default_factory=list)


@dataclass(frozen=True)
class MatchSummary:
    """Recipe that passed a filter, with the ingredient lines that matched."""

    recipe: Recipe
    matching: list[RecipeIngredient]
    selected_count: int

    @property
    def matched_count(self) -> int:
        """Number of matching recipe ingredient lines."""
        return len(self.matching)
