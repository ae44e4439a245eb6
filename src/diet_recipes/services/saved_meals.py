"""Saved meals and favorites."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from diet_recipes.domain.errors import SavedMealNotFoundError
from diet_recipes.domain.recipes import Recipe
from diet_recipes.domain.shopping import SavedMeal


class SavedMealRepository(Protocol):
    """Persistence interface for saved meals."""

    def create_meal(self, user_id: UUID, payload: dict[str, object]) -> SavedMeal:
        """Create a saved meal and return it."""

    def get_meal(self, meal_id: UUID) -> SavedMeal | None:
        """Return a saved meal by id, if present."""

    def list_meals(self, user_id: UUID, favorites_only: bool) -> list[SavedMeal]:
        """Return a user's saved meals."""

    def set_favorite(self, meal_id: UUID, is_favorite: bool) -> SavedMeal | None:
        """Update the favorite flag and return the meal, if present."""

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a saved meal."""


@dataclass
class SavedMealService:
    """Application service for a user's saved recipes."""

    repository: SavedMealRepository

    def save_meal(
        self, user_id: UUID, recipe: Recipe, is_favorite: bool = False
    ) -> SavedMeal:
        """Save a recipe for a user."""
        return self.repository.create_meal(
            user_id,
            {
                "meal_id": recipe.id,
                "meal_name": recipe.name,
                "meal_thumb": recipe.thumbnail,
                "category": recipe.category,
                "area": recipe.area,
                "is_favorite": is_favorite,
            },
        )

    def get_meal(self, meal_id: UUID) -> SavedMeal:
        """Return a saved meal."""
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            raise SavedMealNotFoundError(meal_id)
        return meal

    def list_meals(self, user_id: UUID) -> list[SavedMeal]:
        """Return every saved meal for a user."""
        return self.repository.list_meals(user_id, favorites_only=False)

    def list_favorites(self, user_id: UUID) -> list[SavedMeal]:
        """Return the user's favorite meals."""
        return self.repository.list_meals(user_id, favorites_only=True)

    def set_favorite(self, meal_id: UUID, is_favorite: bool) -> SavedMeal:
        """Mark or unmark a saved meal as favorite."""
        updated = self.repository.set_favorite(meal_id, is_favorite)
        if updated is None:
            raise SavedMealNotFoundError(meal_id)
        return updated

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a saved meal."""
        self.repository.delete_meal(meal_id)
