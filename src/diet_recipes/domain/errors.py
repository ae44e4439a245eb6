"""Domain exceptions."""

from uuid import UUID


class NotFoundError(LookupError):
    """Base for domain entities that do not exist."""


class ProfileNotFoundError(NotFoundError):
    """Raised when a user has no stored profile."""

    def __init__(self, user_id: UUID) -> None:
        super().__init__(f"No profile for user {user_id}")
        self.user_id = user_id


class ShoppingListNotFoundError(NotFoundError):
    """Raised when a shopping list does not exist."""

    def __init__(self, list_id: UUID) -> None:
        super().__init__(f"Shopping list {list_id} not found")
        self.list_id = list_id


class SavedMealNotFoundError(NotFoundError):
    """Raised when a saved meal does not exist."""

    def __init__(self, meal_id: UUID) -> None:
        super().__init__(f"Saved meal {meal_id} not found")
        self.meal_id = meal_id


class RecipeSourceError(RuntimeError):
    """Raised when the recipe source returns unusable data."""


class MealIdeaError(ValueError):
    """Raised when meal ideas cannot be generated for the given input."""
