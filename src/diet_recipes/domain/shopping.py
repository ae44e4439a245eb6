"""Domain models for saved meals and shopping lists."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class SavedMeal:
    """Recipe saved by a user, optionally marked as favorite."""

    id: UUID
    user_id: UUID
    meal_id: str
    meal_name: str
    meal_thumb: str | None
    category: str | None
    area: str | None
    is_favorite: bool
    created_at: datetime | None = None


@dataclass(frozen=True)
class ShoppingListItem:
    """Single line on a shopping list."""

    id: str
    ingredient: str
    measure: str
    checked: bool = False
    added_at: datetime | None = None


@dataclass(frozen=True)
class ShoppingList:
    """Named shopping list owned by a user."""

    id: UUID
    user_id: UUID
    name: str
    items: list[ShoppingListItem] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
