"""Shopping list management."""

import secrets
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from diet_recipes.domain.errors import ShoppingListNotFoundError
from diet_recipes.domain.recipes import Recipe, RecipeIngredient
from diet_recipes.domain.shopping import ShoppingList, ShoppingListItem


class ShoppingListRepository(Protocol):
    """Persistence interface for shopping lists."""

    def create_list(
        self, user_id: UUID, name: str, items: list[ShoppingListItem]
    ) -> ShoppingList:
        """Create a shopping list and return it."""

    def get_list(self, list_id: UUID) -> ShoppingList | None:
        """Return a shopping list by id, if present."""

    def list_lists(self, user_id: UUID) -> list[ShoppingList]:
        """Return all shopping lists of a user."""

    def update_list(
        self,
        list_id: UUID,
        *,
        name: str | None = None,
        items: list[ShoppingListItem] | None = None,
    ) -> ShoppingList:
        """Update the name and/or items of a list and return it."""

    def delete_list(self, list_id: UUID) -> None:
        """Delete a shopping list."""


def new_item_id() -> str:
    """Short random id for a shopping list item."""
    return secrets.token_hex(4)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class ShoppingListService:
    """Application service for shopping lists."""

    repository: ShoppingListRepository
    clock: Callable[[], datetime] = field(default=_utc_now)
    id_factory: Callable[[], str] = field(default=new_item_id)

    def create_list(
        self,
        user_id: UUID,
        name: str,
        items: Iterable[RecipeIngredient] = (),
    ) -> ShoppingList:
        """Create a list, optionally pre-filled with ingredients."""
        return self.repository.create_list(user_id, name, self._new_items(items))

    def list_lists(self, user_id: UUID) -> list[ShoppingList]:
        """Return the user's shopping lists."""
        return self.repository.list_lists(user_id)

    def get_list(self, list_id: UUID) -> ShoppingList:
        """Return a shopping list."""
        shopping_list = self.repository.get_list(list_id)
        if shopping_list is None:
            raise ShoppingListNotFoundError(list_id)
        return shopping_list

    def rename_list(self, list_id: UUID, name: str) -> ShoppingList:
        """Rename a shopping list."""
        self.get_list(list_id)
        return self.repository.update_list(list_id, name=name)

    def add_items(
        self, list_id: UUID, items: Iterable[RecipeIngredient]
    ) -> ShoppingList:
        """Append unchecked items to a list."""
        current = self.get_list(list_id)
        return self.repository.update_list(
            list_id, items=[*current.items, *self._new_items(items)]
        )

    def add_recipe(self, list_id: UUID, recipe: Recipe) -> ShoppingList:
        """Append every ingredient of a recipe to a list."""
        return self.add_items(list_id, recipe.ingredients)

    def set_item_checked(
        self, list_id: UUID, item_id: str, checked: bool
    ) -> ShoppingList:
        """Check or uncheck a single item."""
        current = self.get_list(list_id)
        items = [
            replace(item, checked=checked) if item.id == item_id else item
            for item in current.items
        ]
        return self.repository.update_list(list_id, items=items)

    def delete_item(self, list_id: UUID, item_id: str) -> ShoppingList:
        """Remove a single item from a list."""
        current = self.get_list(list_id)
        items = [item for item in current.items if item.id != item_id]
        return self.repository.update_list(list_id, items=items)

    def delete_list(self, list_id: UUID) -> None:
        """Delete a shopping list."""
        self.repository.delete_list(list_id)

    def _new_items(self, items: Iterable[RecipeIngredient]) -> list[ShoppingListItem]:
        added_at = self.clock()
        return [
            ShoppingListItem(
                id=self.id_factory(),
                ingredient=item.ingredient,
                measure=item.measure,
                checked=False,
                added_at=added_at,
            )
            for item in items
        ]
