"""Supabase-backed shopping list repository.

Items are stored inline as a JSON array on the list row.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from diet_recipes.domain.shopping import ShoppingList, ShoppingListItem
from diet_recipes.services.shopping_lists import ShoppingListRepository

_TABLE = "shopping_lists"


@dataclass
class SupabaseShoppingListRepository(ShoppingListRepository):
    """Supabase implementation for shopping lists."""

    client: Client

    def create_list(
        self, user_id: UUID, name: str, items: list[ShoppingListItem]
    ) -> ShoppingList:
        """Insert a shopping list row and return it."""
        response = (
            self.client.table(_TABLE)
            .insert(
                {
                    "user_id": str(user_id),
                    "name": name,
                    "items": [_serialize_item(item) for item in items],
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create shopping list")
        return _parse_list(response.data[0])

    def get_list(self, list_id: UUID) -> ShoppingList | None:
        """Return a shopping list by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", str(list_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_list(response.data[0])

    def list_lists(self, user_id: UUID) -> list[ShoppingList]:
        """Return a user's shopping lists, most recently updated first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("updated_at", desc=True)
            .execute()
        )
        return [_parse_list(row) for row in response.data or []]

    def update_list(
        self,
        list_id: UUID,
        *,
        name: str | None = None,
        items: list[ShoppingListItem] | None = None,
    ) -> ShoppingList:
        """Update name and/or items, bumping updated_at."""
        payload: dict[str, object] = {
            "updated_at": datetime.now(tz=UTC).isoformat(),
        }
        if name is not None:
            payload["name"] = name
        if items is not None:
            payload["items"] = [_serialize_item(item) for item in items]
        response = (
            self.client.table(_TABLE).update(payload).eq("id", str(list_id)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update shopping list")
        return _parse_list(response.data[0])

    def delete_list(self, list_id: UUID) -> None:
        """Delete a shopping list row."""
        self.client.table(_TABLE).delete().eq("id", str(list_id)).execute()


def _serialize_item(item: ShoppingListItem) -> dict[str, object]:
    return {
        "id": item.id,
        "ingredient": item.ingredient,
        "measure": item.measure,
        "checked": item.checked,
        "added_at": item.added_at.isoformat() if item.added_at else None,
    }


def _parse_timestamp(value: object) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(str(value))


def _parse_list(row: dict[str, object]) -> ShoppingList:
    items = [
        ShoppingListItem(
            id=str(item["id"]),
            ingredient=str(item.get("ingredient", "")),
            measure=str(item.get("measure") or ""),
            checked=bool(item.get("checked", False)),
            added_at=_parse_timestamp(item.get("added_at")),
        )
        for item in row.get("items") or []
    ]
    return ShoppingList(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name") or ""),
        items=items,
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )
