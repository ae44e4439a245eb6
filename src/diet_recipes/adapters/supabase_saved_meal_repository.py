"""Supabase-backed saved meal repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from diet_recipes.domain.shopping import SavedMeal
from diet_recipes.services.saved_meals import SavedMealRepository

_TABLE = "saved_meals"


@dataclass
class SupabaseSavedMealRepository(SavedMealRepository):
    """Supabase implementation for saved meals."""

    client: Client

    def create_meal(self, user_id: UUID, payload: dict[str, object]) -> SavedMeal:
        """Insert a saved meal row and return it."""
        response = (
            self.client.table(_TABLE)
            .insert({"user_id": str(user_id), **payload})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save meal")
        return _parse_meal(response.data[0])

    def get_meal(self, meal_id: UUID) -> SavedMeal | None:
        """Return a saved meal by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def list_meals(self, user_id: UUID, favorites_only: bool) -> list[SavedMeal]:
        """Return a user's saved meals, newest first."""
        query = self.client.table(_TABLE).select("*").eq("user_id", str(user_id))
        if favorites_only:
            query = query.eq("is_favorite", True)
        response = query.order("created_at", desc=True).execute()
        return [_parse_meal(row) for row in response.data or []]

    def set_favorite(self, meal_id: UUID, is_favorite: bool) -> SavedMeal | None:
        """Update the favorite flag."""
        response = (
            self.client.table(_TABLE)
            .update({"is_favorite": is_favorite})
            .eq("id", str(meal_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a saved meal row."""
        self.client.table(_TABLE).delete().eq("id", str(meal_id)).execute()


def _parse_meal(row: dict[str, object]) -> SavedMeal:
    created_at = row.get("created_at")
    return SavedMeal(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        meal_id=str(row["meal_id"]),
        meal_name=str(row.get("meal_name") or ""),
        meal_thumb=row.get("meal_thumb"),
        category=row.get("category"),
        area=row.get("area"),
        is_favorite=bool(row.get("is_favorite", False)),
        created_at=datetime.fromisoformat(str(created_at)) if created_at else None,
    )
