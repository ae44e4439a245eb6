"""Supabase-backed profile repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from diet_recipes.domain.profile import (
    ActivityLevel,
    CalculationSnapshot,
    Gender,
    Goal,
    NutritionTargets,
    StoredProfile,
    UserProfile,
)
from diet_recipes.services.profiles import ProfileRepository

_TABLE = "user_profiles"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_profile(self, user_id: UUID) -> StoredProfile | None:
        """Return the stored profile for a user, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def upsert_profile(self, stored: StoredProfile) -> StoredProfile:
        """Create or replace the profile row."""
        response = (
            self.client.table(_TABLE)
            .upsert(_serialize_profile(stored), on_conflict="user_id")
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save profile in Supabase")
        return _parse_profile(response.data[0])

    def delete_profile(self, user_id: UUID) -> None:
        """Delete the profile row."""
        self.client.table(_TABLE).delete().eq("user_id", str(user_id)).execute()


def _serialize_profile(stored: StoredProfile) -> dict[str, object]:
    profile = stored.profile
    targets = stored.targets
    snapshot = stored.snapshot
    return {
        "user_id": str(stored.user_id),
        "name": profile.name,
        "age": profile.age,
        "gender": profile.gender.value,
        "height_cm": profile.height_cm,
        "weight_kg": profile.weight_kg,
        "activity_level": profile.activity_level.value,
        "goal": profile.goal.value,
        "target_calories": targets.target_calories if targets else None,
        "target_protein_g": targets.target_protein_g if targets else None,
        "target_carbs_g": targets.target_carbs_g if targets else None,
        "target_fat_g": targets.target_fat_g if targets else None,
        "last_calculated_with": _serialize_snapshot(snapshot) if snapshot else None,
        "calculated_at": snapshot.calculated_at.isoformat() if snapshot else None,
    }


def _serialize_snapshot(snapshot: CalculationSnapshot) -> dict[str, object]:
    return {
        "age": snapshot.age,
        "gender": snapshot.gender.value,
        "height_cm": snapshot.height_cm,
        "weight_kg": snapshot.weight_kg,
        "activity_level": snapshot.activity_level.value,
        "goal": snapshot.goal.value,
    }


def _parse_profile(row: dict[str, object]) -> StoredProfile:
    profile = UserProfile(
        name=str(row.get("name") or ""),
        age=int(row["age"]),
        gender=Gender(row["gender"]),
        height_cm=float(row["height_cm"]),
        weight_kg=float(row["weight_kg"]),
        activity_level=ActivityLevel(row["activity_level"]),
        goal=Goal(row["goal"]),
    )
    targets = None
    if row.get("target_calories") is not None:
        targets = NutritionTargets(
            target_calories=int(row["target_calories"]),
            target_protein_g=int(row["target_protein_g"]),
            target_carbs_g=int(row["target_carbs_g"]),
            target_fat_g=int(row["target_fat_g"]),
        )
    snapshot = None
    raw_snapshot = row.get("last_calculated_with")
    if isinstance(raw_snapshot, dict) and row.get("calculated_at"):
        snapshot = CalculationSnapshot(
            age=int(raw_snapshot["age"]),
            gender=Gender(raw_snapshot["gender"]),
            height_cm=float(raw_snapshot["height_cm"]),
            weight_kg=float(raw_snapshot["weight_kg"]),
            activity_level=ActivityLevel(raw_snapshot["activity_level"]),
            goal=Goal(raw_snapshot["goal"]),
            calculated_at=datetime.fromisoformat(str(row["calculated_at"])),
        )
    return StoredProfile(
        user_id=UUID(str(row["user_id"])),
        profile=profile,
        targets=targets,
        snapshot=snapshot,
    )
