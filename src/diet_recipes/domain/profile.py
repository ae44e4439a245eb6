"""Body profile and nutrition target models."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class Gender(StrEnum):
    """Gender as entered on the profile."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(StrEnum):
    """Self-reported activity level."""

    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATELY_ACTIVE = "moderately_active"
    VERY_ACTIVE = "very_active"
    EXTREMELY_ACTIVE = "extremely_active"


class Goal(StrEnum):
    """Body composition goal."""

    LOSE_WEIGHT = "lose_weight"
    MAINTAIN = "maintain"
    GAIN_MUSCLE = "gain_muscle"
    GAIN_WEIGHT = "gain_weight"


SENSITIVE_FIELDS: tuple[str, ...] = (
    "age",
    "gender",
    "height_cm",
    "weight_kg",
    "activity_level",
    "goal",
)


@dataclass(frozen=True)
class UserProfile:
    """Body profile used to derive nutrition targets."""

    name: str
    age: int
    gender: Gender
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel
    goal: Goal


@dataclass(frozen=True)
class NutritionTargets:
    """Daily calorie and macronutrient targets."""

    target_calories: int
    target_protein_g: int
    target_carbs_g: int
    target_fat_g: int


@dataclass(frozen=True)
class CalculationSnapshot:
    """Sensitive profile fields as they were when targets were computed."""

    age: int
    gender: Gender
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel
    goal: Goal
    calculated_at: datetime

    @classmethod
    def from_profile(
        cls, profile: UserProfile, calculated_at: datetime
    ) -> "CalculationSnapshot":
        """Capture the sensitive fields of a profile."""
        return cls(
            age=profile.age,
            gender=profile.gender,
            height_cm=profile.height_cm,
            weight_kg=profile.weight_kg,
            activity_level=profile.activity_level,
            goal=profile.goal,
            calculated_at=calculated_at,
        )


@dataclass(frozen=True)
class StoredProfile:
    """Profile with its last computed targets, as held by the profile store."""

    user_id: UUID
    profile: UserProfile
    targets: NutritionTargets | None
    snapshot: CalculationSnapshot | None
