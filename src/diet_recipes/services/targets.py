"""Daily nutrition targets from a body profile.

BMR uses the Mifflin-St Jeor equation, scaled by an activity multiplier to
TDEE and shifted by a fixed goal adjustment. Protein is 2 g per kg of body
weight, fat is 25% of the target calories and carbs take what is left.

All functions here are pure and total: inputs are not validated, so extreme
profiles produce numerically consistent but odd results (negative carbs).
"""

import math

from diet_recipes.domain.profile import (
    SENSITIVE_FIELDS,
    ActivityLevel,
    CalculationSnapshot,
    Gender,
    Goal,
    NutritionTargets,
    UserProfile,
)

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTREMELY_ACTIVE: 1.9,
}

GOAL_ADJUSTMENTS: dict[Goal, float] = {
    Goal.LOSE_WEIGHT: -500.0,
    Goal.MAINTAIN: 0.0,
    Goal.GAIN_MUSCLE: 300.0,
    Goal.GAIN_WEIGHT: 300.0,
}

PROTEIN_G_PER_KG = 2.0
FAT_CALORIE_SHARE = 0.25
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9


def calculate_bmr(
    weight_kg: float, height_cm: float, age: int, gender: Gender
) -> float:
    """Mifflin-St Jeor BMR. ``other`` uses the male constant."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == Gender.FEMALE:
        return base - 161
    return base + 5


def calculate_tdee(bmr: float, activity_level: ActivityLevel) -> float:
    """Scale BMR by the activity multiplier."""
    return bmr * ACTIVITY_MULTIPLIERS[activity_level]


def compute_nutrition_targets(profile: UserProfile) -> NutritionTargets:
    """Derive daily calorie and macro targets for a profile."""
    bmr = calculate_bmr(
        profile.weight_kg, profile.height_cm, profile.age, profile.gender
    )
    tdee = calculate_tdee(bmr, profile.activity_level)
    calories = round_half_up(tdee + GOAL_ADJUSTMENTS.get(profile.goal, 0.0))

    protein_g = round_half_up(profile.weight_kg * PROTEIN_G_PER_KG)
    fat_g = round_half_up(calories * FAT_CALORIE_SHARE / KCAL_PER_G_FAT)
    remaining = calories - protein_g * KCAL_PER_G_PROTEIN - fat_g * KCAL_PER_G_FAT
    carbs_g = round_half_up(remaining / KCAL_PER_G_CARBS)

    return NutritionTargets(
        target_calories=calories,
        target_protein_g=protein_g,
        target_carbs_g=carbs_g,
        target_fat_g=fat_g,
    )


def is_stale(profile: UserProfile, snapshot: CalculationSnapshot | None) -> bool:
    """Return True when targets must be recomputed for the profile."""
    if snapshot is None:
        return True
    return bool(changed_fields(profile, snapshot))


def changed_fields(
    profile: UserProfile, snapshot: CalculationSnapshot | None
) -> list[str]:
    """Return the sensitive fields that differ from the snapshot."""
    if snapshot is None:
        return list(SENSITIVE_FIELDS)
    return [
        name
        for name in SENSITIVE_FIELDS
        if getattr(profile, name) != getattr(snapshot, name)
    ]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)
