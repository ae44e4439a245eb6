"""Tests for nutrition target calculation and staleness."""

from dataclasses import replace
from datetime import UTC, datetime

import pytest

from diet_recipes.domain.profile import (
    SENSITIVE_FIELDS,
    ActivityLevel,
    CalculationSnapshot,
    Gender,
    Goal,
    NutritionTargets,
    UserProfile,
)
from diet_recipes.services.targets import (
    calculate_bmr,
    calculate_tdee,
    changed_fields,
    compute_nutrition_targets,
    is_stale,
    round_half_up,
)


def _profile(**overrides) -> UserProfile:  # type: ignore[no-untyped-def]
    values = {
        "name": "Alex",
        "age": 30,
        "gender": Gender.MALE,
        "height_cm": 180.0,
        "weight_kg": 80.0,
        "activity_level": ActivityLevel.MODERATELY_ACTIVE,
        "goal": Goal.MAINTAIN,
    }
    values.update(overrides)
    return UserProfile(**values)


def test_male_maintain_targets() -> None:
    assert calculate_bmr(80, 180, 30, Gender.MALE) == 1780
    tdee = calculate_tdee(1780, ActivityLevel.MODERATELY_ACTIVE)
    assert tdee == pytest.approx(2759.0)

    targets = compute_nutrition_targets(_profile())

    assert targets == NutritionTargets(
        target_calories=2759,
        target_protein_g=160,
        target_carbs_g=357,
        target_fat_g=77,
    )


def test_goal_adjustments() -> None:
    lose = compute_nutrition_targets(_profile(goal=Goal.LOSE_WEIGHT))
    muscle = compute_nutrition_targets(_profile(goal=Goal.GAIN_MUSCLE))
    weight = compute_nutrition_targets(_profile(goal=Goal.GAIN_WEIGHT))

    assert lose == NutritionTargets(
        target_calories=2259,
        target_protein_g=160,
        target_carbs_g=263,
        target_fat_g=63,
    )
    assert muscle.target_calories == 3059
    assert weight.target_calories == 3059


def test_female_sedentary_targets() -> None:
    profile = _profile(
        age=25,
        gender=Gender.FEMALE,
        height_cm=165.0,
        weight_kg=60.0,
        activity_level=ActivityLevel.SEDENTARY,
    )

    targets = compute_nutrition_targets(profile)

    assert calculate_bmr(60, 165, 25, Gender.FEMALE) == 1345.25
    assert targets.target_calories == 1614
    assert targets.target_protein_g == 120
    assert targets.target_fat_g == 45
    assert targets.target_carbs_g == 182


def test_other_gender_uses_male_constant() -> None:
    male = compute_nutrition_targets(_profile())
    other = compute_nutrition_targets(_profile(gender=Gender.OTHER))

    assert other == male


def test_macro_energy_adds_up_to_calories() -> None:
    profiles = [
        _profile(),
        _profile(goal=Goal.LOSE_WEIGHT),
        _profile(gender=Gender.FEMALE, age=52, weight_kg=58.4, height_cm=162.0),
        _profile(
            activity_level=ActivityLevel.EXTREMELY_ACTIVE, goal=Goal.GAIN_MUSCLE
        ),
    ]

    for profile in profiles:
        targets = compute_nutrition_targets(profile)
        energy = (
            4 * targets.target_protein_g
            + 9 * targets.target_fat_g
            + 4 * targets.target_carbs_g
        )
        # Carbs absorb the remainder, so only their rounding shows up.
        assert abs(energy - targets.target_calories) <= 2


def test_protein_is_two_grams_per_kg() -> None:
    for weight in (45.0, 62.3, 80.0, 120.7):
        targets = compute_nutrition_targets(_profile(weight_kg=weight))
        assert targets.target_protein_g == round_half_up(weight * 2)


def test_targets_are_deterministic() -> None:
    profile = _profile(weight_kg=73.4, height_cm=171.5, age=41)

    assert compute_nutrition_targets(profile) == compute_nutrition_targets(profile)


def test_carbs_can_go_negative_for_extreme_profiles() -> None:
    profile = _profile(
        age=90,
        gender=Gender.FEMALE,
        height_cm=100.0,
        weight_kg=200.0,
        activity_level=ActivityLevel.SEDENTARY,
        goal=Goal.LOSE_WEIGHT,
    )

    targets = compute_nutrition_targets(profile)

    assert targets.target_calories == 1917
    assert targets.target_protein_g == 400
    assert targets.target_fat_g == 53
    assert targets.target_carbs_g == -40


def test_round_half_up() -> None:
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(77.72) == 78
    assert round_half_up(-2.5) == -2


def test_is_stale_without_snapshot() -> None:
    profile = _profile()

    assert is_stale(profile, None) is True
    assert changed_fields(profile, None) == list(SENSITIVE_FIELDS)


def test_snapshot_matching_profile_is_fresh() -> None:
    profile = _profile()
    snapshot = CalculationSnapshot.from_profile(
        profile, datetime(2024, 1, 1, tzinfo=UTC)
    )

    assert is_stale(profile, snapshot) is False
    assert changed_fields(profile, snapshot) == []


def test_name_change_does_not_make_targets_stale() -> None:
    profile = _profile()
    snapshot = CalculationSnapshot.from_profile(
        profile, datetime(2024, 1, 1, tzinfo=UTC)
    )

    assert is_stale(replace(profile, name="Sam"), snapshot) is False


def test_sensitive_change_is_reported() -> None:
    profile = _profile()
    snapshot = CalculationSnapshot.from_profile(
        profile, datetime(2024, 1, 1, tzinfo=UTC)
    )
    updated = replace(profile, weight_kg=78.0, goal=Goal.LOSE_WEIGHT)

    assert is_stale(updated, snapshot) is True
    assert changed_fields(updated, snapshot) == ["weight_kg", "goal"]
