"""Tests for profile persistence and target recalculation."""

from dataclasses import replace
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from diet_recipes.domain.errors import ProfileNotFoundError
from diet_recipes.domain.profile import ActivityLevel, Gender, Goal, UserProfile
from diet_recipes.services.profiles import ProfileService
from tests.conftest import InMemoryProfileRepository


def _profile() -> UserProfile:
    return UserProfile(
        name="Alex",
        age=30,
        gender=Gender.MALE,
        height_cm=180.0,
        weight_kg=80.0,
        activity_level=ActivityLevel.MODERATELY_ACTIVE,
        goal=Goal.MAINTAIN,
    )


class _Clock:
    def __init__(self) -> None:
        self.now = datetime(2024, 3, 1, 8, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self) -> None:
        self.now += timedelta(hours=1)


def test_save_profile_computes_targets_and_snapshot() -> None:
    clock = _Clock()
    repository = InMemoryProfileRepository()
    service = ProfileService(repository, clock=clock)
    user_id = uuid4()

    stored = service.save_profile(user_id, _profile())

    assert stored.targets is not None
    assert stored.targets.target_calories == 2759
    assert stored.snapshot is not None
    assert stored.snapshot.weight_kg == 80.0
    assert stored.snapshot.calculated_at == clock.now
    assert repository.profiles[user_id] == stored


def test_update_name_keeps_targets() -> None:
    clock = _Clock()
    service = ProfileService(InMemoryProfileRepository(), clock=clock)
    user_id = uuid4()
    original = service.save_profile(user_id, _profile())
    clock.advance()

    updated = service.update_profile(user_id, {"name": "Sam"})

    assert updated.profile.name == "Sam"
    assert updated.targets == original.targets
    assert updated.snapshot == original.snapshot


def test_update_sensitive_field_recalculates() -> None:
    clock = _Clock()
    service = ProfileService(InMemoryProfileRepository(), clock=clock)
    user_id = uuid4()
    service.save_profile(user_id, _profile())
    clock.advance()

    updated = service.update_profile(user_id, {"goal": Goal.LOSE_WEIGHT})

    assert updated.targets is not None
    assert updated.targets.target_calories == 2259
    assert updated.snapshot is not None
    assert updated.snapshot.goal == Goal.LOSE_WEIGHT
    assert updated.snapshot.calculated_at == clock.now


def test_targets_status_reports_stale_fields() -> None:
    repository = InMemoryProfileRepository()
    service = ProfileService(repository, clock=_Clock())
    user_id = uuid4()
    stored = service.save_profile(user_id, _profile())
    # Simulate a profile edited outside the service.
    repository.profiles[user_id] = replace(
        stored, profile=replace(stored.profile, weight_kg=75.0)
    )

    status = service.targets_status(user_id)

    assert status.stale is True
    assert status.changed_fields == ["weight_kg"]

    service.recalculate(user_id)
    assert service.targets_status(user_id).stale is False


def test_missing_profile_raises() -> None:
    service = ProfileService(InMemoryProfileRepository())

    with pytest.raises(ProfileNotFoundError):
        service.recalculate(uuid4())
    with pytest.raises(ProfileNotFoundError):
        service.update_profile(uuid4(), {"age": 31})


def test_delete_profile() -> None:
    service = ProfileService(InMemoryProfileRepository())
    user_id = uuid4()
    service.save_profile(user_id, _profile())

    service.delete_profile(user_id)

    assert service.get_profile(user_id) is None
