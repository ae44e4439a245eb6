"""Profile persistence and target recalculation."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from diet_recipes.domain.errors import ProfileNotFoundError
from diet_recipes.domain.profile import (
    SENSITIVE_FIELDS,
    CalculationSnapshot,
    NutritionTargets,
    StoredProfile,
    UserProfile,
)
from diet_recipes.services.targets import (
    changed_fields,
    compute_nutrition_targets,
    is_stale,
)

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for profiles and their targets."""

    def get_profile(self, user_id: UUID) -> StoredProfile | None:
        """Return the stored profile for a user, if present."""

    def upsert_profile(self, stored: StoredProfile) -> StoredProfile:
        """Create or replace a stored profile and return it."""

    def delete_profile(self, user_id: UUID) -> None:
        """Delete a user's profile and targets."""


@dataclass(frozen=True)
class TargetsStatus:
    """Stored targets with their staleness against the current profile."""

    targets: NutritionTargets | None
    snapshot: CalculationSnapshot | None
    stale: bool
    changed_fields: list[str]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class ProfileService:
    """Application service for profile lifecycle actions."""

    repository: ProfileRepository
    clock: Callable[[], datetime] = field(default=_utc_now)

    def save_profile(self, user_id: UUID, profile: UserProfile) -> StoredProfile:
        """Persist a profile with freshly computed targets."""
        return self.repository.upsert_profile(self._calculate(user_id, profile))

    def get_profile(self, user_id: UUID) -> StoredProfile | None:
        """Return the stored profile, if any."""
        return self.repository.get_profile(user_id)

    def update_profile(
        self, user_id: UUID, changes: dict[str, object]
    ) -> StoredProfile:
        """Apply partial changes, recomputing targets when body data changed."""
        current = self._require(user_id)
        updated_profile = replace(current.profile, **changes)
        if any(name in changes for name in SENSITIVE_FIELDS):
            stored = self._calculate(user_id, updated_profile)
        else:
            stored = replace(current, profile=updated_profile)
        return self.repository.upsert_profile(stored)

    def recalculate(self, user_id: UUID) -> StoredProfile:
        """Recompute targets for the stored profile on demand."""
        current = self._require(user_id)
        return self.repository.upsert_profile(
            self._calculate(user_id, current.profile)
        )

    def targets_status(self, user_id: UUID) -> TargetsStatus:
        """Return stored targets and whether they are stale."""
        current = self._require(user_id)
        changed = changed_fields(current.profile, current.snapshot)
        return TargetsStatus(
            targets=current.targets,
            snapshot=current.snapshot,
            stale=is_stale(current.profile, current.snapshot),
            changed_fields=changed,
        )

    def delete_profile(self, user_id: UUID) -> None:
        """Delete a profile and its targets."""
        self.repository.delete_profile(user_id)

    def _require(self, user_id: UUID) -> StoredProfile:
        current = self.repository.get_profile(user_id)
        if current is None:
            raise ProfileNotFoundError(user_id)
        return current

    def _calculate(self, user_id: UUID, profile: UserProfile) -> StoredProfile:
        targets = compute_nutrition_targets(profile)
        snapshot = CalculationSnapshot.from_profile(profile, self.clock())
        _logger.info(
            "Targets calculated: user_id=%s calories=%s",
            user_id,
            targets.target_calories,
        )
        return StoredProfile(
            user_id=user_id,
            profile=profile,
            targets=targets,
            snapshot=snapshot,
        )
