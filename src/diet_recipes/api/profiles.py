"""Profile and nutrition target endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, status

from diet_recipes.api.auth import get_container, require_api_token
from diet_recipes.api.schemas import ProfileIn, ProfilePatch
from diet_recipes.domain.errors import ProfileNotFoundError
from diet_recipes.services.targets import compute_nutrition_targets

if TYPE_CHECKING:
    from diet_recipes.containers import AppContainer

router = APIRouter(tags=["profiles"], dependencies=[Depends(require_api_token)])


@router.post("/targets/calculate")
async def calculate_targets(profile: ProfileIn) -> dict[str, object]:
    """Compute targets for a profile without storing anything."""
    return {"targets": compute_nutrition_targets(profile.to_domain())}


@router.get("/users/{user_id}/profile")
async def get_profile(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the stored profile with its targets."""
    container: AppContainer = get_container(request)
    stored = container.profile_service.get_profile(user_id)
    if stored is None:
        raise ProfileNotFoundError(user_id)
    return {"profile": stored}


@router.put("/users/{user_id}/profile")
async def save_profile(
    user_id: UUID, profile: ProfileIn, request: Request
) -> dict[str, object]:
    """Create or replace a profile and recompute its targets."""
    container: AppContainer = get_container(request)
    stored = container.profile_service.save_profile(user_id, profile.to_domain())
    return {"profile": stored}


@router.patch("/users/{user_id}/profile")
async def update_profile(
    user_id: UUID, changes: ProfilePatch, request: Request
) -> dict[str, object]:
    """Apply a partial profile update."""
    container: AppContainer = get_container(request)
    values = changes.model_dump(exclude_unset=True)
    if any(value is None for value in values.values()):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Profile fields cannot be null",
        )
    stored = container.profile_service.update_profile(user_id, values)
    return {"profile": stored}


@router.delete("/users/{user_id}/profile")
async def delete_profile(user_id: UUID, request: Request) -> dict[str, str]:
    """Delete a profile and its targets."""
    container: AppContainer = get_container(request)
    container.profile_service.delete_profile(user_id)
    return {"status": "ok"}


@router.post("/users/{user_id}/profile/recalculate")
async def recalculate(user_id: UUID, request: Request) -> dict[str, object]:
    """Recompute targets for the stored profile."""
    container: AppContainer = get_container(request)
    return {"profile": container.profile_service.recalculate(user_id)}


@router.get("/users/{user_id}/targets")
async def targets_status(user_id: UUID, request: Request) -> dict[str, object]:
    """Return stored targets and whether they are stale."""
    container: AppContainer = get_container(request)
    status_ = container.profile_service.targets_status(user_id)
    return {
        "targets": status_.targets,
        "calculated_at": (
            status_.snapshot.calculated_at if status_.snapshot else None
        ),
        "stale": status_.stale,
        "changed_fields": status_.changed_fields,
    }
