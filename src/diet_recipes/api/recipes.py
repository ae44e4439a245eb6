"""Ingredient, selection, recipe search and meal idea endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, status

from diet_recipes.api.auth import get_container, require_api_token
from diet_recipes.api.schemas import MealIdeasRequest, RecipeSearch, SelectionToggle
from diet_recipes.domain.errors import ProfileNotFoundError

if TYPE_CHECKING:
    from diet_recipes.containers import AppContainer
    from diet_recipes.domain.recipes import MatchSummary

router = APIRouter(tags=["recipes"], dependencies=[Depends(require_api_token)])


@router.get("/ingredients")
async def search_ingredients(request: Request, query: str = "") -> dict[str, object]:
    """Search the ingredient catalog by name."""
    container: AppContainer = get_container(request)
    return {"ingredients": await container.ingredient_service.search_catalog(query)}


@router.get("/ingredients/{name}/nutrition")
async def ingredient_nutrition(name: str, request: Request) -> dict[str, object]:
    """Return per-100 g nutrition for an ingredient."""
    container: AppContainer = get_container(request)
    nutrition = await container.ingredient_service.lookup_nutrition(name)
    return {"name": name, "nutrition": nutrition}


@router.get("/users/{user_id}/selection")
async def get_selection(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the user's selected ingredients in selection order."""
    container: AppContainer = get_container(request)
    return {"selected": container.selection_registry.for_user(user_id).names}


@router.post("/users/{user_id}/selection/toggle")
async def toggle_selection(
    user_id: UUID, body: SelectionToggle, request: Request
) -> dict[str, object]:
    """Select or deselect an ingredient."""
    container: AppContainer = get_container(request)
    selection = container.selection_registry.for_user(user_id)
    selection.toggle(body.name)
    return {"selected": selection.names}


@router.delete("/users/{user_id}/selection/{name}")
async def remove_selection(
    user_id: UUID, name: str, request: Request
) -> dict[str, object]:
    """Deselect an ingredient."""
    container: AppContainer = get_container(request)
    selection = container.selection_registry.for_user(user_id)
    selection.remove(name)
    return {"selected": selection.names}


@router.delete("/users/{user_id}/selection")
async def clear_selection(user_id: UUID, request: Request) -> dict[str, object]:
    """Deselect every ingredient."""
    container: AppContainer = get_container(request)
    selection = container.selection_registry.for_user(user_id)
    selection.clear()
    return {"selected": selection.names}


@router.post("/recipes/search")
async def search_recipes(body: RecipeSearch, request: Request) -> dict[str, object]:
    """Find recipes for the selected ingredients under a match mode."""
    container: AppContainer = get_container(request)
    if body.selected is not None:
        selected = body.selected
    elif body.user_id is not None:
        selected = list(container.selection_registry.for_user(body.user_id).names)
    else:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Provide selected ingredients or a user_id",
        )
    matches = await container.recipe_service.find_matches(selected, body.mode)
    return {
        "mode": body.mode,
        "selected": selected,
        "recipes": [_match_to_dict(match) for match in matches],
    }


@router.get("/recipes/{meal_id}")
async def get_recipe(meal_id: str, request: Request) -> dict[str, object]:
    """Return a recipe with its ingredient list."""
    container: AppContainer = get_container(request)
    recipe = await container.recipe_service.get_recipe(meal_id)
    if recipe is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"recipe": recipe}


@router.post("/recipes/ideas")
async def meal_ideas(body: MealIdeasRequest, request: Request) -> dict[str, object]:
    """Generate AI meal ideas from ingredients and the user's targets."""
    container: AppContainer = get_container(request)
    stored = container.profile_service.get_profile(body.user_id)
    if stored is None:
        raise ProfileNotFoundError(body.user_id)
    ingredients = body.ingredients
    if ingredients is None:
        ingredients = list(container.selection_registry.for_user(body.user_id).names)
    ideas = await container.meal_idea_service.generate(
        ingredients, stored, count=body.count
    )
    return {"ideas": [idea.model_dump() for idea in ideas]}


def _match_to_dict(match: MatchSummary) -> dict[str, object]:
    return {
        "recipe": match.recipe,
        "matching": match.matching,
        "matched_count": match.matched_count,
        "selected_count": match.selected_count,
    }
