"""Saved meal and shopping list endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, HTTPException, Request, status

from diet_recipes.api.auth import get_container, require_api_token
from diet_recipes.api.schemas import (
    FavoriteUpdate,
    SaveMealRequest,
    ShoppingItemsAdd,
    ShoppingItemUpdate,
    ShoppingListCreate,
    ShoppingListRename,
)

if TYPE_CHECKING:
    from diet_recipes.containers import AppContainer
    from diet_recipes.domain.recipes import Recipe, RecipeIngredient

router = APIRouter(tags=["shopping"], dependencies=[Depends(require_api_token)])


@router.get("/users/{user_id}/meals")
async def list_meals(
    user_id: UUID, request: Request, favorites: bool = False
) -> dict[str, object]:
    """Return a user's saved meals, optionally favorites only."""
    container: AppContainer = get_container(request)
    service = container.saved_meal_service
    if favorites:
        return {"meals": service.list_favorites(user_id)}
    return {"meals": service.list_meals(user_id)}


@router.post("/users/{user_id}/meals")
async def save_meal(
    user_id: UUID, body: SaveMealRequest, request: Request
) -> dict[str, object]:
    """Save a TheMealDB recipe for a user."""
    container: AppContainer = get_container(request)
    recipe = await _require_recipe(container, body.meal_id)
    meal = container.saved_meal_service.save_meal(
        user_id, recipe, is_favorite=body.is_favorite
    )
    return {"meal": meal}


@router.patch("/meals/{meal_id}")
async def set_favorite(
    meal_id: UUID, body: FavoriteUpdate, request: Request
) -> dict[str, object]:
    """Mark or unmark a saved meal as favorite."""
    container: AppContainer = get_container(request)
    meal = container.saved_meal_service.set_favorite(meal_id, body.is_favorite)
    return {"meal": meal}


@router.delete("/meals/{meal_id}")
async def delete_meal(meal_id: UUID, request: Request) -> dict[str, str]:
    """Delete a saved meal."""
    container: AppContainer = get_container(request)
    container.saved_meal_service.delete_meal(meal_id)
    return {"status": "ok"}


@router.get("/users/{user_id}/shopping-lists")
async def list_shopping_lists(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the user's shopping lists."""
    container: AppContainer = get_container(request)
    return {"lists": container.shopping_list_service.list_lists(user_id)}


@router.post("/users/{user_id}/shopping-lists")
async def create_shopping_list(
    user_id: UUID, body: ShoppingListCreate, request: Request
) -> dict[str, object]:
    """Create a list from explicit items and/or a recipe's ingredients."""
    container: AppContainer = get_container(request)
    items = await _collect_items(container, body.items, body.meal_id)
    shopping_list = container.shopping_list_service.create_list(
        user_id, body.name, items
    )
    return {"list": shopping_list}


@router.get("/shopping-lists/{list_id}")
async def get_shopping_list(list_id: UUID, request: Request) -> dict[str, object]:
    """Return a shopping list."""
    container: AppContainer = get_container(request)
    return {"list": container.shopping_list_service.get_list(list_id)}


@router.patch("/shopping-lists/{list_id}")
async def rename_shopping_list(
    list_id: UUID, body: ShoppingListRename, request: Request
) -> dict[str, object]:
    """Rename a shopping list."""
    container: AppContainer = get_container(request)
    return {"list": container.shopping_list_service.rename_list(list_id, body.name)}


@router.delete("/shopping-lists/{list_id}")
async def delete_shopping_list(list_id: UUID, request: Request) -> dict[str, str]:
    """Delete a shopping list."""
    container: AppContainer = get_container(request)
    container.shopping_list_service.delete_list(list_id)
    return {"status": "ok"}


@router.post("/shopping-lists/{list_id}/items")
async def add_shopping_items(
    list_id: UUID, body: ShoppingItemsAdd, request: Request
) -> dict[str, object]:
    """Append items and/or a recipe's ingredients to a list."""
    container: AppContainer = get_container(request)
    items = await _collect_items(container, body.items, body.meal_id)
    return {"list": container.shopping_list_service.add_items(list_id, items)}


@router.patch("/shopping-lists/{list_id}/items/{item_id}")
async def update_shopping_item(
    list_id: UUID, item_id: str, body: ShoppingItemUpdate, request: Request
) -> dict[str, object]:
    """Check or uncheck an item."""
    container: AppContainer = get_container(request)
    shopping_list = container.shopping_list_service.set_item_checked(
        list_id, item_id, body.checked
    )
    return {"list": shopping_list}


@router.delete("/shopping-lists/{list_id}/items/{item_id}")
async def delete_shopping_item(
    list_id: UUID, item_id: str, request: Request
) -> dict[str, object]:
    """Remove an item from a list."""
    container: AppContainer = get_container(request)
    return {"list": container.shopping_list_service.delete_item(list_id, item_id)}


async def _require_recipe(container: AppContainer, meal_id: str) -> Recipe:
    recipe = await container.recipe_service.get_recipe(meal_id)
    if recipe is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Recipe {meal_id} not found",
        )
    return recipe


async def _collect_items(
    container: AppContainer, lines: list, meal_id: str | None
) -> list[RecipeIngredient]:
    items = [line.to_domain() for line in lines]
    if meal_id is not None:
        recipe = await _require_recipe(container, meal_id)
        items.extend(recipe.ingredients)
    return items
