"""Recipe search backed by TheMealDB."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from diet_recipes.adapters.mealdb_client import MealDbClient
from diet_recipes.domain.recipes import (
    MatchMode,
    MatchSummary,
    Recipe,
    RecipeIngredient,
)
from diet_recipes.services.cache import Cache
from diet_recipes.services.matching import filter_recipes
from diet_recipes.services.upstream import call_with_retry

# TheMealDB exposes up to 20 numbered ingredient/measure columns per meal.
MAX_INGREDIENT_SLOTS = 20

_logger = logging.getLogger(__name__)


@dataclass
class RecipeService:
    """Service for finding recipes that use the selected ingredients."""

    mealdb_client: MealDbClient
    cache: Cache
    max_results: int = 20
    search_ttl_seconds: int = 3600
    recipe_ttl_seconds: int = 86400
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search_by_ingredients(self, selected: Sequence[str]) -> list[Recipe]:
        """Return recipes containing the first selected ingredient.

        TheMealDB filters on a single ingredient only; the remaining
        selections are applied afterwards by the match filter.
        """
        if not selected:
            return []
        main_ingredient = selected[0]
        cache_key = f"mealdb:filter:{main_ingredient.lower()}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            stubs = cached
        else:
            payload = await call_with_retry(
                lambda: self.mealdb_client.filter_by_ingredient(main_ingredient),
                action=f"filter:{main_ingredient}",
                retry_attempts=self.retry_attempts,
                retry_delay_seconds=self.retry_delay_seconds,
            )
            stubs = payload.get("meals") or []
            self.cache.set(cache_key, stubs, ttl_seconds=self.search_ttl_seconds)

        meal_ids = [str(stub["idMeal"]) for stub in stubs[: self.max_results]]
        details = await asyncio.gather(
            *(self.get_recipe(meal_id) for meal_id in meal_ids)
        )
        recipes = [recipe for recipe in details if recipe is not None]
        _logger.info(
            "Recipe search: ingredient=%s stubs=%s recipes=%s",
            main_ingredient,
            len(stubs),
            len(recipes),
        )
        return recipes

    async def get_recipe(self, meal_id: str) -> Recipe | None:
        """Return full recipe details, or None when TheMealDB has none."""
        cache_key = f"mealdb:meal:{meal_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, Recipe):
            return cached

        payload = await call_with_retry(
            lambda: self.mealdb_client.lookup_meal(meal_id),
            action=f"lookup:{meal_id}",
            retry_attempts=self.retry_attempts,
            retry_delay_seconds=self.retry_delay_seconds,
        )
        meals = payload.get("meals") or []
        if not meals or not meals[0]:
            return None
        recipe = parse_recipe(meals[0])
        self.cache.set(cache_key, recipe, ttl_seconds=self.recipe_ttl_seconds)
        return recipe

    async def find_matches(
        self, selected: Sequence[str], mode: MatchMode
    ) -> list[MatchSummary]:
        """Search by ingredients and keep recipes passing ``mode``."""
        recipes = await self.search_by_ingredients(selected)
        return filter_recipes(recipes, selected, mode)


def parse_recipe(row: dict[str, object]) -> Recipe:
    """Build a recipe from a TheMealDB meal row."""
    return Recipe(
        id=str(row["idMeal"]),
        name=str(row.get("strMeal") or ""),
        category=row.get("strCategory"),
        area=row.get("strArea"),
        instructions=row.get("strInstructions"),
        thumbnail=row.get("strMealThumb"),
        tags=row.get("strTags"),
        youtube=row.get("strYoutube"),
        ingredients=extract_ingredients(row),
    )


def extract_ingredients(row: dict[str, object]) -> list[RecipeIngredient]:
    """Collect the non-blank numbered ingredient and measure columns."""
    ingredients: list[RecipeIngredient] = []
    for slot in range(1, MAX_INGREDIENT_SLOTS + 1):
        name = row.get(f"strIngredient{slot}")
        if not isinstance(name, str) or not name.strip():
            continue
        measure = row.get(f"strMeasure{slot}")
        ingredients.append(
            RecipeIngredient(
                ingredient=name.strip(),
                measure=measure.strip() if isinstance(measure, str) else "",
            )
        )
    return ingredients
