"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from diet_recipes.adapters.fdc_client import HttpxFdcClient
from diet_recipes.adapters.mealdb_client import HttpxMealDbClient
from diet_recipes.adapters.openai_meal_ideas_client import OpenAIMealIdeaClient
from diet_recipes.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from diet_recipes.adapters.supabase_saved_meal_repository import (
    SupabaseSavedMealRepository,
)
from diet_recipes.adapters.supabase_shopping_list_repository import (
    SupabaseShoppingListRepository,
)
from diet_recipes.config import Settings
from diet_recipes.services.cache import InMemoryCache
from diet_recipes.services.ingredients import IngredientService, SelectionRegistry
from diet_recipes.services.meal_ideas import MealIdeaService
from diet_recipes.services.profiles import ProfileService
from diet_recipes.services.recipes import RecipeService
from diet_recipes.services.saved_meals import SavedMealService
from diet_recipes.services.shopping_lists import ShoppingListService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    ingredient_service: IngredientService
    selection_registry: SelectionRegistry
    recipe_service: RecipeService
    saved_meal_service: SavedMealService
    shopping_list_service: ShoppingListService
    meal_idea_service: MealIdeaService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    mealdb_client = HttpxMealDbClient.create(resolved_settings.mealdb_base_url)
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
    )
    cache = InMemoryCache()
    meal_idea_service = MealIdeaService(
        client=OpenAIMealIdeaClient.create(resolved_settings.openai_api_key),
        model=resolved_settings.openai_model,
        store=resolved_settings.openai_store,
    )

    async def close_resources() -> None:
        await mealdb_client.close()
        await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        profile_service=ProfileService(SupabaseProfileRepository(supabase_client)),
        ingredient_service=IngredientService(
            mealdb_client=mealdb_client,
            fdc_client=fdc_client,
            cache=cache,
        ),
        selection_registry=SelectionRegistry(),
        recipe_service=RecipeService(
            mealdb_client=mealdb_client,
            cache=cache,
            max_results=resolved_settings.recipe_search_limit,
        ),
        saved_meal_service=SavedMealService(
            SupabaseSavedMealRepository(supabase_client)
        ),
        shopping_list_service=ShoppingListService(
            SupabaseShoppingListRepository(supabase_client)
        ),
        meal_idea_service=meal_idea_service,
        close_resources=close_resources,
    )
