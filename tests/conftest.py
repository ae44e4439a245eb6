"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from diet_recipes.adapters.fdc_client import REFERENCE_DATA_TYPES, FdcClient
from diet_recipes.adapters.mealdb_client import MealDbClient
from diet_recipes.config import Settings
from diet_recipes.containers import AppContainer
from diet_recipes.domain.profile import StoredProfile
from diet_recipes.domain.shopping import SavedMeal, ShoppingList, ShoppingListItem
from diet_recipes.services.cache import InMemoryCache
from diet_recipes.services.ingredients import IngredientService, SelectionRegistry
from diet_recipes.services.meal_ideas import MealIdeaClient, MealIdeaService
from diet_recipes.services.profiles import ProfileRepository, ProfileService
from diet_recipes.services.recipes import RecipeService
from diet_recipes.services.saved_meals import SavedMealRepository, SavedMealService
from diet_recipes.services.shopping_lists import (
    ShoppingListRepository,
    ShoppingListService,
)

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def meal_row(
    meal_id: str, name: str, ingredients: list[tuple[str, str]]
) -> dict[str, object]:
    """Build a TheMealDB lookup row with numbered ingredient columns."""
    row: dict[str, object] = {
        "idMeal": meal_id,
        "strMeal": name,
        "strCategory": "Chicken",
        "strArea": "British",
        "strInstructions": "Cook it.",
        "strMealThumb": f"https://img.example/{meal_id}.jpg",
        "strTags": None,
        "strYoutube": None,
    }
    for slot in range(1, 21):
        row[f"strIngredient{slot}"] = ""
        row[f"strMeasure{slot}"] = " "
    for slot, (ingredient, measure) in enumerate(ingredients, start=1):
        row[f"strIngredient{slot}"] = ingredient
        row[f"strMeasure{slot}"] = measure
    return row


def default_meals() -> dict[str, dict[str, object]]:
    return {
        "100": meal_row(
            "100",
            "Chicken Stir Fry",
            [("Chicken", "400g"), ("Onion", "1 sliced"), ("Soy Sauce", "2 tbsp")],
        ),
        "200": meal_row(
            "200",
            "Chicken Soup",
            [("Chicken Breast", "2"), ("Carrot", "1"), ("Chicken Stock", "1L")],
        ),
        "300": meal_row("300", "Roast Chicken", [("Chicken", "1 whole")]),
    }


@dataclass
class FakeMealDbClient(MealDbClient):
    """Fake TheMealDB client serving canned rows."""

    meals: dict[str, dict[str, object]] = field(default_factory=default_meals)
    ingredients: list[dict[str, object]] = field(
        default_factory=lambda: [
            {"idIngredient": "1", "strIngredient": "Chicken", "strType": None},
            {"idIngredient": "2", "strIngredient": "Chicken Breast", "strType": None},
            {"idIngredient": "3", "strIngredient": "Onion", "strType": "Vegetable"},
            {"idIngredient": "4", "strIngredient": "Olive Oil", "strType": "Oil"},
        ]
    )
    calls: list[tuple[str, str]] = field(default_factory=list)

    async def list_ingredients(self) -> dict[str, object]:
        self.calls.append(("list", ""))
        return {"meals": self.ingredients}

    async def filter_by_ingredient(self, ingredient: str) -> dict[str, object]:
        self.calls.append(("filter", ingredient))
        needle = ingredient.lower()
        stubs = [
            {"idMeal": meal_id, "strMeal": row["strMeal"]}
            for meal_id, row in self.meals.items()
            if any(
                needle in str(row.get(f"strIngredient{slot}") or "").lower()
                for slot in range(1, 21)
            )
        ]
        return {"meals": stubs or None}

    async def lookup_meal(self, meal_id: str) -> dict[str, object]:
        self.calls.append(("lookup", meal_id))
        row = self.meals.get(meal_id)
        return {"meals": [row] if row else None}


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client with an in-memory search response."""

    search_payload: dict[str, object] = field(
        default_factory=lambda: {
            "foods": [
                {
                    "fdcId": 171077,
                    "description": "Chicken, broilers or fryers, breast, raw",
                    "dataType": "SR Legacy",
                    "foodNutrients": [
                        {"nutrientId": 1008, "value": 120},
                        {"nutrientId": 1003, "value": 22.5},
                        {"nutrientId": 1004, "value": 2.62},
                        {"nutrientId": 1005, "value": 0},
                    ],
                }
            ]
        }
    )
    queries: list[str] = field(default_factory=list)

    async def search_foods(
        self,
        query: str,
        page_size: int = 5,
        data_types: tuple[str, ...] = REFERENCE_DATA_TYPES,
    ) -> dict[str, object]:
        self.queries.append(query)
        return self.search_payload


def meal_idea_payload(name: str = "Chicken Rice Bowl") -> dict[str, object]:
    return {
        "name": name,
        "description": "Quick high-protein bowl.",
        "ingredients": [
            {"name": "chicken", "amount": "200g"},
            {"name": "rice", "amount": "150g"},
        ],
        "instructions": "Cook rice. Grill chicken. Combine.",
        "prep_time": "10 min",
        "cook_time": "20 min",
        "servings": 2,
        "nutrition": {"calories": 520, "protein": 45, "carbs": 55, "fat": 12},
        "tags": ["high-protein"],
    }


@dataclass
class FakeMealIdeaClient(MealIdeaClient):
    """Fake LLM client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {"ideas": [meal_idea_payload()]}
    )
    prompts: list[str] = field(default_factory=list)

    async def generate(
        self,
        *,
        model: str,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        return self.payload


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, StoredProfile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> StoredProfile | None:
        return self.profiles.get(user_id)

    def upsert_profile(self, stored: StoredProfile) -> StoredProfile:
        self.profiles[stored.user_id] = stored
        return stored

    def delete_profile(self, user_id: UUID) -> None:
        self.profiles.pop(user_id, None)


@dataclass
class InMemorySavedMealRepository(SavedMealRepository):
    """In-memory saved meal repository for tests."""

    meals: dict[UUID, SavedMeal] = field(default_factory=dict)

    def create_meal(self, user_id: UUID, payload: dict[str, object]) -> SavedMeal:
        meal = SavedMeal(
            id=uuid4(),
            user_id=user_id,
            meal_id=str(payload["meal_id"]),
            meal_name=str(payload["meal_name"]),
            meal_thumb=payload.get("meal_thumb"),
            category=payload.get("category"),
            area=payload.get("area"),
            is_favorite=bool(payload.get("is_favorite", False)),
            created_at=FIXED_NOW,
        )
        self.meals[meal.id] = meal
        return meal

    def get_meal(self, meal_id: UUID) -> SavedMeal | None:
        return self.meals.get(meal_id)

    def list_meals(self, user_id: UUID, favorites_only: bool) -> list[SavedMeal]:
        return [
            meal
            for meal in self.meals.values()
            if meal.user_id == user_id and (meal.is_favorite or not favorites_only)
        ]

    def set_favorite(self, meal_id: UUID, is_favorite: bool) -> SavedMeal | None:
        meal = self.meals.get(meal_id)
        if meal is None:
            return None
        self.meals[meal_id] = replace(meal, is_favorite=is_favorite)
        return self.meals[meal_id]

    def delete_meal(self, meal_id: UUID) -> None:
        self.meals.pop(meal_id, None)


@dataclass
class InMemoryShoppingListRepository(ShoppingListRepository):
    """In-memory shopping list repository for tests."""

    lists: dict[UUID, ShoppingList] = field(default_factory=dict)

    def create_list(
        self, user_id: UUID, name: str, items: list[ShoppingListItem]
    ) -> ShoppingList:
        shopping_list = ShoppingList(
            id=uuid4(),
            user_id=user_id,
            name=name,
            items=list(items),
            created_at=FIXED_NOW,
            updated_at=FIXED_NOW,
        )
        self.lists[shopping_list.id] = shopping_list
        return shopping_list

    def get_list(self, list_id: UUID) -> ShoppingList | None:
        return self.lists.get(list_id)

    def list_lists(self, user_id: UUID) -> list[ShoppingList]:
        return [item for item in self.lists.values() if item.user_id == user_id]

    def update_list(
        self,
        list_id: UUID,
        *,
        name: str | None = None,
        items: list[ShoppingListItem] | None = None,
    ) -> ShoppingList:
        current = self.lists[list_id]
        updated = replace(
            current,
            name=current.name if name is None else name,
            items=current.items if items is None else list(items),
        )
        self.lists[list_id] = updated
        return updated

    def delete_list(self, list_id: UUID) -> None:
        self.lists.pop(list_id, None)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        api_token="api-token",
        openai_api_key="openai-key",
        fdc_api_key="fdc-key",
    )


@pytest.fixture
def mealdb_client() -> FakeMealDbClient:
    return FakeMealDbClient()


@pytest.fixture
def container(settings: Settings, mealdb_client: FakeMealDbClient) -> AppContainer:
    cache = InMemoryCache()

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        profile_service=ProfileService(
            InMemoryProfileRepository(), clock=lambda: FIXED_NOW
        ),
        ingredient_service=IngredientService(
            mealdb_client=mealdb_client,
            fdc_client=FakeFdcClient(),
            cache=cache,
            retry_delay_seconds=0,
        ),
        selection_registry=SelectionRegistry(),
        recipe_service=RecipeService(
            mealdb_client=mealdb_client,
            cache=cache,
            retry_delay_seconds=0,
        ),
        saved_meal_service=SavedMealService(InMemorySavedMealRepository()),
        shopping_list_service=ShoppingListService(
            InMemoryShoppingListRepository(), clock=lambda: FIXED_NOW
        ),
        meal_idea_service=MealIdeaService(
            client=FakeMealIdeaClient(), model=settings.openai_model
        ),
        close_resources=close_resources,
    )
