"""Ingredient catalog, nutrition lookup and the user's selection."""

import logging
import re
from dataclasses import dataclass, field
from uuid import UUID

import httpx

from diet_recipes.adapters.fdc_client import REFERENCE_DATA_TYPES, FdcClient
from diet_recipes.adapters.mealdb_client import MealDbClient
from diet_recipes.domain.errors import RecipeSourceError
from diet_recipes.domain.ingredients import CatalogIngredient, IngredientNutrition
from diet_recipes.services.cache import Cache
from diet_recipes.services.targets import round_half_up
from diet_recipes.services.upstream import call_with_retry

_NUTRIENT_IDS = {
    "calories": 1008,
    "protein": 1003,
    "carbs": 1005,
    "fat": 1004,
}

_DESCRIPTIVE_WORDS = re.compile(
    r"\b(fresh|dried|frozen|raw|cooked|unsalted|salted|ground|chopped|sliced"
    r"|minced|powder|powdered)\b",
    re.IGNORECASE,
)
_PARENTHESES = re.compile(r"\(.*?\)")

# Keyword groups checked in order; first hit wins.
_ESTIMATES: list[tuple[tuple[str, ...], IngredientNutrition]] = [
    (
        ("chicken", "beef", "pork", "turkey", "fish", "salmon"),
        IngredientNutrition(calories=165, protein_g=31, carbs_g=0, fat_g=3.6),
    ),
    (
        ("cheese", "milk", "cream"),
        IngredientNutrition(calories=120, protein_g=8, carbs_g=9, fat_g=6),
    ),
    (
        ("lettuce", "spinach", "cucumber", "tomato", "pepper", "onion"),
        IngredientNutrition(calories=25, protein_g=1.5, carbs_g=5, fat_g=0.2),
    ),
    (
        ("rice", "pasta", "bread", "flour", "oat"),
        IngredientNutrition(calories=130, protein_g=3, carbs_g=28, fat_g=0.5),
    ),
    (
        ("apple", "banana", "orange", "berry", "lemon"),
        IngredientNutrition(calories=60, protein_g=0.5, carbs_g=15, fat_g=0.2),
    ),
    (
        ("oil", "butter"),
        IngredientNutrition(calories=120, protein_g=0, carbs_g=0, fat_g=14),
    ),
]
_DEFAULT_ESTIMATE = IngredientNutrition(calories=50, protein_g=2, carbs_g=10, fat_g=1)

_logger = logging.getLogger(__name__)


def estimate_nutrition(name: str) -> IngredientNutrition:
    """Rough per-100 g nutrition guessed from keywords in the name."""
    lowered = name.lower()
    for keywords, nutrition in _ESTIMATES:
        if any(keyword in lowered for keyword in keywords):
            return nutrition
    return _DEFAULT_ESTIMATE


def clean_ingredient_name(name: str) -> str:
    """Strip qualifiers that hurt USDA search relevance."""
    cleaned = _PARENTHESES.sub("", name.lower())
    cleaned = _DESCRIPTIVE_WORDS.sub("", cleaned)
    return " ".join(cleaned.split())


@dataclass
class IngredientSelection:
    """Ordered set of ingredient names picked by the user."""

    names: list[str] = field(default_factory=list)

    def toggle(self, name: str) -> None:
        """Select ``name`` or deselect it if already selected."""
        if name in self.names:
            self.names.remove(name)
        else:
            self.names.append(name)

    def remove(self, name: str) -> None:
        """Deselect ``name`` if present."""
        self.names = [selected for selected in self.names if selected != name]

    def clear(self) -> None:
        """Deselect everything."""
        self.names = []

    def __len__(self) -> int:
        return len(self.names)


@dataclass
class SelectionRegistry:
    """Per-user ingredient selections held for the life of the process."""

    selections: dict[UUID, IngredientSelection] = field(default_factory=dict)

    def for_user(self, user_id: UUID) -> IngredientSelection:
        """Return the user's selection, creating an empty one on first use."""
        return self.selections.setdefault(user_id, IngredientSelection())


@dataclass
class IngredientService:
    """Service for the ingredient catalog and nutrition lookups."""

    mealdb_client: MealDbClient
    fdc_client: FdcClient
    cache: Cache
    catalog_ttl_seconds: int = 86400
    nutrition_ttl_seconds: int = 86400
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def list_catalog(self) -> list[CatalogIngredient]:
        """Return TheMealDB ingredients with estimated nutrition."""
        cache_key = "mealdb:ingredients"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await call_with_retry(
            self.mealdb_client.list_ingredients,
            action="list_ingredients",
            retry_attempts=self.retry_attempts,
            retry_delay_seconds=self.retry_delay_seconds,
        )
        rows = payload.get("meals")
        if not rows:
            raise RecipeSourceError("No ingredients found")
        catalog = [
            CatalogIngredient(
                id=str(row.get("idIngredient", "")),
                name=row.get("strIngredient", ""),
                description=row.get("strDescription"),
                type=row.get("strType"),
                nutrition=estimate_nutrition(row.get("strIngredient", "")),
            )
            for row in rows
        ]
        self.cache.set(cache_key, catalog, ttl_seconds=self.catalog_ttl_seconds)
        return catalog

    async def search_catalog(self, query: str) -> list[CatalogIngredient]:
        """Filter the catalog by a case-insensitive substring."""
        needle = query.strip().lower()
        if not needle:
            return []
        catalog = await self.list_catalog()
        return [item for item in catalog if needle in item.name.lower()]

    async def lookup_nutrition(self, name: str) -> IngredientNutrition:
        """Look up USDA nutrition, falling back to a keyword estimate."""
        cleaned = clean_ingredient_name(name)
        cache_key = f"fdc:nutrition:{cleaned}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, IngredientNutrition):
            return cached

        try:
            payload = await call_with_retry(
                lambda: self.fdc_client.search_foods(cleaned, page_size=5),
                action=f"fdc_search:{cleaned}",
                retry_attempts=self.retry_attempts,
                retry_delay_seconds=self.retry_delay_seconds,
            )
        except (httpx.HTTPError, ValueError) as exc:
            _logger.warning("USDA lookup failed for %s: %s", name, exc)
            return estimate_nutrition(name)

        nutrition = _nutrition_from_search(payload)
        if nutrition is None:
            _logger.info("USDA had no usable data for %s, using estimate", name)
            return estimate_nutrition(name)
        self.cache.set(cache_key, nutrition, ttl_seconds=self.nutrition_ttl_seconds)
        return nutrition


def _nutrition_from_search(payload: dict[str, object]) -> IngredientNutrition | None:
    """Pick the best reference food and extract its macros."""
    foods = payload.get("foods") or []
    if not foods:
        return None
    food = next(
        (item for item in foods if item.get("dataType") in REFERENCE_DATA_TYPES),
        foods[0],
    )
    nutrients = food.get("foodNutrients") or []
    values = {
        key: _nutrient_value(nutrients, nutrient_id)
        for key, nutrient_id in _NUTRIENT_IDS.items()
    }
    if not any(values.values()):
        return None
    return IngredientNutrition(
        calories=values["calories"],
        protein_g=values["protein"],
        carbs_g=values["carbs"],
        fat_g=values["fat"],
    )


def _nutrient_value(nutrients: list[dict[str, object]], nutrient_id: int) -> int:
    """Return a nutrient's rounded value by id or number, 0 when absent."""
    for nutrient in nutrients:
        if (
            nutrient.get("nutrientId") == nutrient_id
            or nutrient.get("nutrientNumber") == str(nutrient_id)
        ):
            value = nutrient.get("value")
            if value is None:
                return 0
            return round_half_up(float(value))
    return 0
