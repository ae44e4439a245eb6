"""Ingredient catalog models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class IngredientNutrition:
    """Approximate nutrition per 100 g of an ingredient."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class CatalogIngredient:
    """Ingredient listed by TheMealDB."""

    id: str
    name: str
    description: str | None
    type: str | None
    nutrition: IngredientNutrition
