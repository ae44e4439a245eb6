"""Models for AI-generated meal ideas."""

from pydantic import BaseModel, Field


class MealIdeaIngredient(BaseModel):
    """Ingredient with a free-form amount."""

    name: str
    amount: str


class MealIdeaNutrition(BaseModel):
    """Estimated nutrition per serving."""

    calories: float = Field(ge=0.0)
    protein: float = Field(ge=0.0)
    carbs: float = Field(ge=0.0)
    fat: float = Field(ge=0.0)


class MealIdea(BaseModel):
    """Single generated meal idea."""

    name: str
    description: str
    ingredients: list[MealIdeaIngredient]
    instructions: str
    prep_time: str
    cook_time: str
    servings: int = Field(ge=1)
    nutrition: MealIdeaNutrition
    tags: list[str] = Field(default_factory=list)


class MealIdeas(BaseModel):
    """Structured output for meal idea generation."""

    ideas: list[MealIdea]
