"""Request models for the HTTP API."""

from uuid import UUID

from pydantic import BaseModel, Field

from diet_recipes.domain.profile import ActivityLevel, Gender, Goal, UserProfile
from diet_recipes.domain.recipes import MatchMode, RecipeIngredient


class ProfileIn(BaseModel):
    """Full body profile."""

    name: str = ""
    age: int
    gender: Gender
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel
    goal: Goal

    def to_domain(self) -> UserProfile:
        """Convert to the domain profile."""
        return UserProfile(
            name=self.name,
            age=self.age,
            gender=self.gender,
            height_cm=self.height_cm,
            weight_kg=self.weight_kg,
            activity_level=self.activity_level,
            goal=self.goal,
        )


class ProfilePatch(BaseModel):
    """Partial profile update; only provided fields are applied."""

    name: str | None = None
    age: int | None = None
    gender: Gender | None = None
    height_cm: float | None = None
    weight_kg: float | None = None
    activity_level: ActivityLevel | None = None
    goal: Goal | None = None


class IngredientLine(BaseModel):
    """Ingredient name with a free-form measure."""

    ingredient: str
    measure: str = ""

    def to_domain(self) -> RecipeIngredient:
        """Convert to a recipe ingredient."""
        return RecipeIngredient(ingredient=self.ingredient, measure=self.measure)


class SelectionToggle(BaseModel):
    """Ingredient to toggle in the user's selection."""

    name: str


class RecipeSearch(BaseModel):
    """Recipe search by selected ingredients."""

    selected: list[str] | None = None
    user_id: UUID | None = None
    mode: MatchMode = MatchMode.ALL


class MealIdeasRequest(BaseModel):
    """AI meal idea request for a user."""

    user_id: UUID
    ingredients: list[str] | None = None
    count: int = Field(default=2, ge=1, le=5)


class SaveMealRequest(BaseModel):
    """Recipe to save for a user."""

    meal_id: str
    is_favorite: bool = False


class FavoriteUpdate(BaseModel):
    """Favorite flag update."""

    is_favorite: bool


class ShoppingListCreate(BaseModel):
    """New shopping list."""

    name: str
    items: list[IngredientLine] = Field(default_factory=list)
    meal_id: str | None = None


class ShoppingListRename(BaseModel):
    """Shopping list rename."""

    name: str


class ShoppingItemsAdd(BaseModel):
    """Items or a recipe to append to a list."""

    items: list[IngredientLine] = Field(default_factory=list)
    meal_id: str | None = None


class ShoppingItemUpdate(BaseModel):
    """Checked state of an item."""

    checked: bool
