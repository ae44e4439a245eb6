"""AI meal idea generation."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from diet_recipes.domain.errors import MealIdeaError
from diet_recipes.domain.meal_ideas import MealIdea, MealIdeas
from diet_recipes.domain.profile import ActivityLevel, Goal, StoredProfile

_ACTIVITY_DESCRIPTIONS: dict[ActivityLevel, str] = {
    ActivityLevel.SEDENTARY: "little to no exercise",
    ActivityLevel.LIGHTLY_ACTIVE: "exercise 1-3 days per week",
    ActivityLevel.MODERATELY_ACTIVE: "exercise 3-5 days per week",
    ActivityLevel.VERY_ACTIVE: "exercise 6-7 days per week",
    ActivityLevel.EXTREMELY_ACTIVE: "physical job and exercise daily",
}

_GOAL_DESCRIPTIONS: dict[Goal, str] = {
    Goal.LOSE_WEIGHT: "lose weight",
    Goal.MAINTAIN: "maintain current weight",
    Goal.GAIN_MUSCLE: "gain muscle mass",
    Goal.GAIN_WEIGHT: "gain weight",
}

MEAL_IDEAS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "ideas": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "description": {"type": "string"},
                    "ingredients": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "name": {"type": "string"},
                                "amount": {"type": "string"},
                            },
                            "required": ["name", "amount"],
                            "additionalProperties": False,
                        },
                    },
                    "instructions": {"type": "string"},
                    "prep_time": {"type": "string"},
                    "cook_time": {"type": "string"},
                    "servings": {"type": "integer", "minimum": 1},
                    "nutrition": {
                        "type": "object",
                        "properties": {
                            "calories": {"type": "number", "minimum": 0},
                            "protein": {"type": "number", "minimum": 0},
                            "carbs": {"type": "number", "minimum": 0},
                            "fat": {"type": "number", "minimum": 0},
                        },
                        "required": ["calories", "protein", "carbs", "fat"],
                        "additionalProperties": False,
                    },
                    "tags": {"type": "array", "items": {"type": "string"}},
                },
                "required": [
                    "name",
                    "description",
                    "ingredients",
                    "instructions",
                    "prep_time",
                    "cook_time",
                    "servings",
                    "nutrition",
                    "tags",
                ],
                "additionalProperties": False,
            },
        }
    },
    "required": ["ideas"],
    "additionalProperties": False,
}

_logger = logging.getLogger(__name__)


class MealIdeaClient(Protocol):
    """Interface for structured LLM generation."""

    async def generate(
        self,
        *,
        model: str,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return JSON output conforming to ``schema``."""


@dataclass
class MealIdeaService:
    """Service that builds meal idea prompts and validates results."""

    client: MealIdeaClient
    model: str
    store: bool = False

    async def generate(
        self,
        ingredient_names: Sequence[str],
        stored: StoredProfile,
        count: int = 2,
    ) -> list[MealIdea]:
        """Generate ``count`` meal ideas for a profile's daily targets."""
        if not ingredient_names:
            raise MealIdeaError("At least one ingredient is required")
        if stored.targets is None:
            raise MealIdeaError("Nutrition targets have not been calculated")

        raw = await self.client.generate(
            model=self.model,
            store=self.store,
            schema=MEAL_IDEAS_SCHEMA,
            prompt=build_prompt(ingredient_names, stored, count),
        )
        ideas = MealIdeas.model_validate(raw).ideas
        _logger.info(
            "Generated %s meal ideas for user %s", len(ideas), stored.user_id
        )
        return ideas


def build_prompt(
    ingredient_names: Sequence[str], stored: StoredProfile, count: int
) -> str:
    """Render the chef prompt for a profile and its targets."""
    profile = stored.profile
    targets = stored.targets
    if targets is None:
        raise MealIdeaError("Nutrition targets have not been calculated")
    return (
        "You are a professional chef and nutritionist. "
        f"Create {count} different meal ideas.\n\n"
        f"Available ingredients: {', '.join(ingredient_names)}\n\n"
        "User profile:\n"
        f"- Age: {profile.age} years\n"
        f"- Gender: {profile.gender.value}\n"
        f"- Goal: {_GOAL_DESCRIPTIONS[profile.goal]}\n"
        f"- Activity level: {_ACTIVITY_DESCRIPTIONS[profile.activity_level]}\n\n"
        "Daily nutrition targets:\n"
        f"- Calories: {targets.target_calories} kcal\n"
        f"- Protein: {targets.target_protein_g}g\n"
        f"- Carbs: {targets.target_carbs_g}g\n"
        f"- Fat: {targets.target_fat_g}g\n\n"
        "Use as many of the available ingredients as possible, align with the "
        "user's goal, give realistic portions and estimated nutrition per "
        "serving, and keep the meals practical."
    )
