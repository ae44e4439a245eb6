"""Ingredient overlap scoring between recipes and the user's selection.

Names match when either one, lower-cased, contains the other. This is a
plain substring test, so "egg" matches "eggs" and "red onion" matches
"onion", and a one-letter selection matches almost everything.
"""

import math
from collections.abc import Iterable, Sequence

from diet_recipes.domain.recipes import (
    MatchMode,
    MatchSummary,
    Recipe,
    RecipeIngredient,
)


def ingredient_matches(recipe_ingredient: str, selected: str) -> bool:
    """Return True when either name contains the other, ignoring case."""
    left = recipe_ingredient.lower()
    right = selected.lower()
    return right in left or left in right


def score_match(
    ingredients: Sequence[RecipeIngredient], selected: Iterable[str]
) -> list[RecipeIngredient]:
    """Return the recipe lines that match any selected ingredient.

    Lines are counted individually and keep recipe order; a selected
    ingredient that matches two lines contributes two entries.
    """
    selected_names = list(selected)
    return [
        item
        for item in ingredients
        if any(ingredient_matches(item.ingredient, name) for name in selected_names)
    ]


def classify(
    ingredients: Sequence[RecipeIngredient],
    selected: Iterable[str],
    mode: MatchMode,
) -> bool:
    """Return True when a recipe passes the filter mode."""
    if mode == MatchMode.ALL:
        return True
    selected_names = list(selected)
    matched = len(score_match(ingredients, selected_names))
    if mode == MatchMode.EXACT:
        return matched == len(selected_names)
    return matched >= required_partial_matches(len(selected_names))


def required_partial_matches(selected_count: int) -> int:
    """Minimum matching lines for a partial match."""
    return math.ceil(selected_count / 2)


def filter_recipes(
    recipes: Iterable[Recipe], selected: Iterable[str], mode: MatchMode
) -> list[MatchSummary]:
    """Classify recipes in order and summarize the ones that pass."""
    selected_names = list(selected)
    results: list[MatchSummary] = []
    for recipe in recipes:
        if not classify(recipe.ingredients, selected_names, mode):
            continue
        results.append(
            MatchSummary(
                recipe=recipe,
                matching=score_match(recipe.ingredients, selected_names),
                selected_count=len(selected_names),
            )
        )
    return results
