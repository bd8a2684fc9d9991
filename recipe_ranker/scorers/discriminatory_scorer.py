# recipe_ranker/scorers/discriminatory_scorer.py
"""
Discriminatory Scorer - separates recipes the user would pick from those
they would skip, using only stated preferences.

Sub-scores (weights):
- cuisine_match (.30): 90 liked, 20 not liked, 50 when no cuisines are set
- ingredient_penalty (.25): 60 when a banned ingredient is present, else 0
  (contributes as 100 - penalty)
- cook_time_match (.20): tiered by distance from the preferred cook time
- dietary_match (.15): neutral 50; recipes carry no diet tags to compare
- spice_match (.10): neutral 50; recipes carry no spice level to compare
"""
from typing import Optional

from .base_scorer import Scorer, clamp_score, round_score
from recipe_ranker.models.preferences import UserPreferences
from recipe_ranker.models.recipe import Recipe
from recipe_ranker.models.scoring_context import ScoringContext, ScoreResult, NEUTRAL_SCORE
from recipe_ranker.taxonomy.dietary import find_banned_ingredient


BANNED_INGREDIENT_PENALTY = 60

# (max minutes from preference, score), checked in order
COOK_TIME_TIERS = ((5, 95), (15, 80), (30, 60))
COOK_TIME_FLOOR = 30


def cuisine_match(recipe: Recipe, preferences: UserPreferences) -> int:
    if not preferences.liked_cuisines:
        return NEUTRAL_SCORE
    return 90 if recipe.cuisine in preferences.liked_cuisines else 20


def ingredient_penalty(recipe: Recipe, preferences: UserPreferences) -> int:
    if not preferences.banned_ingredients:
        return 0
    banned = find_banned_ingredient(recipe.ingredients, sorted(preferences.banned_ingredients))
    return BANNED_INGREDIENT_PENALTY if banned is not None else 0


def cook_time_match(recipe: Recipe, preferences: UserPreferences) -> int:
    if not preferences.cook_time_preference:
        return NEUTRAL_SCORE
    diff = abs(recipe.cook_time - preferences.cook_time_preference)
    for limit, score in COOK_TIME_TIERS:
        if diff <= limit:
            return score
    return COOK_TIME_FLOOR


def calculate_discriminatory_score(recipe: Recipe,
                                   preferences: Optional[UserPreferences]) -> ScoreResult:
    """
    Score a recipe against stated preferences.

    Args:
        recipe: Candidate recipe
        preferences: User preferences (None -> neutral 50)

    Returns:
        ScoreResult named "discriminatory"
    """
    if preferences is None:
        return ScoreResult(
            scorer_name="discriminatory",
            total=NEUTRAL_SCORE,
            details={"reason": "No preferences"},
        )

    breakdown = {
        "cuisine_match": cuisine_match(recipe, preferences),
        "ingredient_penalty": ingredient_penalty(recipe, preferences),
        "cook_time_match": cook_time_match(recipe, preferences),
        "dietary_match": NEUTRAL_SCORE,
        "spice_match": NEUTRAL_SCORE,
    }

    total = round_score(
        breakdown["cuisine_match"] * 0.30
        + (100 - breakdown["ingredient_penalty"]) * 0.25
        + breakdown["cook_time_match"] * 0.20
        + breakdown["dietary_match"] * 0.15
        + breakdown["spice_match"] * 0.10
    )

    return ScoreResult(
        scorer_name="discriminatory",
        total=clamp_score(total),
        breakdown=breakdown,
        details={"banned_ingredient_found": breakdown["ingredient_penalty"] > 0},
    )


class DiscriminatoryScorer(Scorer):
    """Scores recipes against liked cuisines, banned ingredients and cook time."""

    @property
    def name(self) -> str:
        return "discriminatory"

    def evaluate(self, recipe: Recipe, context: ScoringContext) -> ScoreResult:
        if context.preferences is None:
            return self._neutral_result("No preferences")
        return calculate_discriminatory_score(recipe, context.preferences)
