# recipe_ranker/scorers/enhanced_scorer.py
"""
Enhanced Scorer - cook time and convenience fit for the user's kitchen.

Sub-scores (weights):
- cook_time_match (.60): distance from preferred and available time,
  penalized harder when the recipe overruns the available time
- convenience (.30): skill appropriateness, equipment shortfall, budget
- time_efficiency (.10): how much of the available time the recipe uses
"""
from typing import Optional

from .base_scorer import Scorer, clamp_score, round_score
from recipe_ranker.models.preferences import CookTimeContext, KitchenProfile
from recipe_ranker.models.recipe import Recipe
from recipe_ranker.models.scoring_context import ScoringContext, ScoreResult, NEUTRAL_SCORE


ENHANCED_WEIGHTS = {
    "cook_time_match": 0.60,
    "convenience": 0.30,
    "time_efficiency": 0.10,
}

BASIC_EQUIPMENT = ("oven", "stovetop", "knife", "cutting board")


def cook_time_fit(cook_time: int, context: CookTimeContext, preferred_cook_time: int) -> float:
    """
    Score cook time against preference and availability.

    Example:
        >>> cook_time_fit(30, CookTimeContext(available_time=45), 30)
        100
    """
    score = max(0, 100 - abs(cook_time - preferred_cook_time) * 2)

    diff_from_available = abs(cook_time - context.available_time)
    if cook_time <= context.available_time:
        score = max(score, 100 - diff_from_available)
    else:
        score = min(score, 100 - diff_from_available * 3)

    if context.urgency == "high" and cook_time > 20:
        score -= 20
    elif context.urgency == "low" and cook_time < 15:
        score -= 10

    if context.time_of_day == "morning" and cook_time > 30:
        score -= 15
    if context.day_type == "weekday" and cook_time > 45:
        score -= 10

    return clamp_score(score)


def convenience_score(recipe: Recipe, kitchen: KitchenProfile) -> float:
    """Start at 100 and adjust for skill, equipment, restrictions and budget."""
    score = 100
    ingredient_count = len(recipe.ingredients)

    if kitchen.cooking_skill == "beginner":
        if recipe.cook_time > 45 or ingredient_count > 10:
            score -= 20
        elif recipe.cook_time < 20 and ingredient_count < 6:
            score += 10
    elif kitchen.cooking_skill == "advanced":
        if recipe.cook_time < 15 and ingredient_count < 5:
            score -= 5

    equipment = {e.lower() for e in kitchen.kitchen_equipment}
    missing = [item for item in BASIC_EQUIPMENT if item not in equipment]
    score -= len(missing) * 5

    if kitchen.dietary_restrictions:
        score -= 5

    # Calorie-dense recipes as a cost proxy
    if kitchen.budget == "low" and recipe.calories > 600:
        score -= 5

    return clamp_score(score)


def time_efficiency(cook_time: int, available_time: int) -> float:
    if available_time <= 0:
        return 0
    if cook_time <= available_time:
        return round_score(cook_time / available_time * 100)
    return max(0, 100 - (cook_time - available_time) * 5)


def calculate_enhanced_score(recipe: Recipe,
                             cook_time_context: Optional[CookTimeContext] = None,
                             kitchen: Optional[KitchenProfile] = None) -> ScoreResult:
    """
    Score cook-time and convenience fit.

    Either input may be omitted and falls back to its defaults; with both
    missing the result is a neutral 50.

    Args:
        recipe: Candidate recipe
        cook_time_context: Available time / urgency
        kitchen: Kitchen profile

    Returns:
        ScoreResult named "enhanced"
    """
    if cook_time_context is None and kitchen is None:
        return ScoreResult(
            scorer_name="enhanced",
            total=NEUTRAL_SCORE,
            details={"reason": "No cooking context"},
        )

    cook_time_context = cook_time_context or CookTimeContext()
    kitchen = kitchen or KitchenProfile()

    breakdown = {
        "cook_time_match": round_score(
            cook_time_fit(recipe.cook_time, cook_time_context, kitchen.preferred_cook_time)),
        "convenience": round_score(convenience_score(recipe, kitchen)),
        "time_efficiency": round_score(
            time_efficiency(recipe.cook_time, cook_time_context.available_time)),
    }
    total = round_score(sum(breakdown[k] * w for k, w in ENHANCED_WEIGHTS.items()))

    return ScoreResult(
        scorer_name="enhanced",
        total=clamp_score(total),
        breakdown=breakdown,
        details={
            "available_time": cook_time_context.available_time,
            "preferred_cook_time": kitchen.preferred_cook_time,
            "cooking_skill": kitchen.cooking_skill,
        },
    )


class EnhancedScorer(Scorer):
    """Scores cook-time fit and kitchen convenience."""

    @property
    def name(self) -> str:
        return "enhanced"

    def evaluate(self, recipe: Recipe, context: ScoringContext) -> ScoreResult:
        if context.cook_time_context is None and context.kitchen_profile is None:
            return self._neutral_result("No cooking context")
        return calculate_enhanced_score(recipe, context.cook_time_context, context.kitchen_profile)
