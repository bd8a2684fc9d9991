# recipe_ranker/scorers/composite_scorer.py
"""
Composite Scorer - the base ranking score for a recipe.

Blends macro fit (70%) with taste fit (30%), then optionally folds in
the behavioral (15%) and temporal (10%) signal scores:

    base  = 0.7 * macro_score + 0.3 * taste_score
    total = 0.75 * base + 0.15 * behavioral + 0.10 * temporal

When only one signal is supplied, the missing signal's weight goes back
to the base. Without preferences or macro goals every field is a
neutral 50.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional

from .base_scorer import Scorer, clamp_score, round_score
from .behavioral_scorer import BehavioralScorer
from .temporal_scorer import calculate_temporal_score
from recipe_ranker.models.preferences import MacroGoals, UserPreferences
from recipe_ranker.models.recipe import MACRO_KEYS, Recipe
from recipe_ranker.models.scoring_context import ScoringContext, ScoreResult, NEUTRAL_SCORE
from recipe_ranker.taxonomy.dietary import contains_banned_ingredient, violated_restrictions
from recipe_ranker.taxonomy.superfoods import superfood_boost


MACRO_WEIGHT = 0.7
TASTE_WEIGHT = 0.3

# Inside taste_score
TASTE_MATCH_WEIGHT = 0.3
COOK_TIME_WEIGHT = 0.1
INGREDIENT_WEIGHT = 0.1
# Any matched preferred superfood (boost >= 0.2) saturates taste_score at 100
SUPERFOOD_WEIGHT = 15.0

BEHAVIORAL_WEIGHT = 0.15
TEMPORAL_WEIGHT = 0.10

SPICE_BONUS = {"mild": 0.1, "medium": 0.2, "spicy": 0.3}


@dataclass
class CompositeScore:
    """
    Composite score for one recipe. Every field is 0-100.

    Attributes:
        total: Final blended score
        macro_score: Macro fit
        taste_score: Taste, cook time, ingredient and superfood fit
        match_percentage: Same as total (display value)
        breakdown: Individual match factors x100
    """
    total: int
    macro_score: int
    taste_score: int
    match_percentage: int
    breakdown: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def neutral(cls) -> 'CompositeScore':
        return cls(
            total=NEUTRAL_SCORE,
            macro_score=NEUTRAL_SCORE,
            taste_score=NEUTRAL_SCORE,
            match_percentage=NEUTRAL_SCORE,
        )


# =============================================================================
# Match factors (each 0.0-1.0)
# =============================================================================

def macro_match(recipe: Recipe, goals: MacroGoals) -> float:
    """
    1 - mean relative deviation over calories, protein, carbs and fat.

    A target of 0 (or below) counts as full deviation for that macro.
    """
    deviations = []
    for key in MACRO_KEYS:
        target = getattr(goals, key)
        if target <= 0:
            deviations.append(1.0)
        else:
            deviations.append(abs(getattr(recipe, key) - target) / target)
    return max(0.0, 1 - sum(deviations) / len(deviations))


def taste_match(recipe: Recipe, preferences: UserPreferences) -> float:
    score = 0.5
    if recipe.cuisine in preferences.liked_cuisines:
        score += 0.3
    if preferences.spice_level:
        score += SPICE_BONUS.get(preferences.spice_level, 0.0)
    return max(0.0, min(1.0, score))


def cook_time_match(recipe: Recipe, preferences: UserPreferences) -> float:
    preferred = preferences.cook_time_preference
    if preferred is None or recipe.cook_time <= preferred:
        return 1.0
    if preferred <= 0:
        return 0.0
    excess = recipe.cook_time - preferred
    return max(0.0, 1 - 0.5 * excess / preferred)


def ingredient_match(recipe: Recipe, preferences: UserPreferences) -> float:
    """Hard veto: 0 for a banned ingredient or a violated dietary restriction."""
    if contains_banned_ingredient(recipe.ingredients, preferences.banned_ingredients):
        return 0.0
    if violated_restrictions(recipe.ingredients, preferences.dietary_restrictions):
        return 0.0
    return 1.0


# =============================================================================
# Scoring
# =============================================================================

def blend_signals(base: float, behavioral_score: Optional[float] = None,
                  temporal_score: Optional[float] = None) -> int:
    """Fold optional signal scores into the base score."""
    if behavioral_score is not None and temporal_score is not None:
        base_weight = 1 - BEHAVIORAL_WEIGHT - TEMPORAL_WEIGHT
        return round_score(base * base_weight
                           + behavioral_score * BEHAVIORAL_WEIGHT
                           + temporal_score * TEMPORAL_WEIGHT)
    if behavioral_score is not None:
        return round_score(base * (1 - BEHAVIORAL_WEIGHT) + behavioral_score * BEHAVIORAL_WEIGHT)
    if temporal_score is not None:
        return round_score(base * (1 - TEMPORAL_WEIGHT) + temporal_score * TEMPORAL_WEIGHT)
    return round_score(base)


def calculate_recipe_score(recipe: Recipe,
                           preferences: Optional[UserPreferences] = None,
                           macro_goals: Optional[MacroGoals] = None,
                           behavioral_score: Optional[float] = None,
                           temporal_score: Optional[float] = None) -> CompositeScore:
    """
    Composite score for one recipe.

    Args:
        recipe: Candidate recipe
        preferences: Taste preferences (None -> neutral 50s)
        macro_goals: Macro targets for the meal (None -> neutral 50s)
        behavioral_score: Optional behavioral total (0-100)
        temporal_score: Optional temporal total (0-100)

    Returns:
        CompositeScore

    Example:
        >>> calculate_recipe_score(recipe).total
        50
    """
    if preferences is None or macro_goals is None:
        return CompositeScore.neutral()

    macro = macro_match(recipe, macro_goals)
    taste = taste_match(recipe, preferences)
    cook = cook_time_match(recipe, preferences)
    ingredient = ingredient_match(recipe, preferences)
    boost = superfood_boost(recipe.ingredients, preferences.preferred_superfoods)

    macro_score = macro * 100
    taste_score = min(100.0, 100 * (TASTE_MATCH_WEIGHT * taste
                                    + COOK_TIME_WEIGHT * cook
                                    + INGREDIENT_WEIGHT * ingredient)
                      + SUPERFOOD_WEIGHT * 100 * boost)

    base = MACRO_WEIGHT * macro_score + TASTE_WEIGHT * taste_score
    total = int(clamp_score(blend_signals(base, behavioral_score, temporal_score)))

    return CompositeScore(
        total=total,
        macro_score=round_score(macro_score),
        taste_score=round_score(taste_score),
        match_percentage=total,
        breakdown={
            "macro_match": round_score(macro * 100),
            "taste_match": round_score(taste * 100),
            "cook_time_match": round_score(cook * 100),
            "ingredient_match": round_score(ingredient * 100),
            "superfood_boost": round_score(boost * 100),
        },
    )


class CompositeScorer(Scorer):
    """
    Scores recipes by macro and taste fit, folding in behavioral and
    temporal signals when the context can supply them.
    """

    def __init__(self, config=None):
        super().__init__(config)
        self._behavioral = BehavioralScorer()

    @property
    def name(self) -> str:
        return "composite"

    def evaluate(self, recipe: Recipe, context: ScoringContext) -> ScoreResult:
        behavioral = None
        if context.taste_profile is not None or context.has_behavior():
            behavioral = self._behavioral.evaluate(recipe, context).total

        temporal = None
        if context.temporal_context is not None:
            temporal = calculate_temporal_score(
                recipe, context.temporal_context, context.temporal_patterns).total

        score = calculate_recipe_score(
            recipe, context.preferences, context.macro_goals, behavioral, temporal)

        breakdown = {"macro_score": score.macro_score, "taste_score": score.taste_score}
        breakdown.update(score.breakdown)
        return self._result(
            score.total,
            breakdown,
            details={"behavioral_score": behavioral, "temporal_score": temporal},
        )
