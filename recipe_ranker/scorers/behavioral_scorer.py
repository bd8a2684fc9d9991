# recipe_ranker/scorers/behavioral_scorer.py
"""
Behavioral Scorer - evaluates recipes against the user's interaction history.

Sub-scores (weights):
- cuisine (.30): share of positive interactions for the recipe's cuisine
- cook_time (.20): closeness to the average cook time of positive interactions
- macro (.30): closeness to the average macros of liked recipes
- ingredient (.15): per-ingredient like/dislike ratio
- recency (.05): how active the user has been in the trailing 7 days

The history is condensed once per request into a UserTasteProfile so that
scoring a large candidate set does not rescan every interaction per recipe.
"""
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Any, List, Optional

from .base_scorer import Scorer, round_score
from recipe_ranker.models.behavior import UserBehaviorData
from recipe_ranker.models.recipe import MACRO_KEYS, Recipe
from recipe_ranker.models.scoring_context import ScoringContext, ScoreResult, NEUTRAL_SCORE


BEHAVIORAL_WEIGHTS = {
    "cuisine": 0.30,
    "cook_time": 0.20,
    "macro": 0.30,
    "ingredient": 0.15,
    "recency": 0.05,
}

RECENCY_WINDOW = timedelta(days=7)


@dataclass(frozen=True)
class UserTasteProfile:
    """
    Pre-computed summary of a user's interaction history.

    Build once with build_user_taste_profile() before the candidate loop.
    """
    positive_cuisine_counts: Dict[str, int] = field(default_factory=dict)
    negative_cuisine_counts: Dict[str, int] = field(default_factory=dict)
    avg_positive_cook_time: float = 0.0
    avg_negative_cook_time: float = 0.0
    avg_liked_macros: Optional[Dict[str, float]] = None
    liked_ingredient_counts: Dict[str, int] = field(default_factory=dict)
    disliked_ingredient_counts: Dict[str, int] = field(default_factory=dict)
    recency_bonus: int = NEUTRAL_SCORE
    has_data: bool = False


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _recency_bonus(recent_activity: int) -> int:
    if recent_activity >= 5:
        return 100
    if recent_activity >= 3:
        return 80
    if recent_activity >= 1:
        return 60
    return 50


def build_user_taste_profile(behavior: Optional[UserBehaviorData],
                             now: Optional[datetime] = None) -> UserTasteProfile:
    """
    Condense interaction history into a taste profile.

    Args:
        behavior: User interaction history (None or empty -> no-data profile)
        now: Reference time for the recency window (defaults to wall clock)

    Returns:
        UserTasteProfile
    """
    if behavior is None or behavior.is_empty:
        return UserTasteProfile()

    now = now or datetime.now()
    positive = behavior.positive
    liked = behavior.liked
    disliked = behavior.disliked

    avg_liked_macros = None
    if liked:
        avg_liked_macros = {
            key: _mean([getattr(r, key) for r in liked]) for key in MACRO_KEYS
        }

    liked_ingredients = Counter(text.lower() for r in liked for text in r.ingredients)
    disliked_ingredients = Counter(text.lower() for r in disliked for text in r.ingredients)

    recent_activity = sum(1 for r in positive if now - r.timestamp < RECENCY_WINDOW)

    return UserTasteProfile(
        positive_cuisine_counts=dict(Counter(r.cuisine for r in positive)),
        negative_cuisine_counts=dict(Counter(r.cuisine for r in disliked)),
        avg_positive_cook_time=_mean([r.cook_time for r in positive]),
        avg_negative_cook_time=_mean([r.cook_time for r in disliked]),
        avg_liked_macros=avg_liked_macros,
        liked_ingredient_counts=dict(liked_ingredients),
        disliked_ingredient_counts=dict(disliked_ingredients),
        recency_bonus=_recency_bonus(recent_activity),
        has_data=True,
    )


def calculate_behavioral_score_from_profile(recipe: Recipe, profile: UserTasteProfile) -> ScoreResult:
    """
    Fast per-recipe behavioral scoring.

    Args:
        recipe: Candidate recipe
        profile: Pre-computed taste profile

    Returns:
        ScoreResult named "behavioral"
    """
    if not profile.has_data:
        return ScoreResult(
            scorer_name="behavioral",
            total=NEUTRAL_SCORE,
            breakdown={name: NEUTRAL_SCORE for name in BEHAVIORAL_WEIGHTS},
            details={"reason": "No interaction history"},
        )

    # Cuisine: share of positive interactions
    cuisine = NEUTRAL_SCORE
    pos = profile.positive_cuisine_counts.get(recipe.cuisine, 0)
    neg = profile.negative_cuisine_counts.get(recipe.cuisine, 0)
    if pos + neg > 0:
        cuisine = round_score(pos / (pos + neg) * 100)

    # Cook time: relative distance from the positive average
    cook_time = NEUTRAL_SCORE
    avg_time = profile.avg_positive_cook_time
    if avg_time > 0:
        diff = abs(recipe.cook_time - avg_time)
        largest = max(avg_time, recipe.cook_time)
        cook_time = max(0, round_score(100 - diff / largest * 100))

    # Macros: mean relative deviation from liked averages
    macro = NEUTRAL_SCORE
    if profile.avg_liked_macros:
        deviations = []
        for key in MACRO_KEYS:
            avg = profile.avg_liked_macros[key]
            deviations.append(abs(getattr(recipe, key) - avg) / avg if avg > 0 else 0.0)
        macro = max(0, round_score(100 - _mean(deviations) * 100))

    # Ingredients: liked/(liked+disliked) per ingredient, unknown = 50
    ingredient = NEUTRAL_SCORE
    if recipe.ingredients:
        total = 0.0
        for text in recipe.ingredients:
            key = text.lower()
            liked_count = profile.liked_ingredient_counts.get(key, 0)
            disliked_count = profile.disliked_ingredient_counts.get(key, 0)
            seen = liked_count + disliked_count
            total += liked_count / seen * 100 if seen else NEUTRAL_SCORE
        ingredient = round_score(total / len(recipe.ingredients))

    breakdown = {
        "cuisine": cuisine,
        "cook_time": cook_time,
        "macro": macro,
        "ingredient": ingredient,
        "recency": profile.recency_bonus,
    }
    total = round_score(sum(breakdown[k] * w for k, w in BEHAVIORAL_WEIGHTS.items()))

    return ScoreResult(
        scorer_name="behavioral",
        total=max(0, min(100, total)),
        breakdown=breakdown,
        details={
            "cuisine_positive": pos,
            "cuisine_negative": neg,
            "avg_positive_cook_time": avg_time,
        },
    )


def calculate_behavioral_score(recipe: Recipe, behavior: Optional[UserBehaviorData],
                               now: Optional[datetime] = None) -> ScoreResult:
    """
    Score one recipe directly from interaction history.

    Convenience wrapper; prefer building the profile once for many recipes.
    """
    return calculate_behavioral_score_from_profile(recipe, build_user_taste_profile(behavior, now))


def analyze_user_behavior_patterns(behavior: UserBehaviorData) -> Dict[str, Any]:
    """
    Summarize what a user tends to engage with.

    Args:
        behavior: Interaction history

    Returns:
        Dict with:
        - preferred_cuisines: Top 3 cuisines by positive interactions
        - preferred_cook_time: Average cook time (30 with no data)
        - preferred_macros: Average macros (500/25/50/20 with no data)
        - preferred_ingredients: Top 10 lowercased ingredient texts
        - activity_level: "high" (>=20), "medium" (>=10) or "low"
    """
    positive = behavior.positive
    default_macros = {"calories": 500.0, "protein": 25.0, "carbs": 50.0, "fat": 20.0}

    cuisine_counts = Counter(r.cuisine for r in positive)
    ingredient_counts = Counter(text.lower() for r in positive for text in r.ingredients)

    if positive:
        avg_cook_time = _mean([r.cook_time for r in positive])
        macros = {key: _mean([getattr(r, key) for r in positive]) for key in MACRO_KEYS}
    else:
        avg_cook_time = 30.0
        macros = default_macros

    total = len(positive)
    if total >= 20:
        activity_level = "high"
    elif total >= 10:
        activity_level = "medium"
    else:
        activity_level = "low"

    return {
        "preferred_cuisines": [c for c, _ in cuisine_counts.most_common(3)],
        "preferred_cook_time": round_score(avg_cook_time),
        "preferred_macros": macros,
        "preferred_ingredients": [i for i, _ in ingredient_counts.most_common(10)],
        "activity_level": activity_level,
    }


class BehavioralScorer(Scorer):
    """
    Scores recipes by similarity to the user's past interactions.

    Uses context.taste_profile when the caller precomputed one, otherwise
    builds a profile from context.behavior.
    """

    @property
    def name(self) -> str:
        return "behavioral"

    def evaluate(self, recipe: Recipe, context: ScoringContext) -> ScoreResult:
        profile = context.taste_profile
        if not isinstance(profile, UserTasteProfile):
            if not context.has_behavior():
                return self._neutral_result("No interaction history")
            profile = build_user_taste_profile(context.behavior, context.reference_time())
        return calculate_behavioral_score_from_profile(recipe, profile)
