# recipe_ranker/scorers/predictive_scorer.py
"""
Predictive Scorer - predicts engagement from historical success patterns.

The total is the sum of three capped parts:
- pattern_match (0-40): cuisine engagement .35 + macro range .30 +
  cook time range .20 + temporal .15
- trend (0-30): fit with the last 30 days (top cuisines, macro focus,
  cook time trend)
- success_probability (0-30): engagement rate and range alignment

Unlike the other scorers the breakdown parts are on their own caps, not
0-100. With no interaction history the total is a neutral 50.
"""
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Any, List, Optional, Sequence

from .base_scorer import Scorer, clamp_score, round_score
from recipe_ranker.models.behavior import InteractionRecord, UserBehaviorData
from recipe_ranker.models.recipe import MACRO_KEYS, Recipe
from recipe_ranker.models.scoring_context import ScoringContext, ScoreResult, NEUTRAL_SCORE


PATTERN_CAP = 40
TREND_CAP = 30
SUCCESS_CAP = 30

TREND_WINDOW = timedelta(days=30)
MIN_RECENT_FOR_TREND = 3

# Points available per macro, and the range used when min == max
MACRO_RANGE_POINTS = {"calories": 30, "protein": 25, "carbs": 25, "fat": 20}
MACRO_RANGE_FALLBACK = {"calories": 100, "protein": 20, "carbs": 50, "fat": 30}
COOK_TIME_RANGE_FALLBACK = 30

MACRO_FOCUS_NONE = "none"
COOK_TREND_NONE = "none"


@dataclass(frozen=True)
class ValueRange:
    """min / max / avg of one attribute over positive interactions (zeros if none)."""
    min: float = 0.0
    max: float = 0.0
    avg: float = 0.0

    @classmethod
    def of(cls, values: Sequence[float]) -> 'ValueRange':
        if not values:
            return cls()
        return cls(min=min(values), max=max(values), avg=sum(values) / len(values))

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def closeness(self, value: float, fallback_span: float) -> float:
        """1.0 inside the range, otherwise 1 - |value - avg| / span (floored at 0)."""
        if self.contains(value):
            return 1.0
        span = (self.max - self.min) or fallback_span
        return max(0.0, 1 - abs(value - self.avg) / span)


@dataclass(frozen=True)
class HistoricalPatterns:
    """
    Engagement patterns distilled from interaction history.

    Attributes:
        cuisine_engagement: cuisine -> positive / (positive + disliked)
        macro_ranges: macro name -> ValueRange over positive interactions
        cook_time_range: ValueRange of cook time over positive interactions
        recent_cuisines: Top 3 cuisines of the last 30 days
        macro_focus: "high-protein", "low-calorie", "balanced" or "none"
        cook_time_trend: "quick", "moderate", "slow" or "none"
    """
    cuisine_engagement: Dict[str, float] = field(default_factory=dict)
    macro_ranges: Dict[str, ValueRange] = field(default_factory=dict)
    cook_time_range: ValueRange = ValueRange()
    recent_cuisines: List[str] = field(default_factory=list)
    macro_focus: str = MACRO_FOCUS_NONE
    cook_time_trend: str = COOK_TREND_NONE


def _is_balanced(protein: float, carbs: float, fat: float) -> bool:
    """Energy shares within maintenance bands (computed from the macros themselves)."""
    total = protein * 4 + carbs * 4 + fat * 9
    if total == 0:
        return False
    return (0.2 <= protein * 4 / total <= 0.3
            and 0.35 <= carbs * 4 / total <= 0.5
            and 0.2 <= fat * 9 / total <= 0.35)


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def analyze_macro_trend(recent: List[InteractionRecord], all_positive: List[InteractionRecord]) -> str:
    if len(recent) < MIN_RECENT_FOR_TREND:
        return MACRO_FOCUS_NONE

    recent_protein = _mean([r.protein for r in recent])
    recent_calories = _mean([r.calories for r in recent])
    all_protein = _mean([r.protein for r in all_positive])
    all_calories = _mean([r.calories for r in all_positive])

    if recent_protein > all_protein * 1.15 and recent_protein >= 25:
        return "high-protein"
    if recent_calories < all_calories * 0.85 and recent_calories <= 450:
        return "low-calorie"

    balanced = sum(1 for r in recent if _is_balanced(r.protein, r.carbs, r.fat))
    if balanced / len(recent) >= 0.6:
        return "balanced"
    return MACRO_FOCUS_NONE


def analyze_cook_time_trend(recent: List[InteractionRecord], all_positive: List[InteractionRecord]) -> str:
    if len(recent) < MIN_RECENT_FOR_TREND:
        return COOK_TREND_NONE

    recent_avg = _mean([r.cook_time for r in recent])
    all_avg = _mean([r.cook_time for r in all_positive])

    if recent_avg <= 20 and recent_avg < all_avg * 0.9:
        return "quick"
    if recent_avg >= 41 and recent_avg > all_avg * 1.1:
        return "slow"
    if 21 <= recent_avg <= 40:
        return "moderate"
    return COOK_TREND_NONE


def analyze_historical_patterns(behavior: UserBehaviorData,
                                now: Optional[datetime] = None) -> HistoricalPatterns:
    """
    Distill engagement patterns from interaction history.

    Args:
        behavior: User interaction history
        now: Reference time for the 30-day trend window

    Returns:
        HistoricalPatterns
    """
    now = now or datetime.now()
    positive = behavior.positive

    positive_counts = Counter(r.cuisine for r in positive)
    negative_counts = Counter(r.cuisine for r in behavior.disliked)
    cuisine_engagement = {}
    for cuisine in list(positive_counts) + [c for c in negative_counts if c not in positive_counts]:
        pos = positive_counts.get(cuisine, 0)
        cuisine_engagement[cuisine] = pos / (pos + negative_counts.get(cuisine, 0))

    recent = [r for r in positive if r.timestamp >= now - TREND_WINDOW]
    recent_counts = Counter(r.cuisine for r in recent)

    return HistoricalPatterns(
        cuisine_engagement=cuisine_engagement,
        macro_ranges={key: ValueRange.of([getattr(r, key) for r in positive]) for key in MACRO_KEYS},
        cook_time_range=ValueRange.of([r.cook_time for r in positive]),
        recent_cuisines=[c for c, _ in recent_counts.most_common(3)],
        macro_focus=analyze_macro_trend(recent, positive),
        cook_time_trend=analyze_cook_time_trend(recent, positive),
    )


# =============================================================================
# Components
# =============================================================================

def macro_range_match(recipe: Recipe, patterns: HistoricalPatterns) -> int:
    """0-100: full points per macro inside the historical range, partial outside."""
    ranges = patterns.macro_ranges
    if not ranges or ranges["calories"].avg == 0:
        return NEUTRAL_SCORE
    score = sum(
        points * ranges[key].closeness(getattr(recipe, key), MACRO_RANGE_FALLBACK[key])
        for key, points in MACRO_RANGE_POINTS.items()
    )
    return round_score(score)


def cook_time_range_match(recipe: Recipe, patterns: HistoricalPatterns) -> int:
    cook_range = patterns.cook_time_range
    if cook_range.avg == 0:
        return NEUTRAL_SCORE
    return round_score(100 * cook_range.closeness(recipe.cook_time, COOK_TIME_RANGE_FALLBACK))


def pattern_matches(recipe: Recipe, patterns: HistoricalPatterns) -> Dict[str, int]:
    return {
        "cuisine": round_score(patterns.cuisine_engagement.get(recipe.cuisine, 0) * 100),
        "macro_range": macro_range_match(recipe, patterns),
        "cook_time": cook_time_range_match(recipe, patterns),
        # No temporal history is tracked per interaction kind yet
        "temporal": NEUTRAL_SCORE,
    }


def trend_score(recipe: Recipe, patterns: HistoricalPatterns) -> int:
    score = 0
    if recipe.cuisine in patterns.recent_cuisines:
        score += 15

    focus = patterns.macro_focus
    if focus == "high-protein" and recipe.protein >= 25:
        score += 8
    elif focus == "low-calorie" and recipe.calories <= 400:
        score += 8
    elif focus == "balanced" and _is_balanced(recipe.protein, recipe.carbs, recipe.fat):
        score += 8

    trend = patterns.cook_time_trend
    if trend == "quick" and recipe.cook_time <= 20:
        score += 7
    elif trend == "moderate" and 21 <= recipe.cook_time <= 40:
        score += 7
    elif trend == "slow" and recipe.cook_time >= 41:
        score += 7

    return min(TREND_CAP, score)


def success_probability(recipe: Recipe, patterns: HistoricalPatterns) -> int:
    if not patterns.cuisine_engagement:
        return NEUTRAL_SCORE

    ranges = patterns.macro_ranges
    if ranges["calories"].avg == 0:
        macro_alignment = 0.5
    else:
        macro_alignment = _mean([
            ranges["calories"].closeness(recipe.calories, MACRO_RANGE_FALLBACK["calories"]),
            ranges["protein"].closeness(recipe.protein, MACRO_RANGE_FALLBACK["protein"]),
        ])

    cook_range = patterns.cook_time_range
    if cook_range.avg == 0:
        cook_alignment = 0.5
    else:
        cook_alignment = cook_range.closeness(recipe.cook_time, COOK_TIME_RANGE_FALLBACK)

    engagement = patterns.cuisine_engagement.get(recipe.cuisine, 0)
    return round_score(engagement * 15 + macro_alignment * 10 + cook_alignment * 5)


def calculate_predictive_score(recipe: Recipe, behavior: Optional[UserBehaviorData],
                               now: Optional[datetime] = None,
                               patterns: Optional[HistoricalPatterns] = None) -> ScoreResult:
    """
    Predict engagement with a recipe from history.

    Args:
        recipe: Candidate recipe
        behavior: Interaction history (None or empty -> neutral 50)
        now: Reference time for the trend window
        patterns: Pre-computed patterns to reuse across candidates

    Returns:
        ScoreResult named "predictive"
    """
    if behavior is None or behavior.is_empty:
        return ScoreResult(
            scorer_name="predictive",
            total=NEUTRAL_SCORE,
            details={"reason": "No interaction history"},
        )

    if patterns is None:
        patterns = analyze_historical_patterns(behavior, now)
    matches = pattern_matches(recipe, patterns)
    pattern = round_score(
        matches["cuisine"] * 0.35
        + matches["macro_range"] * 0.30
        + matches["cook_time"] * 0.20
        + matches["temporal"] * 0.15
    )
    trend = trend_score(recipe, patterns)
    success = success_probability(recipe, patterns)

    breakdown = {
        "pattern_match": min(PATTERN_CAP, pattern),
        "trend": min(TREND_CAP, trend),
        "success_probability": min(SUCCESS_CAP, success),
    }
    total = round_score(sum(breakdown.values()))

    details: Dict[str, Any] = {
        "pattern_matches": matches,
        "trend_strength": breakdown["trend"] / TREND_CAP,
        "engagement_probability": breakdown["success_probability"] / SUCCESS_CAP,
        "macro_focus": patterns.macro_focus,
        "cook_time_trend": patterns.cook_time_trend,
    }

    return ScoreResult(
        scorer_name="predictive",
        total=clamp_score(total),
        breakdown=breakdown,
        details=details,
    )


class PredictiveScorer(Scorer):
    """Scores recipes by how well they fit historical engagement patterns."""

    @property
    def name(self) -> str:
        return "predictive"

    def evaluate(self, recipe: Recipe, context: ScoringContext) -> ScoreResult:
        if not context.has_behavior():
            return self._neutral_result("No interaction history")
        return calculate_predictive_score(recipe, context.behavior, context.reference_time(),
                                          patterns=context.predictive_patterns)
