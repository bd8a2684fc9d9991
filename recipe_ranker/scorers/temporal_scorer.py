# recipe_ranker/scorers/temporal_scorer.py
"""
Temporal Scorer - evaluates recipes against the time they would be eaten.

Sub-scores (weights):
- time_of_day (.30): fit for the current hour band
- day_type (.30): weekday favors quick meals, weekend favors elaborate ones
- season (.20): light meals in spring/summer, hearty meals in fall/winter
- meal_period (.20): fit for the meal being chosen

Each sub-score starts at 50, accrues the heuristic bonuses below and is
clamped to 0-100. Learned user patterns add a flat bonus on top.
"""
from collections import Counter
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .base_scorer import Scorer, clamp_score, round_score
from recipe_ranker.models.behavior import InteractionRecord
from recipe_ranker.models.recipe import Recipe
from recipe_ranker.models.scoring_context import ScoringContext, ScoreResult, NEUTRAL_SCORE
from recipe_ranker.models.temporal import (
    MealPeriod, Season, TemporalContext, UserTemporalPatterns,
)


TEMPORAL_WEIGHTS = {
    "time_of_day": 0.30,
    "day_type": 0.30,
    "season": 0.20,
    "meal_period": 0.20,
}

PREFERRED_HOUR_BONUS = 25
DAY_TYPE_PATTERN_BONUS = 20
SEASON_PATTERN_BONUS = 25

Rule = Tuple[Callable[[Recipe], bool], int]


def cuisine_in(*names: str) -> Callable[[Recipe], bool]:
    """Rule predicate matching any of the given cuisines."""
    return lambda r: r.cuisine in names


# =============================================================================
# Heuristic rule tables: (predicate, bonus)
# =============================================================================

# Keyed by hour band; "late" covers 21:00-05:59. The planner scores its
# breakfast, lunch and dinner slots with the same bands.
TIME_OF_DAY_RULES: Dict[str, List[Rule]] = {
    "breakfast": [
        (lambda r: r.cook_time <= 15, 20),
        (lambda r: r.calories <= 400, 15),
        (cuisine_in("American", "French"), 10),
    ],
    "lunch": [
        (lambda r: r.cook_time <= 30, 15),
        (lambda r: 300 <= r.calories <= 600, 15),
        (cuisine_in("Mediterranean", "Asian"), 10),
    ],
    "dinner": [
        (lambda r: r.cook_time >= 20, 10),
        (lambda r: r.calories >= 400, 15),
        (cuisine_in("Italian", "Indian", "Mexican"), 10),
    ],
    "late": [
        (lambda r: r.cook_time <= 20, 20),
        (lambda r: r.calories <= 300, 15),
        (cuisine_in("Asian", "American"), 10),
    ],
}

DAY_TYPE_RULES: Dict[str, List[Rule]] = {
    "weekday": [
        (lambda r: r.cook_time <= 30, 20),
        (cuisine_in("American", "Asian"), 10),
        (lambda r: r.calories <= 500, 10),
    ],
    "weekend": [
        (lambda r: r.cook_time >= 30, 15),
        (cuisine_in("Italian", "French", "Indian"), 15),
        (lambda r: r.calories >= 400, 10),
    ],
}

SEASON_RULES: Dict[Season, List[Rule]] = {
    Season.SPRING: [
        (cuisine_in("Mediterranean", "French"), 15),
        (lambda r: r.calories <= 500, 10),
        (lambda r: r.cook_time <= 25, 10),
    ],
    Season.SUMMER: [
        (cuisine_in("Asian", "Mediterranean"), 15),
        (lambda r: r.calories <= 400, 15),
        (lambda r: r.cook_time <= 20, 15),
    ],
    Season.FALL: [
        (cuisine_in("American", "Italian"), 15),
        (lambda r: r.calories >= 400, 10),
        (lambda r: r.cook_time >= 25, 10),
    ],
    Season.WINTER: [
        (cuisine_in("Indian", "Italian", "Mexican"), 15),
        (lambda r: r.calories >= 500, 15),
        (lambda r: r.cook_time >= 30, 10),
    ],
}

MEAL_PERIOD_RULES: Dict[MealPeriod, List[Rule]] = {
    MealPeriod.BREAKFAST: [
        (lambda r: r.cook_time <= 15, 25),
        (lambda r: r.calories <= 400, 20),
        (cuisine_in("American", "French"), 15),
    ],
    MealPeriod.LUNCH: [
        (lambda r: r.cook_time <= 30, 20),
        (lambda r: 300 <= r.calories <= 600, 20),
        (cuisine_in("Mediterranean", "Asian"), 15),
    ],
    MealPeriod.DINNER: [
        (lambda r: r.cook_time >= 20, 15),
        (lambda r: r.calories >= 400, 20),
        (cuisine_in("Italian", "Indian", "Mexican"), 15),
    ],
    MealPeriod.SNACK: [
        (lambda r: r.cook_time <= 10, 30),
        (lambda r: r.calories <= 200, 25),
        (cuisine_in("American", "Asian"), 10),
    ],
}


def apply_rules(recipe: Recipe, rules: List[Rule]) -> int:
    """Neutral 50 plus every bonus whose predicate holds."""
    return NEUTRAL_SCORE + sum(bonus for predicate, bonus in rules if predicate(recipe))


def _hour_band(hour: int) -> str:
    if 6 <= hour < 11:
        return "breakfast"
    if 11 <= hour < 15:
        return "lunch"
    if 15 <= hour < 21:
        return "dinner"
    return "late"


# =============================================================================
# Sub-scores
# =============================================================================

def time_of_day_score(recipe: Recipe, context: TemporalContext,
                      patterns: Optional[UserTemporalPatterns] = None) -> float:
    score = apply_rules(recipe, TIME_OF_DAY_RULES[_hour_band(context.hour)])
    # Snacks have no learned hour window
    if patterns is not None and context.meal_period is not MealPeriod.SNACK:
        if context.hour in patterns.hours_for(context.meal_period):
            score += PREFERRED_HOUR_BONUS
    return clamp_score(score)


def day_type_score(recipe: Recipe, context: TemporalContext,
                   patterns: Optional[UserTemporalPatterns] = None) -> float:
    rules = DAY_TYPE_RULES["weekend" if context.is_weekend else "weekday"]
    score = apply_rules(recipe, rules)
    if patterns is not None:
        if recipe.cuisine in patterns.cuisines_for_day(context.is_weekend, context.meal_period):
            score += DAY_TYPE_PATTERN_BONUS
    return clamp_score(score)


def season_score(recipe: Recipe, context: TemporalContext,
                 patterns: Optional[UserTemporalPatterns] = None) -> float:
    score = apply_rules(recipe, SEASON_RULES[context.season])
    if patterns is not None and recipe.cuisine in patterns.cuisines_for_season(context.season):
        score += SEASON_PATTERN_BONUS
    return clamp_score(score)


def meal_period_score(recipe: Recipe, context: TemporalContext) -> float:
    return clamp_score(apply_rules(recipe, MEAL_PERIOD_RULES[context.meal_period]))


def calculate_temporal_score(recipe: Recipe, context: Optional[TemporalContext],
                             patterns: Optional[UserTemporalPatterns] = None) -> ScoreResult:
    """
    Score how well a recipe suits the moment it would be eaten.

    Args:
        recipe: Candidate recipe
        context: Temporal context (None -> neutral 50)
        patterns: Learned temporal patterns (optional)

    Returns:
        ScoreResult named "temporal"
    """
    if context is None:
        return ScoreResult(
            scorer_name="temporal",
            total=NEUTRAL_SCORE,
            details={"reason": "No temporal context"},
        )

    breakdown = {
        "time_of_day": time_of_day_score(recipe, context, patterns),
        "day_type": day_type_score(recipe, context, patterns),
        "season": season_score(recipe, context, patterns),
        "meal_period": meal_period_score(recipe, context),
    }
    total = round_score(sum(breakdown[k] * w for k, w in TEMPORAL_WEIGHTS.items()))

    return ScoreResult(
        scorer_name="temporal",
        total=clamp_score(total),
        breakdown=breakdown,
        details={
            "hour": context.hour,
            "meal_period": context.meal_period.value,
            "season": context.season.value,
            "is_weekend": context.is_weekend,
            "has_patterns": patterns is not None,
        },
    )


# =============================================================================
# Pattern learning
# =============================================================================

def _top_cuisines(records: Iterable[InteractionRecord], limit: int = 3) -> Tuple[str, ...]:
    counts = Counter(r.cuisine or "Unknown" for r in records)
    return tuple(cuisine for cuisine, _ in counts.most_common(limit))


def _js_weekday(record: InteractionRecord) -> int:
    """0 = Sunday ... 6 = Saturday."""
    return (record.timestamp.weekday() + 1) % 7


def analyze_user_temporal_patterns(consumed: Iterable[InteractionRecord]) -> UserTemporalPatterns:
    """
    Learn when and what a user eats from consumption history.

    Args:
        consumed: Consumed interaction records (timestamps are meal times)

    Returns:
        UserTemporalPatterns with preferred hours for breakfast/lunch/dinner,
        top 3 cuisines per day type and meal, and top 3 cuisines per season
    """
    records = list(consumed)
    meal_periods = (MealPeriod.BREAKFAST, MealPeriod.LUNCH, MealPeriod.DINNER)

    def in_period(record: InteractionRecord, period: MealPeriod) -> bool:
        return MealPeriod.from_hour(record.timestamp.hour) is period

    patterns = UserTemporalPatterns()

    for period in meal_periods:
        hours = []
        for record in records:
            if in_period(record, period) and record.timestamp.hour not in hours:
                hours.append(record.timestamp.hour)
        patterns.preferred_hours[period.value] = tuple(hours)

    weekday_records = [r for r in records if 1 <= _js_weekday(r) <= 5]
    weekend_records = [r for r in records if _js_weekday(r) in (0, 6)]

    for period in meal_periods:
        patterns.weekday_preferences[period.value] = _top_cuisines(
            r for r in weekday_records if in_period(r, period))
        patterns.weekend_preferences[period.value] = _top_cuisines(
            r for r in weekend_records if in_period(r, period))

    for season in Season:
        patterns.seasonal_preferences[season.value] = _top_cuisines(
            r for r in records if Season.from_month_index(r.timestamp.month - 1) is season)

    return patterns


class TemporalScorer(Scorer):
    """Scores recipes by time of day, day type, season and meal period."""

    @property
    def name(self) -> str:
        return "temporal"

    def evaluate(self, recipe: Recipe, context: ScoringContext) -> ScoreResult:
        if context.temporal_context is None:
            return self._neutral_result("No temporal context")
        return calculate_temporal_score(recipe, context.temporal_context, context.temporal_patterns)
