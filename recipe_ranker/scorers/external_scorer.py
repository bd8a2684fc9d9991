# recipe_ranker/scorers/external_scorer.py
"""
External Scorer - evaluates recipes using third-party enrichment data.

Recipes enriched from an external source carry quality, popularity and
health scores (0-100). The total is

    quality * .40 + popularity * .30 + health * .25 + freshness_bonus

where the freshness bonus (0-5 points) rewards recently refreshed data.
The bonus is additive and not normalized; the result is clamped.
"""
from datetime import datetime
from typing import Optional

from .base_scorer import Scorer, clamp_score, round_score
from recipe_ranker.models.recipe import Recipe
from recipe_ranker.models.scoring_context import ScoringContext, ScoreResult, NEUTRAL_SCORE
from recipe_ranker.utils.time_utils import days_since


EXTERNAL_WEIGHTS = {
    "quality": 0.40,
    "popularity": 0.30,
    "health": 0.25,
}

# (max days since enrichment, bonus points)
FRESHNESS_BONUS_TIERS = ((7, 5), (30, 3), (90, 1))

DEFAULT_MAX_ENRICHMENT_AGE_DAYS = 90


def freshness_bonus(last_enriched: Optional[datetime], now: datetime) -> int:
    days = days_since(last_enriched, now)
    if days is None:
        return 0
    for limit, bonus in FRESHNESS_BONUS_TIERS:
        if days <= limit:
            return bonus
    return 0


def calculate_external_score(recipe: Recipe, now: Optional[datetime] = None) -> ScoreResult:
    """
    Score a recipe from its enrichment fields.

    Args:
        recipe: Candidate recipe
        now: Reference time for freshness (defaults to wall clock)

    Returns:
        ScoreResult named "external"; details["has_external_data"] tells
        whether enrichment was present
    """
    if not recipe.has_external_data:
        return ScoreResult(
            scorer_name="external",
            total=NEUTRAL_SCORE,
            breakdown={"quality": NEUTRAL_SCORE, "popularity": NEUTRAL_SCORE,
                       "health": NEUTRAL_SCORE, "freshness_bonus": 0},
            details={"has_external_data": False},
        )

    now = now or datetime.now()
    breakdown = {
        "quality": clamp_score(recipe.quality_score if recipe.quality_score is not None else NEUTRAL_SCORE),
        "popularity": clamp_score(
            recipe.popularity_score if recipe.popularity_score is not None else NEUTRAL_SCORE),
        "health": clamp_score(recipe.health_score if recipe.health_score is not None else NEUTRAL_SCORE),
        "freshness_bonus": freshness_bonus(recipe.last_enriched, now),
    }
    total = round_score(
        sum(breakdown[k] * w for k, w in EXTERNAL_WEIGHTS.items()) + breakdown["freshness_bonus"]
    )

    return ScoreResult(
        scorer_name="external",
        total=clamp_score(total),
        breakdown=breakdown,
        details={
            "has_external_data": True,
            "external_source": recipe.external_source,
            "quality_tier": get_quality_tier(recipe.quality_score),
            "popularity_tier": get_popularity_tier(recipe.aggregate_likes),
            "freshness": get_data_freshness(recipe.last_enriched, now),
        },
    )


def calculate_hybrid_score(internal_score: float, external_score: float,
                           has_external_data: bool) -> float:
    """
    Blend an internal score with the external score (60/40).

    Without enrichment the internal score is returned unchanged.
    """
    if not has_external_data:
        return internal_score
    return clamp_score(round_score(internal_score * 0.6 + external_score * 0.4))


def get_quality_tier(quality_score: Optional[float]) -> str:
    """premium (>=85), high (>=70), medium (>=50), low, or unknown."""
    if quality_score is None:
        return "unknown"
    if quality_score >= 85:
        return "premium"
    if quality_score >= 70:
        return "high"
    if quality_score >= 50:
        return "medium"
    return "low"


def get_popularity_tier(aggregate_likes: Optional[int]) -> str:
    """viral (>=1000), popular (>=500), trending (>=200), moderate (>=50), niche, or unknown."""
    if aggregate_likes is None:
        return "unknown"
    if aggregate_likes >= 1000:
        return "viral"
    if aggregate_likes >= 500:
        return "popular"
    if aggregate_likes >= 200:
        return "trending"
    if aggregate_likes >= 50:
        return "moderate"
    return "niche"


def get_data_freshness(last_enriched: Optional[datetime], now: Optional[datetime] = None) -> str:
    """fresh (<=7 days), good (<=30), stale (<=90), very_stale, or never."""
    days = days_since(last_enriched, now or datetime.now())
    if days is None:
        return "never"
    if days <= 7:
        return "fresh"
    if days <= 30:
        return "good"
    if days <= 90:
        return "stale"
    return "very_stale"


def needs_re_enrichment(last_enriched: Optional[datetime],
                        max_age_days: int = DEFAULT_MAX_ENRICHMENT_AGE_DAYS,
                        now: Optional[datetime] = None) -> bool:
    """True when enrichment is missing or at least max_age_days old."""
    days = days_since(last_enriched, now or datetime.now())
    if days is None:
        return True
    return days >= max_age_days


class ExternalScorer(Scorer):
    """Scores recipes by their external quality, popularity and health data."""

    @property
    def name(self) -> str:
        return "external"

    def evaluate(self, recipe: Recipe, context: ScoringContext) -> ScoreResult:
        return calculate_external_score(recipe, context.reference_time())
