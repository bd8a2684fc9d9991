# recipe_ranker/scorers/base_scorer.py
"""
Base scorer class for the recipe ranking engine.

Defines the interface all signal scorers must implement. Scorers evaluate
ONE CANDIDATE RECIPE against one facet of the scoring context (taste,
timing, goals, history...) and never mutate their inputs.
"""
import math
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

from recipe_ranker.models.recipe import Recipe
from recipe_ranker.models.scoring_context import ScoringContext, ScoreResult, NEUTRAL_SCORE


class Scorer(ABC):
    """
    Abstract base class for recipe scorers.

    Each scorer evaluates how well a recipe fits one facet of the user's
    context, returning a score from 0 (poor fit) to 100 (excellent fit)
    plus a named breakdown of sub-scores in the same range.

    Examples of scoring facets:
    - Behavioral: Does this recipe resemble what the user liked before?
    - Temporal: Does it suit the time of day, weekday and season?
    - Health goal: Does it fit the user's fitness goal?
    - External: Do enrichment quality/popularity scores back it up?

    Scorers must degrade to a neutral 50 when the context lacks the
    inputs they need. Missing context is never an error.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize scorer.

        Args:
            config: Scorer-specific configuration (optional)
        """
        self.config = config or {}

    @abstractmethod
    def evaluate(self, recipe: Recipe, context: ScoringContext) -> ScoreResult:
        """
        Score one recipe.

        Args:
            recipe: Candidate recipe
            context: Shared, read-only scoring context

        Returns:
            ScoreResult with total (0-100), breakdown and details
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Scorer name (registry key).

        Example: "behavioral", "health_goal"
        """
        pass

    # =========================================================================
    # Helper methods available to all scorers
    # =========================================================================

    def _clamp_score(self, score: float) -> float:
        """
        Clamp score to valid 0-100 range.

        Args:
            score: Raw score value

        Returns:
            Clamped score
        """
        return clamp_score(score)

    def _neutral_result(self, reason: str) -> ScoreResult:
        """Neutral (50) result used when the scorer's inputs are missing."""
        return ScoreResult(
            scorer_name=self.name,
            total=NEUTRAL_SCORE,
            breakdown={},
            details={"reason": reason},
        )

    def _result(self, total: float, breakdown: Dict[str, float],
                details: Optional[Dict[str, Any]] = None) -> ScoreResult:
        """Build a result with the total and every sub-score clamped."""
        return ScoreResult(
            scorer_name=self.name,
            total=clamp_score(total),
            breakdown={k: clamp_score(v) for k, v in breakdown.items()},
            details=details or {},
        )


def clamp_score(score: float, low: float = 0.0, high: float = 100.0) -> float:
    """Clamp a score into [low, high]."""
    return max(low, min(high, score))


def round_score(value: float) -> int:
    """Round half up (2.5 -> 3), unlike Python's banker's rounding."""
    return int(math.floor(value + 0.5))
