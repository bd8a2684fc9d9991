# recipe_ranker/models/scoring_context.py
"""
Scoring context models for the recipe ranking engine.

Defines the context in which recipe scoring occurs and the result types
scorers return. Every field of ScoringContext is optional; scorers fall
back to neutral scores when the inputs they need are missing.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional

from recipe_ranker.models.behavior import UserBehaviorData
from recipe_ranker.models.preferences import (
    CookTimeContext, KitchenProfile, MacroGoals, PhysicalProfile, UserPreferences,
)
from recipe_ranker.models.recipe import Recipe
from recipe_ranker.models.temporal import TemporalContext, UserTemporalPatterns


NEUTRAL_SCORE = 50


@dataclass(frozen=True)
class ScoringContext:
    """
    Everything a scorer may consult besides the recipe itself.

    Built once per request and shared (read-only) across all candidates.

    Attributes:
        preferences: Taste preferences and restrictions
        macro_goals: Macro targets (already scaled to the meal, if any)
        physical_profile: Fitness goal source
        behavior: Interaction history
        taste_profile: Precomputed behavioral profile (see build_user_taste_profile)
        predictive_patterns: Precomputed engagement patterns (see analyze_historical_patterns)
        temporal_context: Time-derived context
        temporal_patterns: Learned temporal patterns
        cook_time_context: Available time / urgency
        kitchen_profile: Skill / equipment / budget
        now: Reference timestamp for recency and freshness windows
    """
    preferences: Optional[UserPreferences] = None
    macro_goals: Optional[MacroGoals] = None
    physical_profile: Optional[PhysicalProfile] = None
    behavior: Optional[UserBehaviorData] = None
    taste_profile: Any = None
    predictive_patterns: Any = None
    temporal_context: Optional[TemporalContext] = None
    temporal_patterns: Optional[UserTemporalPatterns] = None
    cook_time_context: Optional[CookTimeContext] = None
    kitchen_profile: Optional[KitchenProfile] = None
    now: Optional[datetime] = None

    def reference_time(self) -> datetime:
        """Timestamp used for trailing windows; falls back to the wall clock."""
        return self.now or datetime.now()

    def has_behavior(self) -> bool:
        return self.behavior is not None and not self.behavior.is_empty

    def with_updates(self, **changes) -> 'ScoringContext':
        """Return a copy with some fields replaced."""
        return replace(self, **changes)


@dataclass
class ScoreResult:
    """
    Result from a scorer's evaluation of a recipe.

    Contains:
    - Total score (0 to 100)
    - Named sub-score breakdown (each 0 to 100 unless noted by the scorer)
    - Free-form details for debugging
    """

    scorer_name: str
    total: float
    breakdown: Dict[str, float] = field(default_factory=dict)
    details: Dict[str, Any] = field(default_factory=dict)

    def get_weighted_score(self, weight: float) -> float:
        """
        Calculate weighted score.

        Args:
            weight: Blend weight for this scorer

        Returns:
            total * weight
        """
        return self.total * weight

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"{self.scorer_name}: {self.total:.0f}"


@dataclass
class RankedRecipe:
    """
    One entry of a ranked candidate list.

    Combines the recipe with its final score and the individual scorer
    results that produced it.
    """

    recipe: Recipe
    total_score: float
    index: int  # Position in the caller's candidate list (tie-break key)
    individual_scores: List[ScoreResult] = field(default_factory=list)

    @property
    def breakdown(self) -> Dict[str, float]:
        """Scorer name -> total for each contributing scorer."""
        return {r.scorer_name: r.total for r in self.individual_scores}

    def get_score(self, scorer_name: str) -> Optional[ScoreResult]:
        for result in self.individual_scores:
            if result.scorer_name == scorer_name:
                return result
        return None

    def sort_key(self):
        """Score descending, then input order ascending."""
        return (-self.total_score, self.index)

    def __str__(self) -> str:
        """String representation showing final score."""
        return f"Recipe {self.recipe.id} ({self.recipe.title}): {self.total_score:.0f}"
