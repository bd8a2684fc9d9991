"""
Scorer modules for the recipe ranking engine.

Scorers evaluate ONE CANDIDATE RECIPE against one facet of the scoring
context. Each focuses on a specific aspect and returns a 0-100 score
with a named breakdown.
"""
from .base_scorer import Scorer, clamp_score, round_score
from .behavioral_scorer import (
    BehavioralScorer,
    UserTasteProfile,
    build_user_taste_profile,
    calculate_behavioral_score,
    calculate_behavioral_score_from_profile,
    analyze_user_behavior_patterns,
)
from .temporal_scorer import TemporalScorer, calculate_temporal_score, analyze_user_temporal_patterns
from .discriminatory_scorer import DiscriminatoryScorer, calculate_discriminatory_score
from .enhanced_scorer import EnhancedScorer, calculate_enhanced_score
from .health_goal_scorer import HealthGoalScorer, calculate_health_goal_score
from .external_scorer import (
    ExternalScorer,
    calculate_external_score,
    calculate_hybrid_score,
    get_quality_tier,
    get_popularity_tier,
    get_data_freshness,
    needs_re_enrichment,
)
from .predictive_scorer import PredictiveScorer, calculate_predictive_score
from .composite_scorer import CompositeScorer, CompositeScore, calculate_recipe_score

# Scorer registry - maps scorer names to classes, in evaluation order
SCORER_REGISTRY = {
    "discriminatory": DiscriminatoryScorer,
    "composite": CompositeScorer,
    "health_goal": HealthGoalScorer,
    "behavioral": BehavioralScorer,
    "temporal": TemporalScorer,
    "enhanced": EnhancedScorer,
    "external": ExternalScorer,
    "predictive": PredictiveScorer,
}

# Weight signal name -> scorer producing it
SIGNAL_SCORERS = {
    "discriminatory": "discriminatory",
    "base_score": "composite",
    "health_goal": "health_goal",
    "behavioral": "behavioral",
    "temporal": "temporal",
    "enhanced": "enhanced",
    "external": "external",
}


def create_scorer(scorer_name: str, config=None) -> Scorer:
    """
    Factory function to create scorer instances.

    Args:
        scorer_name: Name of scorer (e.g., "health_goal")
        config: Scorer-specific config (optional)

    Returns:
        Scorer instance

    Raises:
        ValueError: If scorer_name not found in registry
    """
    if scorer_name not in SCORER_REGISTRY:
        raise ValueError(
            f"Unknown scorer: {scorer_name}. "
            f"Available: {list(SCORER_REGISTRY.keys())}"
        )

    scorer_class = SCORER_REGISTRY[scorer_name]
    return scorer_class(config)


def get_available_scorers():
    """
    Get list of available scorer names.

    Returns:
        List of scorer names in registry order
    """
    return list(SCORER_REGISTRY.keys())


__all__ = [
    'Scorer',
    'clamp_score',
    'round_score',
    'BehavioralScorer',
    'TemporalScorer',
    'DiscriminatoryScorer',
    'EnhancedScorer',
    'HealthGoalScorer',
    'ExternalScorer',
    'PredictiveScorer',
    'CompositeScorer',
    'CompositeScore',
    'UserTasteProfile',
    'build_user_taste_profile',
    'calculate_behavioral_score',
    'calculate_behavioral_score_from_profile',
    'analyze_user_behavior_patterns',
    'calculate_temporal_score',
    'analyze_user_temporal_patterns',
    'calculate_discriminatory_score',
    'calculate_enhanced_score',
    'calculate_health_goal_score',
    'calculate_external_score',
    'calculate_hybrid_score',
    'get_quality_tier',
    'get_popularity_tier',
    'get_data_freshness',
    'needs_re_enrichment',
    'calculate_predictive_score',
    'calculate_recipe_score',
    'SCORER_REGISTRY',
    'SIGNAL_SCORERS',
    'create_scorer',
    'get_available_scorers',
]
