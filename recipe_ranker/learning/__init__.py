"""
Per-user weight learning from interaction history.
"""
from .weight_adjustment import (
    HistoricalScore,
    calculate_historical_scores,
    calculate_correlations,
    calculate_confidence,
    weights_from_correlations,
    learn_weights,
    blend_weights,
    get_optimal_weights,
    calculate_weighted_score,
)

__all__ = [
    'HistoricalScore',
    'calculate_historical_scores',
    'calculate_correlations',
    'calculate_confidence',
    'weights_from_correlations',
    'learn_weights',
    'blend_weights',
    'get_optimal_weights',
    'calculate_weighted_score',
]
