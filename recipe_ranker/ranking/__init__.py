"""
Concurrent, deterministic ranking of candidate recipes.
"""
from .ranker import rank_candidates, prepare_context, score_breakdown

__all__ = [
    'rank_candidates',
    'prepare_context',
    'score_breakdown',
]
