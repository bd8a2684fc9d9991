"""
Collaborative filtering: similar users and similar recipes.
"""
from .similarity import (
    RecipeSimilarity,
    UserSimilarity,
    MacroRanges,
    jaccard,
    calculate_macro_similarity,
    calculate_recipe_similarity,
    calculate_user_similarity,
    calculate_macro_ranges,
    interaction_sets,
)
from .engine import CollaborativeFilter, CollaborativeScore, Neighbour

__all__ = [
    'RecipeSimilarity',
    'UserSimilarity',
    'MacroRanges',
    'jaccard',
    'calculate_macro_similarity',
    'calculate_recipe_similarity',
    'calculate_user_similarity',
    'calculate_macro_ranges',
    'interaction_sets',
    'CollaborativeFilter',
    'CollaborativeScore',
    'Neighbour',
]
