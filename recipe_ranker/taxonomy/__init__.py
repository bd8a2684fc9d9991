"""
Ingredient taxonomy lookups.

Pure functions over ingredient text: superfood categories, banned
ingredient matching and dietary-restriction keyword heuristics.
"""
from .superfoods import (
    SUPERFOODS,
    detect_superfoods,
    detect_recipe_superfoods,
    superfood_boost,
    get_all_superfood_categories,
)
from .dietary import (
    NON_VEGETARIAN_KEYWORDS,
    NON_VEGAN_KEYWORDS,
    DAIRY_KEYWORDS,
    find_banned_ingredient,
    contains_banned_ingredient,
    is_non_vegetarian,
    is_non_vegan,
    contains_dairy,
    violated_restrictions,
    normalize_restriction,
)

__all__ = [
    'SUPERFOODS',
    'detect_superfoods',
    'detect_recipe_superfoods',
    'superfood_boost',
    'get_all_superfood_categories',
    'NON_VEGETARIAN_KEYWORDS',
    'NON_VEGAN_KEYWORDS',
    'DAIRY_KEYWORDS',
    'find_banned_ingredient',
    'contains_banned_ingredient',
    'is_non_vegetarian',
    'is_non_vegan',
    'contains_dairy',
    'violated_restrictions',
    'normalize_restriction',
]
