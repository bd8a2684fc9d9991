# recipe_ranker/collaborative/similarity.py
"""
Similarity measures for collaborative filtering.

Recipe similarity (0-1, symmetric):
    cuisine .20 + ingredient Jaccard .40 + macro cosine .25 + cook time .15

User similarity (0-1):
    liked-cuisine Jaccard .30 + dietary match .20 +
    interaction Jaccard .40 + both have macro goals .10
"""
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, FrozenSet, Iterable, List, Mapping, Tuple

import numpy as np

from recipe_ranker.data.interaction_store import StoredUserProfile
from recipe_ranker.models.behavior import InteractionRecord, InteractionType, UserBehaviorData
from recipe_ranker.models.recipe import Recipe


RECIPE_SIMILARITY_WEIGHTS = {
    "cuisine": 0.20,
    "ingredients": 0.40,
    "macros": 0.25,
    "cook_time": 0.15,
}

USER_SIMILARITY_WEIGHTS = {
    "cuisines": 0.30,
    "dietary": 0.20,
    "interactions": 0.40,
    "macro_goals": 0.10,
}

# Cook time differences are measured against at least an hour
MIN_COOK_TIME_SPAN = 60

InteractionSets = Mapping[InteractionType, AbstractSet[str]]


@dataclass(frozen=True)
class RecipeSimilarity:
    """Similarity between two recipes with the attributes they share."""
    recipe_id: str
    similarity: float
    cuisine_match: bool = False
    shared_ingredients: Tuple[str, ...] = ()
    macro_similarity: float = 0.0
    cook_time_similarity: float = 0.0


@dataclass(frozen=True)
class UserSimilarity:
    """Similarity between the requesting user and one other user."""
    user_id: str
    similarity: float
    common_interactions: int = 0
    shared_cuisines: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ValueSpan:
    min: float = 0.0
    max: float = 0.0


@dataclass(frozen=True)
class MacroRanges:
    """Observed ranges over a user's positive interactions (zeros if none)."""
    calories: ValueSpan = field(default_factory=ValueSpan)
    protein: ValueSpan = field(default_factory=ValueSpan)
    cook_time: ValueSpan = field(default_factory=ValueSpan)

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            name: {"min": span.min, "max": span.max}
            for name, span in (("calories", self.calories),
                               ("protein", self.protein),
                               ("cook_time", self.cook_time))
        }


# =============================================================================
# Building blocks
# =============================================================================

def jaccard(a: AbstractSet, b: AbstractSet) -> float:
    """|a & b| / |a | b|, or 0.0 when both are empty."""
    union = len(a | b)
    if union == 0:
        return 0.0
    return len(a & b) / union


def _ingredient_set(ingredients: Iterable[str]) -> FrozenSet[str]:
    return frozenset(text.lower().strip() for text in ingredients if text and text.strip())


def _macro_vector(recipe: Recipe) -> np.ndarray:
    return np.array([recipe.calories, recipe.protein, recipe.carbs, recipe.fat], dtype=float)


def calculate_macro_similarity(recipe_a: Recipe, recipe_b: Recipe) -> float:
    """
    Cosine similarity of the two macro vectors, each normalized to sum 1.

    Compares macro ratios, not magnitudes: a half portion of the same
    dish scores 1.0. Returns 0.0 if either vector sums to zero.
    """
    a = _macro_vector(recipe_a)
    b = _macro_vector(recipe_b)
    total_a = a.sum()
    total_b = b.sum()
    if total_a <= 0 or total_b <= 0:
        return 0.0

    a = a / total_a
    b = b / total_b
    norm = np.linalg.norm(a) * np.linalg.norm(b)
    if norm == 0:
        return 0.0
    return float(np.clip(np.dot(a, b) / norm, 0.0, 1.0))


def cook_time_similarity(cook_time_a: float, cook_time_b: float) -> float:
    span = max(cook_time_a, cook_time_b, MIN_COOK_TIME_SPAN)
    return max(0.0, 1 - abs(cook_time_a - cook_time_b) / span)


# =============================================================================
# Recipe similarity
# =============================================================================

def calculate_recipe_similarity(recipe_a: Recipe, recipe_b: Recipe) -> RecipeSimilarity:
    """
    Similarity between two recipes.

    Args:
        recipe_a: First recipe
        recipe_b: Second recipe (its id is reported in the result)

    Returns:
        RecipeSimilarity with similarity in [0, 1]
    """
    cuisine = (recipe_a.cuisine or "").lower() == (recipe_b.cuisine or "").lower()

    ingredients_a = _ingredient_set(recipe_a.ingredients)
    ingredients_b = _ingredient_set(recipe_b.ingredients)
    ingredient_similarity = jaccard(ingredients_a, ingredients_b)

    macros = calculate_macro_similarity(recipe_a, recipe_b)
    cook = cook_time_similarity(recipe_a.cook_time, recipe_b.cook_time)

    w = RECIPE_SIMILARITY_WEIGHTS
    similarity = (w["cuisine"] * (1.0 if cuisine else 0.0)
                  + w["ingredients"] * ingredient_similarity
                  + w["macros"] * macros
                  + w["cook_time"] * cook)

    return RecipeSimilarity(
        recipe_id=recipe_b.id,
        similarity=min(1.0, similarity),
        cuisine_match=cuisine,
        shared_ingredients=tuple(sorted(ingredients_a & ingredients_b)),
        macro_similarity=macros,
        cook_time_similarity=cook,
    )


# =============================================================================
# User similarity
# =============================================================================

def interaction_sets(behavior: UserBehaviorData) -> Dict[InteractionType, FrozenSet[str]]:
    """Recipe ids per positive interaction kind."""
    return {
        kind: frozenset(behavior.recipe_ids(kind))
        for kind in (InteractionType.LIKED, InteractionType.SAVED, InteractionType.CONSUMED)
    }


def _all_ids(sets: InteractionSets) -> FrozenSet[str]:
    ids = set()
    for values in sets.values():
        ids |= set(values)
    return frozenset(ids)


def calculate_user_similarity(current: StoredUserProfile, current_sets: InteractionSets,
                              other: StoredUserProfile, other_sets: InteractionSets) -> UserSimilarity:
    """
    Similarity between the requesting user and another user.

    Args:
        current: Requesting user's profile
        current_sets: Requesting user's recipe ids per positive kind
        other: Other user's profile
        other_sets: Other user's recipe ids per positive kind

    Returns:
        UserSimilarity; common_interactions counts shared ids per kind
    """
    current_cuisines = {c.lower() for c in current.liked_cuisines}
    other_cuisines = {c.lower() for c in other.liked_cuisines}
    cuisine_similarity = jaccard(current_cuisines, other_cuisines)

    dietary_match = ({d.lower() for d in current.dietary_restrictions}
                     == {d.lower() for d in other.dietary_restrictions})

    interaction_similarity = jaccard(_all_ids(current_sets), _all_ids(other_sets))
    common = sum(
        len(set(current_sets.get(kind, ())) & set(other_sets.get(kind, ())))
        for kind in (InteractionType.LIKED, InteractionType.SAVED, InteractionType.CONSUMED)
    )

    both_have_goals = current.has_macro_goals and other.has_macro_goals

    w = USER_SIMILARITY_WEIGHTS
    similarity = (w["cuisines"] * cuisine_similarity
                  + w["dietary"] * (1.0 if dietary_match else 0.0)
                  + w["interactions"] * interaction_similarity
                  + w["macro_goals"] * (1.0 if both_have_goals else 0.0))

    return UserSimilarity(
        user_id=other.user_id,
        similarity=min(1.0, similarity),
        common_interactions=common,
        shared_cuisines=tuple(sorted(current_cuisines & other_cuisines)),
    )


def calculate_macro_ranges(behavior: UserBehaviorData) -> MacroRanges:
    """Calorie, protein and cook time ranges over liked, saved and consumed records."""
    records: List[InteractionRecord] = behavior.positive
    if not records:
        return MacroRanges()

    def span(values: List[float]) -> ValueSpan:
        return ValueSpan(min=min(values), max=max(values))

    return MacroRanges(
        calories=span([r.calories for r in records]),
        protein=span([r.protein for r in records]),
        cook_time=span([r.cook_time for r in records]),
    )
