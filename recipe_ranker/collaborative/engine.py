# recipe_ranker/collaborative/engine.py
"""
Collaborative filtering engine.

Two halves, each worth up to 50 points:

- user-based: similar users (similarity above threshold, top N) who
  liked, saved or consumed the candidate vote for it, weighted by
  similarity * (1 + 0.1 * common interactions)
- item-based: the candidate's mean similarity to the requesting user's
  liked and saved recipes (above threshold, top N), times 50

Total = clamp(user_based + item_based, 0, 100).

All data comes from an InteractionStore. Store failures surface as
CollaboratorError and are never retried or swallowed.
"""
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Sequence, Tuple

from recipe_ranker.collaborative.similarity import (
    UserSimilarity,
    calculate_recipe_similarity,
    calculate_user_similarity,
    interaction_sets,
)
from recipe_ranker.data.errors import CollaboratorError
from recipe_ranker.data.interaction_store import InteractionStore, StoredUserProfile
from recipe_ranker.models.behavior import InteractionType, UserBehaviorData
from recipe_ranker.models.engine_config import EngineConfig
from recipe_ranker.models.recipe import Recipe
from recipe_ranker.scorers.base_scorer import clamp_score, round_score
from recipe_ranker.utils.logger import get_logger, ContextLogger


logger = get_logger(__name__)

HALF_SCORE_CAP = 50
COMMON_INTERACTION_BOOST = 0.1


@dataclass
class CollaborativeScore:
    """
    Collaborative score for one candidate.

    Attributes:
        total: user_based + item_based, clamped to 0-100
        user_based: 0-50
        item_based: 0-50
        details: similar_users_count, similar_recipes_count,
            user_similarity_strength, item_similarity_strength
    """
    total: int
    user_based: int
    item_based: int
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def breakdown(self) -> Dict[str, int]:
        return {"user_based": self.user_based, "item_based": self.item_based}


@dataclass(frozen=True)
class Neighbour:
    """A similar user together with the recipe ids they engaged with."""
    similarity: UserSimilarity
    positive_ids: FrozenSet[str]


class CollaborativeFilter:
    """
    Scores candidates from similar users and similar recipes.

    The neighbourhood (similar users) and the requesting user's positive
    recipes are computed once per call to score_candidates and shared
    across candidates.
    """

    def __init__(self, store: InteractionStore, config: Optional[EngineConfig] = None):
        """
        Args:
            store: Read-only interaction store
            config: Thresholds, neighbourhood sizes and pool size
        """
        self.store = store
        self.config = config or EngineConfig()

    # =========================================================================
    # Store access
    # =========================================================================

    def _call(self, operation: str, fn: Callable, *args):
        """Invoke a store method, surfacing any failure as CollaboratorError."""
        try:
            return fn(*args)
        except CollaboratorError:
            raise
        except Exception as e:
            raise CollaboratorError(operation, str(e)) from e

    def _load_user(self, user_id: str) -> Tuple[Optional[StoredUserProfile], Dict[InteractionType, FrozenSet[str]]]:
        profile = self._call("get_user_profile", self.store.get_user_profile, user_id)
        if profile is None:
            return None, {}
        sets = self._call("get_positive_recipe_ids", self.store.get_positive_recipe_ids, user_id)
        return profile, sets

    # =========================================================================
    # Neighbourhoods
    # =========================================================================

    def find_similar_users(self, user_id: str, behavior: UserBehaviorData) -> List[Neighbour]:
        """
        Users most similar to user_id.

        Args:
            user_id: Requesting user
            behavior: Requesting user's history

        Returns:
            Neighbours with similarity above the threshold, most similar
            first (ties keep store order), at most max_similar_users

        Raises:
            CollaboratorError: If the store fails
        """
        current = self._call("get_user_profile", self.store.get_user_profile, user_id)
        if current is None:
            logger.debug("User %s has no stored profile; no similar users", user_id)
            return []

        current_sets = interaction_sets(behavior)
        other_ids = self._call("get_other_user_ids", self.store.get_other_user_ids, user_id)

        workers = min(self.config.worker_count, max(1, len(other_ids)))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            others = list(pool.map(self._load_user, other_ids))

        neighbours = []
        for profile, sets in others:
            if profile is None:
                continue
            similarity = calculate_user_similarity(current, current_sets, profile, sets)
            if similarity.similarity > self.config.user_similarity_threshold:
                ids = frozenset().union(*sets.values()) if sets else frozenset()
                neighbours.append(Neighbour(similarity=similarity, positive_ids=ids))

        neighbours.sort(key=lambda n: -n.similarity.similarity)
        neighbours = neighbours[:self.config.max_similar_users]
        logger.debug("User %s: %d similar users out of %d", user_id, len(neighbours), len(other_ids))
        return neighbours

    def positive_recipes(self, behavior: UserBehaviorData) -> List[Recipe]:
        """The requesting user's liked and saved recipes, as stored."""
        ids = []
        for record in behavior.liked + behavior.saved:
            if record.recipe_id not in ids:
                ids.append(record.recipe_id)
        if not ids:
            return []
        return list(self._call("get_recipes", self.store.get_recipes, ids))

    # =========================================================================
    # Scoring
    # =========================================================================

    def user_based_score(self, recipe: Recipe, neighbours: Sequence[Neighbour]) -> Tuple[int, float]:
        """
        Returns:
            (score 0-50, mean similarity of the neighbourhood)
        """
        if not neighbours:
            return 0, 0.0

        weighted = 0.0
        total_weight = 0.0
        for neighbour in neighbours:
            if recipe.id in neighbour.positive_ids:
                sim = neighbour.similarity
                weight = sim.similarity * (1 + sim.common_interactions * COMMON_INTERACTION_BOOST)
                weighted += weight * HALF_SCORE_CAP
                total_weight += weight

        score = weighted / max(total_weight, 1) if total_weight > 0 else 0.0
        avg_similarity = sum(n.similarity.similarity for n in neighbours) / len(neighbours)
        return min(HALF_SCORE_CAP, round_score(score)), avg_similarity

    def item_based_score(self, recipe: Recipe, liked_recipes: Sequence[Recipe]) -> Tuple[int, int, float]:
        """
        Returns:
            (score 0-50, number of similar recipes, their mean similarity)
        """
        if not liked_recipes:
            return 0, 0, 0.0

        similar = []
        for liked in liked_recipes:
            result = calculate_recipe_similarity(recipe, liked)
            if result.similarity > self.config.recipe_similarity_threshold:
                similar.append(result)

        if not similar:
            return 0, 0, 0.0

        similar.sort(key=lambda r: -r.similarity)
        similar = similar[:self.config.max_similar_recipes]
        avg_similarity = sum(r.similarity for r in similar) / len(similar)
        return min(HALF_SCORE_CAP, round_score(avg_similarity * HALF_SCORE_CAP)), len(similar), avg_similarity

    def _score(self, recipe: Recipe, neighbours: Sequence[Neighbour],
               liked_recipes: Sequence[Recipe]) -> CollaborativeScore:
        user_based, user_strength = self.user_based_score(recipe, neighbours)
        item_based, similar_count, item_strength = self.item_based_score(recipe, liked_recipes)
        total = int(clamp_score(round_score(user_based + item_based)))
        return CollaborativeScore(
            total=total,
            user_based=user_based,
            item_based=item_based,
            details={
                "similar_users_count": len(neighbours),
                "similar_recipes_count": similar_count,
                "user_similarity_strength": user_strength,
                "item_similarity_strength": item_strength,
            },
        )

    def score_candidates(self, recipes: Sequence[Recipe], user_id: str,
                         behavior: UserBehaviorData) -> List[CollaborativeScore]:
        """
        Collaborative scores for a candidate set, in input order.

        Raises:
            CollaboratorError: If the store fails
        """
        with ContextLogger(logger, f"collaborative scoring for {user_id} ({len(recipes)} candidates)"):
            neighbours = self.find_similar_users(user_id, behavior)
            liked_recipes = self.positive_recipes(behavior)
            return [self._score(recipe, neighbours, liked_recipes) for recipe in recipes]

    def calculate_collaborative_score(self, recipe: Recipe, user_id: str,
                                      behavior: UserBehaviorData) -> CollaborativeScore:
        """Collaborative score for a single candidate."""
        return self.score_candidates([recipe], user_id, behavior)[0]
