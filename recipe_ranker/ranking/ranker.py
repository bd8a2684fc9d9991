# recipe_ranker/ranking/ranker.py
"""
Ranking pass over a candidate set.

Every candidate is evaluated by every registered scorer in a
concurrent.futures worker pool (thread or process, per EngineConfig).
The final score is the composite score, or the weighted blend of the
seven signal scores when ScoringWeights are supplied.

Ordering is deterministic: score descending, then input position
ascending. Scoring is read-only, so worker scheduling cannot change
the result.
"""
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence, Tuple

from recipe_ranker.learning.weight_adjustment import calculate_weighted_score
from recipe_ranker.models.engine_config import EngineConfig
from recipe_ranker.models.recipe import Recipe
from recipe_ranker.models.scoring_context import RankedRecipe, ScoringContext, ScoreResult
from recipe_ranker.models.weights import ScoringWeights
from recipe_ranker.scorers import SIGNAL_SCORERS, create_scorer, get_available_scorers
from recipe_ranker.scorers.behavioral_scorer import build_user_taste_profile
from recipe_ranker.scorers.predictive_scorer import analyze_historical_patterns
from recipe_ranker.utils.logger import get_logger, ContextLogger


logger = get_logger(__name__)

BASE_SCORER = "composite"


def _score_candidate(task: Tuple[int, Recipe, ScoringContext, Tuple[str, ...],
                                 Optional[ScoringWeights]]) -> RankedRecipe:
    """
    Score one candidate. Module-level so process pools can pickle it.

    Args:
        task: (index, recipe, context, scorer names, weights)

    Returns:
        RankedRecipe for the candidate
    """
    index, recipe, context, scorer_names, weights = task
    results: List[ScoreResult] = [create_scorer(name).evaluate(recipe, context) for name in scorer_names]
    by_name = {r.scorer_name: r.total for r in results}

    if weights is not None:
        signal_scores = {signal: by_name.get(scorer) for signal, scorer in SIGNAL_SCORERS.items()}
        total = calculate_weighted_score(signal_scores, weights)
    else:
        total = by_name.get(BASE_SCORER, 0.0)

    return RankedRecipe(recipe=recipe, total_score=total, index=index, individual_scores=results)


def prepare_context(context: ScoringContext) -> ScoringContext:
    """Precompute the per-user behavior summaries once for the whole pass."""
    if not context.has_behavior():
        return context
    changes = {}
    if context.taste_profile is None:
        changes["taste_profile"] = build_user_taste_profile(context.behavior, context.reference_time())
    if context.predictive_patterns is None:
        changes["predictive_patterns"] = analyze_historical_patterns(
            context.behavior, context.reference_time())
    return context.with_updates(**changes) if changes else context


def rank_candidates(candidates: Sequence[Recipe], context: ScoringContext,
                    config: Optional[EngineConfig] = None,
                    weights: Optional[ScoringWeights] = None,
                    scorer_names: Optional[Sequence[str]] = None) -> List[RankedRecipe]:
    """
    Score and sort a candidate set.

    Args:
        candidates: Candidate recipes (input order is the tie-break)
        context: Shared read-only scoring context
        config: Pool size and kind (defaults to EngineConfig())
        weights: Blend weights; None ranks by the composite score alone
        scorer_names: Scorers to run (defaults to the whole registry)

    Returns:
        RankedRecipe list, best first; [] for an empty candidate set

    Raises:
        ValueError: If a scorer name is unknown
    """
    if not candidates:
        return []

    config = config or EngineConfig()
    names = tuple(scorer_names) if scorer_names is not None else tuple(get_available_scorers())
    for name in names:
        # Fail before any work is submitted
        create_scorer(name)
    if weights is not None:
        names = names + tuple(s for s in SIGNAL_SCORERS.values() if s not in names)

    context = prepare_context(context)
    tasks = [(index, recipe, context, names, weights) for index, recipe in enumerate(candidates)]

    workers = min(config.worker_count, len(tasks))
    pool_class = ProcessPoolExecutor if config.executor == "process" else ThreadPoolExecutor

    with ContextLogger(logger, f"ranking {len(tasks)} candidates ({config.executor} x{workers})"):
        if workers == 1:
            ranked = [_score_candidate(task) for task in tasks]
        else:
            with pool_class(max_workers=workers) as pool:
                ranked = list(pool.map(_score_candidate, tasks))

    ranked.sort(key=RankedRecipe.sort_key)

    for entry in ranked[:3]:
        logger.debug("Top candidate: %s", entry)
    return ranked


def score_breakdown(ranked: Sequence[RankedRecipe]) -> List[Dict[str, float]]:
    """Flatten ranked entries into rows (id, title, total, per-scorer totals)."""
    rows = []
    for entry in ranked:
        row = {"id": entry.recipe.id, "title": entry.recipe.title, "total": entry.total_score}
        row.update(entry.breakdown)
        rows.append(row)
    return rows
