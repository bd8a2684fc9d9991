# recipe_ranker/learning/weight_adjustment.py
"""
Dynamic weight adjustment.

Learns per-user blend weights from how each signal scored the recipes
the user engaged with (liked, saved, consumed) versus the ones they
disliked:

    correlation[s] = clamp((avg_positive[s] - avg_negative[s]) / 100, -1, 1)
    learned[s]     = max(0.1, default[s] * (1 + 0.5 * correlation[s]))   (internal three)
    confidence     = clamp(0.6 * sample_factor + 0.4 * mean(|correlation|), 0.1, 1)
    weights        = default * (1 - confidence) + learned * confidence

The three internal weights are renormalized to sum to 1.0 by one helper
(_normalize_internal), applied to every set of weights learn_weights returns.
"""
import math
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from recipe_ranker.models.behavior import UserBehaviorData
from recipe_ranker.models.recipe import Recipe
from recipe_ranker.models.scoring_context import ScoringContext, NEUTRAL_SCORE
from recipe_ranker.models.weights import (
    DEFAULT_WEIGHTS, EXTERNAL_WEIGHT_NAMES, INTERNAL_WEIGHT_NAMES, SIGNAL_NAMES,
    ScoringWeights, WeightAdjustmentResult,
)
from recipe_ranker.scorers import SIGNAL_SCORERS, create_scorer
from recipe_ranker.scorers.base_scorer import clamp_score
from recipe_ranker.utils.logger import get_logger


logger = get_logger(__name__)

DEFAULT_MIN_SAMPLE_SIZE = 10
OPTIMAL_SAMPLE_SIZE = 50
LOW_DATA_CONFIDENCE_CAP = 0.29
MIN_INTERNAL_WEIGHT = 0.1
CORRELATION_GAIN = 0.5


@dataclass
class HistoricalScore:
    """Every signal's score for one recipe the user interacted with."""
    recipe_id: str
    scores: Dict[str, float] = field(default_factory=dict)

    def get(self, signal: str) -> float:
        return self.scores.get(signal, NEUTRAL_SCORE)


# =============================================================================
# Historical scores
# =============================================================================

def _snapshot_recipes(behavior: UserBehaviorData) -> List[Recipe]:
    """Rebuild minimal recipes from interaction snapshots (first record per id wins)."""
    seen = {}
    for record in behavior.records:
        if record.recipe_id not in seen:
            seen[record.recipe_id] = Recipe(
                id=record.recipe_id,
                title="",
                cuisine=record.cuisine,
                cook_time=record.cook_time,
                macros=record.macros,
                ingredients=record.ingredients,
            )
    return list(seen.values())


def calculate_historical_scores(behavior: UserBehaviorData, context: ScoringContext,
                                recipes: Optional[Sequence[Recipe]] = None) -> List[HistoricalScore]:
    """
    Run all seven signal scorers over the recipes the user interacted with.

    Args:
        behavior: Interaction history (liked, disliked, saved, consumed)
        context: Scoring context to evaluate under
        recipes: Full interacted recipes; when omitted they are rebuilt
            from the interaction snapshots (no enrichment data)

    Returns:
        One HistoricalScore per unique interacted recipe id
    """
    interacted = behavior.recipe_ids()
    if not interacted:
        return []

    if recipes is None:
        candidates = _snapshot_recipes(behavior)
    else:
        candidates = [r for r in recipes if r.id in interacted]

    if context.behavior is None:
        context = context.with_updates(behavior=behavior)

    scorers = {signal: create_scorer(name) for signal, name in SIGNAL_SCORERS.items()}
    results = []
    for recipe in candidates:
        scores = {signal: scorer.evaluate(recipe, context).total for signal, scorer in scorers.items()}
        results.append(HistoricalScore(recipe_id=recipe.id, scores=scores))

    logger.debug("Historical scores computed for %d of %d interacted recipes",
                 len(results), len(interacted))
    return results


# =============================================================================
# Learning
# =============================================================================

def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def calculate_correlations(historical_scores: Sequence[HistoricalScore],
                           positive_ids: set, negative_ids: set) -> Dict[str, float]:
    """
    Per-signal correlation with engagement, in [-1, 1].

    A recipe that is both positive and negative counts as positive.
    Signals with no positive or no negative samples get 0.
    """
    positive = {signal: [] for signal in SIGNAL_NAMES}
    negative = {signal: [] for signal in SIGNAL_NAMES}

    for row in historical_scores:
        if row.recipe_id in positive_ids:
            bucket = positive
        elif row.recipe_id in negative_ids:
            bucket = negative
        else:
            continue
        for signal in SIGNAL_NAMES:
            bucket[signal].append(row.get(signal))

    correlations = {}
    for signal in SIGNAL_NAMES:
        if not positive[signal] or not negative[signal]:
            correlations[signal] = 0.0
            continue
        diff = (_mean(positive[signal]) - _mean(negative[signal])) / 100
        correlations[signal] = max(-1.0, min(1.0, diff))
    return correlations


def weights_from_correlations(correlations: Mapping[str, float],
                              defaults: ScoringWeights = DEFAULT_WEIGHTS) -> ScoringWeights:
    """Scale the internal defaults by correlation; the other four keep their defaults."""
    values = defaults.to_dict()
    for name in INTERNAL_WEIGHT_NAMES:
        adjusted = values[name] * (1 + correlations.get(name, 0.0) * CORRELATION_GAIN)
        values[name] = max(MIN_INTERNAL_WEIGHT, adjusted)
    return _normalize_internal(ScoringWeights(**values), defaults)


def calculate_confidence(sample_size: int, correlations: Mapping[str, float],
                         min_sample_size: int = DEFAULT_MIN_SAMPLE_SIZE) -> float:
    span = max(1, OPTIMAL_SAMPLE_SIZE - min_sample_size)
    sample_factor = min(1.0, (sample_size - min_sample_size) / span)
    strength = _mean([abs(correlations.get(signal, 0.0)) for signal in SIGNAL_NAMES])
    return max(0.1, min(1.0, 0.6 * sample_factor + 0.4 * strength))


def blend_weights(defaults: ScoringWeights, learned: ScoringWeights,
                  confidence: float) -> ScoringWeights:
    """
    Componentwise blend: defaults * (1 - confidence) + learned * confidence.

    Args:
        defaults: Fallback weights
        learned: User-specific weights
        confidence: 0-1 trust in the learned weights
    """
    confidence = max(0.0, min(1.0, confidence))
    return ScoringWeights(**{
        name: defaults.get(name) * (1 - confidence) + learned.get(name) * confidence
        for name in SIGNAL_NAMES
    })


def _normalize_internal(weights: ScoringWeights,
                        fallback: ScoringWeights = DEFAULT_WEIGHTS) -> ScoringWeights:
    """Rescale discriminatory, base_score and health_goal to sum to 1.0."""
    total = weights.internal_sum
    if total <= 0 or not math.isfinite(total):
        values = weights.to_dict()
        values.update({name: fallback.get(name) for name in INTERNAL_WEIGHT_NAMES})
        return ScoringWeights(**values)

    values = weights.to_dict()
    for name in INTERNAL_WEIGHT_NAMES:
        values[name] = values[name] / total
    return ScoringWeights(**values)


def learn_weights(behavior: UserBehaviorData, historical_scores: Sequence[HistoricalScore],
                  min_sample_size: int = DEFAULT_MIN_SAMPLE_SIZE,
                  defaults: ScoringWeights = DEFAULT_WEIGHTS) -> WeightAdjustmentResult:
    """
    Learn blend weights from interaction history.

    Args:
        behavior: Interaction history
        historical_scores: Signal scores of the interacted recipes
        min_sample_size: Unique positive + negative ids needed to learn
        defaults: Weights to fall back to and blend from

    Returns:
        WeightAdjustmentResult; below min_sample_size (or without
        historical scores) the weights are the defaults and confidence
        is 0 for no data, otherwise min(0.29, n / 10)
    """
    positive_ids = behavior.positive_recipe_ids()
    negative_ids = behavior.negative_recipe_ids()
    sample_size = len(positive_ids) + len(negative_ids)

    if sample_size < min_sample_size or not historical_scores:
        confidence = 0.0 if sample_size == 0 else min(LOW_DATA_CONFIDENCE_CAP,
                                                      sample_size / min_sample_size)
        logger.debug("Weight learning skipped: sample size %d (need %d)", sample_size, min_sample_size)
        base = _normalize_internal(defaults)
        return WeightAdjustmentResult(
            weights=base,
            learned_weights=base,
            confidence=confidence,
            sample_size=sample_size,
            correlations={signal: 0.0 for signal in SIGNAL_NAMES},
        )

    correlations = calculate_correlations(historical_scores, positive_ids, negative_ids)
    learned = weights_from_correlations(correlations, defaults)
    confidence = calculate_confidence(sample_size, correlations, min_sample_size)
    weights = _normalize_internal(blend_weights(defaults, learned, confidence), defaults)

    logger.info("Learned weights from %d interactions (confidence %.2f)", sample_size, confidence)
    return WeightAdjustmentResult(
        weights=weights,
        learned_weights=learned,
        confidence=confidence,
        sample_size=sample_size,
        correlations=correlations,
    )


def get_optimal_weights(behavior: UserBehaviorData, historical_scores: Sequence[HistoricalScore],
                        min_sample_size: int = DEFAULT_MIN_SAMPLE_SIZE) -> ScoringWeights:
    """Blended weights for a user (learn_weights(...).weights)."""
    return learn_weights(behavior, historical_scores, min_sample_size).weights


# =============================================================================
# Applying weights
# =============================================================================

def calculate_weighted_score(signal_scores: Mapping[str, float],
                             weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    """
    Combine signal scores into one 0-100 score.

    The internal score is the weighted mean of discriminatory, base_score
    and health_goal (renormalized over those present). Behavioral,
    temporal, enhanced and external are additive blend weights; the
    internal score gets whatever weight they leave. If the additive
    weights of the present signals exceed 1 they are scaled down to 1.

    Args:
        signal_scores: signal name -> score (missing signals are skipped)
        weights: Blend weights

    Returns:
        Score clamped to [0, 100]; 50 if no signal is present
    """
    internal_present = [s for s in INTERNAL_WEIGHT_NAMES if signal_scores.get(s) is not None]
    extra_present = [s for s in EXTERNAL_WEIGHT_NAMES if signal_scores.get(s) is not None]

    if not internal_present and not extra_present:
        return float(NEUTRAL_SCORE)

    internal_weight = sum(weights.get(s) for s in internal_present)
    if internal_present and internal_weight > 0:
        internal = sum(weights.get(s) * signal_scores[s] for s in internal_present) / internal_weight
    elif internal_present:
        internal = _mean([signal_scores[s] for s in internal_present])
    else:
        internal = None

    extra_weight = sum(weights.get(s) for s in extra_present)
    if internal is None:
        # Only additive signals: they share the whole weight
        if extra_weight <= 0:
            return clamp_score(_mean([signal_scores[s] for s in extra_present]))
        return clamp_score(sum(weights.get(s) * signal_scores[s] for s in extra_present) / extra_weight)

    scale = 1.0 / extra_weight if extra_weight > 1 else 1.0
    extras = sum(weights.get(s) * scale * signal_scores[s] for s in extra_present)
    internal_share = max(0.0, 1.0 - extra_weight * scale)
    return clamp_score(internal * internal_share + extras)
