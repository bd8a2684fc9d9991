"""
Tests for dynamic weight adjustment.
"""
from datetime import datetime, timedelta

import pytest

from recipe_ranker.learning import (
    HistoricalScore,
    blend_weights,
    calculate_confidence,
    calculate_correlations,
    calculate_historical_scores,
    calculate_weighted_score,
    get_optimal_weights,
    learn_weights,
)
from recipe_ranker.learning.weight_adjustment import _normalize_internal
from recipe_ranker.models import (
    DEFAULT_WEIGHTS, INTERNAL_WEIGHT_NAMES, SIGNAL_NAMES, InteractionType, Recipe,
    ScoringWeights, UserBehaviorData,
)

from conftest import make_behavior


def synthetic_history(positive_count, negative_count):
    """Behavior plus historical scores where discriminatory separates likes from dislikes."""
    start = datetime(2026, 9, 1, 12, 0)
    recipes = {}
    entries = []
    scores = []
    for i in range(positive_count + negative_count):
        rid = f"h{i}"
        recipes[rid] = Recipe(id=rid, title=rid, cuisine="Italian", cook_time=20)
        positive = i < positive_count
        kind = InteractionType.LIKED if positive else InteractionType.DISLIKED
        entries.append((kind, rid, start + timedelta(days=i)))
        values = {signal: 50.0 for signal in SIGNAL_NAMES}
        values["discriminatory"] = 90.0 if positive else 10.0
        scores.append(HistoricalScore(recipe_id=rid, scores=values))
    return make_behavior(entries, recipes), scores


# Low data tests
def test_five_interactions_keep_defaults(behavior):
    """Test five interactions cap confidence and return the default weights."""
    historical = [HistoricalScore(recipe_id=rid) for rid in ("r1", "r2", "r3", "r4", "r5")]
    result = learn_weights(behavior, historical)
    assert result.sample_size == 5
    assert result.confidence <= 0.29
    for signal in SIGNAL_NAMES:
        assert result.weights.get(signal) == pytest.approx(DEFAULT_WEIGHTS.get(signal))


def test_no_history_zero_confidence():
    """Test an empty history has zero confidence."""
    result = learn_weights(UserBehaviorData(), [])
    assert result.confidence == 0.0
    assert result.sample_size == 0
    assert all(c == 0.0 for c in result.correlations.values())


def test_missing_historical_scores_keep_defaults():
    """Test enough interactions but no scores still falls back."""
    behavior, _ = synthetic_history(8, 4)
    result = learn_weights(behavior, [])
    assert result.confidence <= 0.29
    assert result.weights.discriminatory == pytest.approx(DEFAULT_WEIGHTS.discriminatory)


# Learning tests
def test_learned_internal_weights_sum_to_one():
    """Test the three internal weights always sum to 1."""
    behavior, scores = synthetic_history(8, 4)
    result = learn_weights(behavior, scores)
    assert sum(result.weights.get(n) for n in INTERNAL_WEIGHT_NAMES) == pytest.approx(1.0, abs=1e-6)
    assert sum(result.learned_weights.get(n) for n in INTERNAL_WEIGHT_NAMES) == pytest.approx(1.0, abs=1e-6)


def test_predictive_signal_gains_weight():
    """Test a signal that separates likes from dislikes gains weight."""
    behavior, scores = synthetic_history(30, 20)
    result = learn_weights(behavior, scores)
    assert result.correlations["discriminatory"] == pytest.approx(0.8)
    assert result.weights.discriminatory > DEFAULT_WEIGHTS.discriminatory
    assert result.weights.behavioral == pytest.approx(DEFAULT_WEIGHTS.behavioral)
    assert 0.1 <= result.confidence <= 1.0


def test_get_optimal_weights_matches_learn_weights():
    """Test the shortcut returns the blended weights."""
    behavior, scores = synthetic_history(30, 20)
    assert get_optimal_weights(behavior, scores) == learn_weights(behavior, scores).weights


def test_correlation_positive_takes_precedence():
    """Test a recipe both liked and disliked counts as positive."""
    rows = [
        HistoricalScore("a", {"discriminatory": 100.0}),
        HistoricalScore("b", {"discriminatory": 0.0}),
    ]
    correlations = calculate_correlations(rows, positive_ids={"a", "b"}, negative_ids={"b"})
    # No negative samples left
    assert correlations["discriminatory"] == 0.0


def test_correlation_clamped():
    """Test correlations stay within [-1, 1]."""
    rows = [HistoricalScore("a", {"temporal": 0.0}), HistoricalScore("b", {"temporal": 100.0})]
    correlations = calculate_correlations(rows, positive_ids={"a"}, negative_ids={"b"})
    assert correlations["temporal"] == -1.0


def test_confidence_bounds():
    """Test confidence is floored at 0.1 and capped at 1."""
    assert calculate_confidence(10, {}) == pytest.approx(0.1)
    full = {signal: 1.0 for signal in SIGNAL_NAMES}
    assert calculate_confidence(500, full) == 1.0


def test_blend_weights_extremes():
    """Test zero confidence keeps defaults and full confidence takes learned."""
    learned = ScoringWeights(discriminatory=0.5, base_score=0.3, health_goal=0.2, behavioral=0.2)
    assert blend_weights(DEFAULT_WEIGHTS, learned, 0.0) == DEFAULT_WEIGHTS
    assert blend_weights(DEFAULT_WEIGHTS, learned, 1.0) == learned


def test_normalize_internal_degenerate():
    """Test zero internal weights fall back to defaults."""
    zero = ScoringWeights(discriminatory=0.0, base_score=0.0, health_goal=0.0)
    assert _normalize_internal(zero).discriminatory == DEFAULT_WEIGHTS.discriminatory


# Historical score tests
def test_historical_scores_cover_interacted_recipes(recipes, behavior, context):
    """Test one row per interacted recipe with every signal."""
    rows = calculate_historical_scores(behavior, context, recipes)
    assert sorted(r.recipe_id for r in rows) == ["r1", "r2", "r3", "r4", "r5"]
    for row in rows:
        assert set(row.scores) == set(SIGNAL_NAMES)
        assert all(0 <= v <= 100 for v in row.scores.values())


def test_historical_scores_from_snapshots(behavior, context):
    """Test recipes are rebuilt from interaction snapshots when not supplied."""
    rows = calculate_historical_scores(behavior, context)
    assert len(rows) == 5
    # Snapshots carry no enrichment data
    assert all(r.get("external") == 50 for r in rows)


def test_historical_scores_empty(context):
    """Test no history gives no rows."""
    assert calculate_historical_scores(UserBehaviorData(), context) == []


# Weighted score tests
def test_weighted_score_uniform_signals():
    """Test equal signal scores blend to the same score."""
    scores = {signal: 80.0 for signal in SIGNAL_NAMES}
    assert calculate_weighted_score(scores) == pytest.approx(80.0)


def test_weighted_score_no_signals():
    """Test no signals is neutral."""
    assert calculate_weighted_score({}) == 50.0


def test_weighted_score_only_additive_signals():
    """Test additive signals alone share the whole weight."""
    assert calculate_weighted_score({"behavioral": 60.0, "temporal": 90.0}) == pytest.approx(72.0)


def test_weighted_score_internal_mix():
    """Test the internal score is the weighted mean of the internal signals."""
    scores = {"discriminatory": 100.0, "base_score": 0.0, "health_goal": 0.0}
    assert calculate_weighted_score(scores) == pytest.approx(60.0)


def test_weighted_score_extra_weights_scaled():
    """Test additive weights over 1 are scaled down and stay in range."""
    heavy = ScoringWeights(behavioral=0.8, temporal=0.6)
    scores = {"discriminatory": 0.0, "behavioral": 100.0, "temporal": 100.0}
    assert calculate_weighted_score(scores, heavy) == pytest.approx(100.0)


def test_weighted_score_skips_missing():
    """Test None scores are treated as absent."""
    scores = {"discriminatory": 70.0, "behavioral": None}
    assert calculate_weighted_score(scores) == pytest.approx(70.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
