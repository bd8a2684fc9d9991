"""
Tests for the concurrent ranking pass.
"""
from dataclasses import replace

import pytest

from recipe_ranker.learning import calculate_weighted_score
from recipe_ranker.models import DEFAULT_WEIGHTS, EngineConfig, ScoringContext
from recipe_ranker.ranking import prepare_context, rank_candidates, score_breakdown
from recipe_ranker.ranking import ranker
from recipe_ranker.scorers import predictive_scorer
from recipe_ranker.scorers import PredictiveScorer, SIGNAL_SCORERS, get_available_scorers
from recipe_ranker.scorers.predictive_scorer import analyze_historical_patterns


def rows(ranked):
    return [(entry.recipe.id, entry.total_score) for entry in ranked]


# Ordering tests
def test_empty_candidates(context):
    """Test an empty candidate set ranks to an empty list."""
    assert rank_candidates([], context) == []


def test_sorted_best_first(recipes, context):
    """Test totals are non-increasing."""
    ranked = rank_candidates(recipes, context, EngineConfig(max_workers=1))
    totals = [entry.total_score for entry in ranked]
    assert totals == sorted(totals, reverse=True)
    assert sorted(entry.recipe.id for entry in ranked) == sorted(r.id for r in recipes)


def test_deterministic_across_pool_sizes(recipes, context, behavior):
    """Test serial and pooled runs give the same order and scores."""
    context = context.with_updates(behavior=behavior)
    serial = rank_candidates(recipes, context, EngineConfig(max_workers=1))
    pooled = rank_candidates(recipes, context, EngineConfig(max_workers=4))
    again = rank_candidates(recipes, context, EngineConfig(max_workers=4))
    assert rows(serial) == rows(pooled) == rows(again)


def test_ties_keep_input_order(italian_recipe, context):
    """Test equal scores are ordered by input position."""
    copies = [replace(italian_recipe, id=f"copy-{i}") for i in range(5)]
    ranked = rank_candidates(copies, context, EngineConfig(max_workers=3))
    assert [entry.recipe.id for entry in ranked] == [f"copy-{i}" for i in range(5)]
    assert [entry.index for entry in ranked] == list(range(5))


# Scoring tests
def test_unknown_scorer_rejected(recipes, context):
    """Test an unknown scorer name fails before ranking."""
    with pytest.raises(ValueError, match="Unknown scorer"):
        rank_candidates(recipes, context, scorer_names=["composite", "mood"])


def test_without_weights_uses_composite(recipes, context):
    """Test the final score is the composite total when no weights are given."""
    for entry in rank_candidates(recipes, context, EngineConfig(max_workers=1)):
        assert entry.total_score == entry.breakdown["composite"]
        assert list(entry.breakdown) == get_available_scorers()


def test_with_weights_blends_signals(recipes, context, behavior):
    """Test weighted ranking blends the seven signal scores."""
    context = context.with_updates(behavior=behavior)
    ranked = rank_candidates(recipes, context, EngineConfig(max_workers=2), weights=DEFAULT_WEIGHTS)
    for entry in ranked:
        signals = {signal: entry.breakdown[name] for signal, name in SIGNAL_SCORERS.items()}
        assert entry.total_score == pytest.approx(calculate_weighted_score(signals, DEFAULT_WEIGHTS))
        assert 0 <= entry.total_score <= 100


def test_weights_add_missing_signal_scorers(recipes, context):
    """Test weighted ranking runs the signal scorers even if not requested."""
    ranked = rank_candidates(recipes, context, weights=DEFAULT_WEIGHTS, scorer_names=["predictive"])
    assert set(ranked[0].breakdown) == {"predictive"} | set(SIGNAL_SCORERS.values())


def test_prepare_context_builds_taste_profile(behavior, now):
    """Test the taste profile is computed once up front."""
    prepared = prepare_context(ScoringContext(behavior=behavior, now=now))
    assert prepared.taste_profile is not None
    assert prepare_context(ScoringContext(now=now)).taste_profile is None


def test_prepare_context_builds_predictive_patterns(behavior, now):
    """Test engagement patterns are computed once up front."""
    prepared = prepare_context(ScoringContext(behavior=behavior, now=now))
    assert prepared.predictive_patterns == analyze_historical_patterns(behavior, now)
    assert prepare_context(ScoringContext(now=now)).predictive_patterns is None


def test_ranking_reuses_predictive_patterns(recipes, context, behavior, monkeypatch):
    """Test a ranking pass analyzes history once, not once per candidate."""
    calls = []

    def counting(history, now=None):
        calls.append(now)
        return analyze_historical_patterns(history, now)

    monkeypatch.setattr(ranker, "analyze_historical_patterns", counting)
    monkeypatch.setattr(predictive_scorer, "analyze_historical_patterns", counting)
    context = context.with_updates(behavior=behavior)
    ranked = rank_candidates(recipes, context, EngineConfig(max_workers=2), scorer_names=["predictive"])
    assert len(ranked) == len(recipes)
    assert len(calls) == 1


def test_precomputed_patterns_score_the_same(recipes, context, behavior):
    """Test predictive scores match with and without precomputed patterns."""
    context = context.with_updates(behavior=behavior)
    prepared = prepare_context(context)
    scorer = PredictiveScorer()
    for recipe in recipes:
        assert scorer.evaluate(recipe, prepared).total == scorer.evaluate(recipe, context).total


# Breakdown tests
def test_score_breakdown_rows(recipes, context):
    """Test rows carry id, title, total and per-scorer scores."""
    ranked = rank_candidates(recipes, context, EngineConfig(max_workers=1), scorer_names=["composite"])
    table = score_breakdown(ranked)
    assert len(table) == len(recipes)
    assert set(table[0]) == {"id", "title", "total", "composite"}
    assert table[0]["total"] == ranked[0].total_score


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
