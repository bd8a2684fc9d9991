"""
Tests for the composite (macro + taste) scorer.
"""
from dataclasses import replace

import pytest

from recipe_ranker.models import (
    MacroGoals, Recipe, ScoringContext, TemporalContext, UserPreferences,
)
from recipe_ranker.scorers import CompositeScorer, calculate_recipe_score
from recipe_ranker.scorers.composite_scorer import (
    blend_signals, cook_time_match, ingredient_match, macro_match,
)


# Neutral behavior tests
def test_no_inputs_is_neutral(italian_recipe):
    """Test missing preferences and goals give 50 everywhere."""
    score = calculate_recipe_score(italian_recipe)
    assert (score.total, score.macro_score, score.taste_score, score.match_percentage) == (50, 50, 50, 50)


def test_missing_goals_is_neutral(italian_recipe, italian_preferences):
    """Test preferences alone are not enough to score."""
    assert calculate_recipe_score(italian_recipe, italian_preferences, None).total == 50


# Scenario tests
def test_exact_goals_italian(italian_recipe, italian_preferences, italian_goals):
    """Test exact macro match with liked cuisine and no superfoods scores 85."""
    score = calculate_recipe_score(italian_recipe, italian_preferences, italian_goals)
    assert score.macro_score == 100
    assert score.breakdown["taste_match"] == 100
    assert score.total == 85
    assert score.match_percentage == score.total


def test_preferred_superfood_raises_total(italian_recipe, italian_preferences, italian_goals):
    """Test exact goals plus a preferred superfood give full macro, high taste and total above 85."""
    recipe = replace(italian_recipe, ingredients=italian_recipe.ingredients + ("2 tbsp olive oil",))
    prefs = replace(italian_preferences, preferred_superfoods=frozenset({"oliveOil"}))
    score = calculate_recipe_score(recipe, prefs, italian_goals)
    assert score.breakdown["superfood_boost"] == 100
    assert score.macro_score == 100
    assert score.taste_score >= 80
    assert score.total > 85
    assert (score.taste_score, score.total) == (100, 100)


def test_partial_superfood_match_saturates_taste(italian_recipe, italian_preferences, italian_goals):
    """Test the 0.2 boost floor is already enough to cap taste at 100."""
    recipe = replace(italian_recipe, ingredients=italian_recipe.ingredients + ("2 tbsp olive oil",))
    prefs = replace(italian_preferences,
                    preferred_superfoods=frozenset({"oliveOil", "spinach", "kale", "quinoa", "oats"}))
    score = calculate_recipe_score(recipe, prefs, italian_goals)
    assert score.breakdown["superfood_boost"] == 20
    assert score.taste_score == 100
    assert 0 <= score.total <= 100


def test_banned_pasta_drops_total(italian_recipe, italian_preferences, italian_goals):
    """Test a banned ingredient vetoes ingredient match and costs about 3 points."""
    baseline = calculate_recipe_score(italian_recipe, italian_preferences, italian_goals)
    prefs = replace(italian_preferences, banned_ingredients=frozenset({"pasta"}))
    banned = calculate_recipe_score(italian_recipe, prefs, italian_goals)
    assert banned.breakdown["ingredient_match"] == 0
    assert banned.total < baseline.total
    assert baseline.total - banned.total <= 3


def test_dietary_restriction_vetoes(italian_goals):
    """Test a violated restriction zeroes ingredient match."""
    recipe = Recipe(id="c", title="Chicken", ingredients=("500 g chicken",))
    prefs = UserPreferences(dietary_restrictions=["vegetarian"])
    assert ingredient_match(recipe, prefs) == 0.0


# Match factor tests
def test_macro_match_zero_target_counts_as_full_deviation(italian_recipe):
    """Test a zero target never divides by zero."""
    goals = MacroGoals(calories=500, protein=25, carbs=50, fat=0)
    assert macro_match(italian_recipe, goals) == pytest.approx(0.75)


def test_macro_match_floored_at_zero(italian_recipe):
    """Test wildly off targets floor at 0."""
    goals = MacroGoals(calories=50, protein=2, carbs=5, fat=2)
    assert macro_match(italian_recipe, goals) == 0.0


def test_cook_time_match_over_preference(italian_recipe):
    """Test cook time over the preference loses half per preferred span."""
    prefs = UserPreferences(cook_time_preference=20)
    assert cook_time_match(italian_recipe, prefs) == pytest.approx(0.75)
    assert cook_time_match(italian_recipe, UserPreferences()) == 1.0


# Signal blending tests
def test_blend_both_signals():
    """Test 75/15/10 blend with both signals."""
    assert blend_signals(80, 60, 40) == 73


def test_blend_single_signal_gives_weight_back():
    """Test a missing signal's weight returns to the base."""
    assert blend_signals(80, behavioral_score=60) == 77
    assert blend_signals(80, temporal_score=40) == 76
    assert blend_signals(80) == 80


# Scorer tests
def test_scorer_bounds(recipes, context):
    """Test every total and breakdown value stays within 0-100."""
    context = context.with_updates(temporal_context=TemporalContext.from_datetime(context.now))
    scorer = CompositeScorer()
    for recipe in recipes:
        result = scorer.evaluate(recipe, context)
        assert 0 <= result.total <= 100
        assert all(0 <= v <= 100 for v in result.breakdown.values())
        assert result.details["temporal_score"] is not None


def test_scorer_without_context_is_neutral(italian_recipe):
    """Test the scorer degrades to 50 on an empty context."""
    result = CompositeScorer().evaluate(italian_recipe, ScoringContext())
    assert result.total == 50
    assert result.scorer_name == "composite"
    assert result.details["behavioral_score"] is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
