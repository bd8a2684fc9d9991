"""
Tests for the signal scorers and the scorer registry.
"""
from dataclasses import replace
from datetime import datetime, timedelta

import pytest

from recipe_ranker.models import (
    CookTimeContext, FitnessGoal, InteractionRecord, InteractionType, KitchenProfile,
    MacroGoals, MacroProfile, MealPeriod, PhysicalProfile, Recipe, ScoringContext,
    TemporalContext,
)
from recipe_ranker.scorers import (
    SCORER_REGISTRY,
    analyze_user_behavior_patterns,
    analyze_user_temporal_patterns,
    build_user_taste_profile,
    calculate_behavioral_score,
    calculate_discriminatory_score,
    calculate_enhanced_score,
    calculate_external_score,
    calculate_health_goal_score,
    calculate_hybrid_score,
    calculate_predictive_score,
    calculate_temporal_score,
    create_scorer,
    get_available_scorers,
    get_data_freshness,
    get_popularity_tier,
    get_quality_tier,
    needs_re_enrichment,
)
from recipe_ranker.scorers.enhanced_scorer import cook_time_fit
from recipe_ranker.scorers.health_goal_scorer import protein_alignment


# Registry tests
def test_registry_order():
    """Test scorers are listed in evaluation order."""
    assert get_available_scorers() == [
        "discriminatory", "composite", "health_goal", "behavioral",
        "temporal", "enhanced", "external", "predictive",
    ]


def test_create_scorer_unknown():
    """Test unknown scorer names are rejected."""
    with pytest.raises(ValueError, match="Unknown scorer"):
        create_scorer("mood")


def test_every_scorer_neutral_on_empty_context(italian_recipe):
    """Test each scorer degrades to 50 without inputs."""
    for name in SCORER_REGISTRY:
        result = create_scorer(name).evaluate(italian_recipe, ScoringContext(now=datetime(2026, 1, 1)))
        assert result.total == 50, name
        assert result.scorer_name == name


def test_every_scorer_in_bounds(recipes, behavior, now):
    """Test totals and breakdowns stay in 0-100 with a full context."""
    context = ScoringContext(
        preferences=None,
        macro_goals=MacroGoals(calories=600, protein=40, carbs=60, fat=20),
        physical_profile=PhysicalProfile(fitness_goal=FitnessGoal.LOSE_WEIGHT),
        behavior=behavior,
        temporal_context=TemporalContext.from_datetime(now),
        temporal_patterns=analyze_user_temporal_patterns(behavior.consumed),
        cook_time_context=CookTimeContext(available_time=20, urgency="high"),
        kitchen_profile=KitchenProfile(cooking_skill="beginner", kitchen_equipment=["oven"]),
        now=now,
    )
    for name in SCORER_REGISTRY:
        scorer = create_scorer(name)
        for recipe in recipes:
            result = scorer.evaluate(recipe, context)
            assert 0 <= result.total <= 100, (name, recipe.id)
            assert all(0 <= v <= 100 for v in result.breakdown.values()), (name, recipe.id)


# Discriminatory tests
def test_discriminatory_banned_ingredient(italian_recipe, italian_preferences):
    """Test a banned ingredient costs the penalty share."""
    baseline = calculate_discriminatory_score(italian_recipe, italian_preferences)
    banned = calculate_discriminatory_score(
        italian_recipe, replace(italian_preferences, banned_ingredients=frozenset({"pasta"})))
    assert banned.breakdown["ingredient_penalty"] == 60
    assert banned.details["banned_ingredient_found"] is True
    assert baseline.total - banned.total == pytest.approx(15, abs=1)


def test_discriminatory_cuisine_match(italian_recipe, italian_preferences):
    """Test liked cuisine scores 90, other cuisines 20."""
    assert calculate_discriminatory_score(italian_recipe, italian_preferences).breakdown["cuisine_match"] == 90
    other = replace(italian_recipe, cuisine="Thai")
    assert calculate_discriminatory_score(other, italian_preferences).breakdown["cuisine_match"] == 20


# Health goal tests
def test_gain_muscle_protein_monotonic():
    """Test more protein never lowers gain_muscle protein alignment."""
    goals = MacroGoals(calories=600, protein=40, carbs=60, fat=20)
    previous = 0
    for protein in range(0, 61):
        score = protein_alignment(protein, FitnessGoal.GAIN_MUSCLE, goals)
        assert score >= previous
        previous = score


def test_gain_muscle_protein_monotonic_without_goals():
    """Test the general protein tiers are monotonic too."""
    previous = 0
    for protein in range(0, 61):
        score = protein_alignment(protein, FitnessGoal.GAIN_MUSCLE)
        assert score >= previous
        previous = score


def test_health_goal_no_goal_neutral(italian_recipe):
    """Test missing fitness goal is neutral."""
    result = calculate_health_goal_score(italian_recipe, None)
    assert result.total == 50


def test_health_goal_zero_calorie_recipe():
    """Test zero-calorie recipes don't divide by zero."""
    water = Recipe(id="w", title="Water")
    result = calculate_health_goal_score(water, FitnessGoal.MAINTAIN)
    assert result.breakdown["macro_balance"] == 50
    assert result.breakdown["nutrient_density"] == 50


# Behavioral tests
def test_behavioral_cuisine_share(recipes, behavior, now):
    """Test cuisine sub-score is the positive share for that cuisine."""
    by_id = {r.id: r for r in recipes}
    assert calculate_behavioral_score(by_id["r3"], behavior, now).breakdown["cuisine"] == 100
    # American: one consumed, one disliked
    assert calculate_behavioral_score(by_id["r4"], behavior, now).breakdown["cuisine"] == 50


def test_behavioral_recency_window(recipes, behavior, now):
    """Test only positive interactions from the last 7 days count toward recency."""
    profile = build_user_taste_profile(behavior, now)
    assert profile.recency_bonus == 60


def test_behavioral_no_history_neutral(italian_recipe):
    """Test empty history is neutral."""
    assert calculate_behavioral_score(italian_recipe, None).total == 50


def test_behavior_patterns(behavior):
    """Test the pattern summary."""
    patterns = analyze_user_behavior_patterns(behavior)
    assert patterns["activity_level"] == "low"
    assert set(patterns["preferred_cuisines"]) == {"Japanese", "Italian", "American"}
    assert patterns["preferred_cook_time"] == 17


# Temporal tests
def test_temporal_no_context_neutral(italian_recipe):
    """Test missing temporal context is neutral."""
    assert calculate_temporal_score(italian_recipe, None).total == 50


def test_temporal_patterns_add_bonus(italian_recipe):
    """Test learned patterns can only raise the temporal score."""
    dinner = datetime(2026, 10, 14, 19, 0)
    consumed = [InteractionRecord.from_recipe(InteractionType.CONSUMED, italian_recipe,
                                              dinner - timedelta(days=7 * i)) for i in range(3)]
    patterns = analyze_user_temporal_patterns(consumed)
    assert patterns.hours_for(MealPeriod.DINNER) == (19,)
    assert patterns.cuisines_for_day(False, MealPeriod.DINNER) == ("Italian",)

    context = TemporalContext.from_datetime(dinner)
    plain = calculate_temporal_score(italian_recipe, context)
    learned = calculate_temporal_score(italian_recipe, context, patterns)
    assert learned.total > plain.total


def test_temporal_patterns_empty():
    """Test no consumption history yields empty patterns."""
    assert analyze_user_temporal_patterns([]).is_empty()


# Enhanced tests
def test_enhanced_neutral_without_context(italian_recipe):
    """Test missing cook-time context and kitchen profile is neutral."""
    assert calculate_enhanced_score(italian_recipe).total == 50


def test_enhanced_one_input_uses_defaults(italian_recipe):
    """Test a single input is enough to score."""
    result = calculate_enhanced_score(italian_recipe, CookTimeContext(available_time=45))
    assert result.breakdown["cook_time_match"] == 100
    assert result.details["cooking_skill"] == "intermediate"


def test_cook_time_fit_urgency_penalty():
    """Test high urgency penalizes longer recipes."""
    relaxed = cook_time_fit(40, CookTimeContext(available_time=45), 40)
    rushed = cook_time_fit(40, CookTimeContext(available_time=45, urgency="high"), 40)
    assert relaxed - rushed == 20


# External tests
def test_external_without_enrichment(italian_recipe):
    """Test unenriched recipes are neutral."""
    result = calculate_external_score(italian_recipe)
    assert result.total == 50
    assert result.details["has_external_data"] is False


def test_external_weighted_with_freshness(italian_recipe, now):
    """Test quality/popularity/health weighting plus freshness bonus."""
    recipe = replace(italian_recipe, external_id="1", external_source="spoonacular",
                     quality_score=80, popularity_score=60, health_score=100,
                     aggregate_likes=600, last_enriched=now - timedelta(days=3))
    result = calculate_external_score(recipe, now)
    assert result.breakdown["freshness_bonus"] == 5
    assert result.total == 80
    assert result.details["quality_tier"] == "high"
    assert result.details["popularity_tier"] == "popular"
    assert result.details["freshness"] == "fresh"


def test_quality_tiers():
    """Test quality tier boundaries."""
    assert [get_quality_tier(v) for v in (85, 70, 50, 49, None)] == [
        "premium", "high", "medium", "low", "unknown"]


def test_popularity_tiers():
    """Test popularity tier boundaries."""
    assert [get_popularity_tier(v) for v in (1000, 500, 200, 50, 49, None)] == [
        "viral", "popular", "trending", "moderate", "niche", "unknown"]


def test_data_freshness_and_re_enrichment(now):
    """Test freshness labels and the re-enrichment threshold."""
    assert get_data_freshness(None, now) == "never"
    assert get_data_freshness(now - timedelta(days=30), now) == "good"
    assert get_data_freshness(now - timedelta(days=91), now) == "very_stale"
    assert needs_re_enrichment(None, now=now)
    assert needs_re_enrichment(now - timedelta(days=90), now=now)
    assert not needs_re_enrichment(now - timedelta(days=89), now=now)


def test_hybrid_score():
    """Test 60/40 blend only with enrichment."""
    assert calculate_hybrid_score(70, 80, True) == 74
    assert calculate_hybrid_score(70, 80, False) == 70


# Predictive tests
def test_predictive_no_history_neutral(italian_recipe):
    """Test empty history is neutral."""
    assert calculate_predictive_score(italian_recipe, None).total == 50


def test_predictive_prefers_engaged_cuisine(recipes, behavior, now):
    """Test an engaged cuisine predicts better than an unseen one."""
    liked = replace(recipes[2], id="x1")
    disliked = replace(recipes[2], id="x2", cuisine="Thai")
    assert (calculate_predictive_score(liked, behavior, now).total
            > calculate_predictive_score(disliked, behavior, now).total)


def test_predictive_caps(recipes, behavior, now):
    """Test component caps."""
    result = calculate_predictive_score(recipes[1], behavior, now)
    assert result.breakdown["pattern_match"] <= 40
    assert result.breakdown["trend"] <= 30
    assert result.breakdown["success_probability"] <= 30


def test_zero_macro_recipe_scores(now):
    """Test an all-zero recipe scores without errors."""
    empty = Recipe(id="z", title="Nothing", macros=MacroProfile())
    context = ScoringContext(macro_goals=MacroGoals(0, 0, 0, 0), now=now)
    for name in SCORER_REGISTRY:
        assert 0 <= create_scorer(name).evaluate(empty, context).total <= 100


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
