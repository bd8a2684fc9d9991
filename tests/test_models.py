"""
Tests for data models.
"""
from datetime import datetime

import pytest

from recipe_ranker.models import (
    FitnessGoal, InteractionType, MacroGoals, MacroProfile, MealPeriod, Recipe,
    RankedRecipe, ScoringWeights, Season, TemporalContext, UserBehaviorData,
    UserPreferences, DEFAULT_WEIGHTS,
)


# MacroProfile tests
def test_macro_profile_from_dict_key_variants():
    """Test macros parse from alternate key names."""
    macros = MacroProfile.from_dict({"cal": 400, "protein_g": 30, "carbs_g": 40, "fat_g": 12})
    assert macros.as_tuple() == (400, 30, 40, 12)
    assert macros.fiber is None


def test_macro_profile_add():
    """Test adding profiles keeps fiber only when present."""
    a = MacroProfile(calories=100, protein=10, carbs=5, fat=2)
    b = MacroProfile(calories=50, protein=5, carbs=5, fat=1, fiber=3)
    total = a.add(b)
    assert total.calories == 150
    assert total.fiber == 3
    assert a.add(a).fiber is None


# Recipe tests
def test_recipe_from_dict_flat_macros():
    """Test recipe creation from flat dictionary."""
    recipe = Recipe.from_dict({
        "id": 7, "title": "Soup", "cuisine": "French", "cook_time": "25",
        "calories": 300, "protein": 12, "carbs": 30, "fat": 10,
        "ingredients": ["1 onion", {"text": "2 cups stock"}],
    })
    assert recipe.id == "7"
    assert recipe.cook_time == 25
    assert recipe.calories == 300
    assert recipe.ingredients == ("1 onion", "2 cups stock")


def test_recipe_from_dict_requires_id():
    """Test missing id is rejected."""
    with pytest.raises(ValueError):
        Recipe.from_dict({"title": "No id"})


def test_recipe_to_dict_roundtrip_fields():
    """Test serialization includes enrichment fields."""
    recipe = Recipe(id="a", title="A", external_id="1", external_source="spoonacular",
                    last_enriched=datetime(2026, 1, 2, 3, 4))
    data = recipe.to_dict()
    assert data["last_enriched"] == "2026-01-02T03:04:00"
    assert Recipe.from_dict(data).last_enriched == recipe.last_enriched


def test_recipe_has_external_data():
    """Test enrichment needs both id and source."""
    assert Recipe(id="a", title="A", external_id="1", external_source="x").has_external_data
    assert not Recipe(id="a", title="A", external_id="1").has_external_data


def test_recipe_lists_become_tuples():
    """Test list inputs are stored as tuples."""
    recipe = Recipe(id="a", title="A", ingredients=["x", "y"])
    assert recipe.ingredients == ("x", "y")
    hash(recipe)


# Preferences tests
def test_preferences_from_dict_lowercases_restrictions():
    """Test dietary restrictions are normalized."""
    prefs = UserPreferences.from_dict({
        "liked_cuisines": ["Italian"],
        "dietary_restrictions": ["Vegetarian"],
        "spice_level": "MEDIUM",
        "cook_time_preference": "30",
    })
    assert prefs.dietary_restrictions == frozenset({"vegetarian"})
    assert prefs.spice_level == "medium"
    assert prefs.cook_time_preference == 30


def test_macro_goals_scale():
    """Test scaling goals to a meal."""
    goals = MacroGoals(calories=2000, protein=150, carbs=200, fat=70).scale(0.25)
    assert goals.calories == 500
    assert goals.fat == pytest.approx(17.5)


def test_macro_goals_from_dict_missing_key():
    """Test incomplete goals raise ValueError."""
    with pytest.raises(ValueError, match="fat"):
        MacroGoals.from_dict({"calories": 1, "protein": 1, "carbs": 1})


def test_fitness_goal_parse():
    """Test goal parsing from strings."""
    assert FitnessGoal.parse("Gain_Muscle") is FitnessGoal.GAIN_MUSCLE
    assert FitnessGoal.parse("") is None
    with pytest.raises(ValueError):
        FitnessGoal.parse("bulk")


# Behavior tests
def test_behavior_groups_by_kind(behavior):
    """Test record grouping and id sets."""
    assert len(behavior) == 5
    assert [r.recipe_id for r in behavior.positive] == ["r2", "r3", "r5", "r1"]
    assert behavior.negative_recipe_ids() == {"r4"}
    assert behavior.counts()["liked"] == 2


def test_behavior_empty():
    """Test empty history."""
    behavior = UserBehaviorData()
    assert behavior.is_empty
    assert behavior.positive_recipe_ids() == set()


def test_interaction_type_positive():
    """Test only disliked is negative."""
    assert InteractionType.CONSUMED.is_positive
    assert not InteractionType.DISLIKED.is_positive


# Temporal tests
def test_meal_period_from_hour():
    """Test hour boundaries."""
    assert MealPeriod.from_hour(6) is MealPeriod.BREAKFAST
    assert MealPeriod.from_hour(11) is MealPeriod.LUNCH
    assert MealPeriod.from_hour(20) is MealPeriod.DINNER
    assert MealPeriod.from_hour(23) is MealPeriod.SNACK


def test_season_from_month_index():
    """Test 0-based month mapping."""
    assert Season.from_month_index(0) is Season.WINTER
    assert Season.from_month_index(3) is Season.SPRING
    assert Season.from_month_index(6) is Season.SUMMER
    assert Season.from_month_index(9) is Season.FALL


def test_temporal_context_from_datetime():
    """Test Sunday-based weekday and weekend flag."""
    sunday = TemporalContext.from_datetime(datetime(2026, 10, 18, 12, 0))
    assert sunday.weekday == 0
    assert sunday.is_weekend
    assert sunday.month == 9
    assert sunday.meal_period is MealPeriod.LUNCH


def test_temporal_context_for_meal_period():
    """Test planning ahead clamps the hour into the meal window."""
    morning = TemporalContext.from_datetime(datetime(2026, 10, 14, 7, 0))
    dinner = morning.for_meal_period(MealPeriod.DINNER)
    assert dinner.hour == 17
    assert dinner.meal_period is MealPeriod.DINNER


def test_temporal_context_now_uses_clock():
    """Test an injected clock replaces the wall clock."""
    context = TemporalContext.now(lambda: datetime(2026, 7, 1, 8, 0))
    assert context.season is Season.SUMMER


# Weights tests
def test_default_weights_internal_sum():
    """Test default internal weights sum to 1."""
    assert DEFAULT_WEIGHTS.internal_sum == pytest.approx(1.0)


def test_weights_get_unknown_signal():
    """Test unknown signal names raise KeyError."""
    with pytest.raises(KeyError):
        DEFAULT_WEIGHTS.get("predictive")


def test_weights_from_dict_defaults():
    """Test missing keys fall back to defaults."""
    weights = ScoringWeights.from_dict({"behavioral": 0.3})
    assert weights.behavioral == 0.3
    assert weights.discriminatory == 0.60


# Ranked recipe tests
def test_ranked_recipe_sort_key():
    """Test score descending then index ascending."""
    a = RankedRecipe(recipe=Recipe(id="a", title="A"), total_score=70, index=1)
    b = RankedRecipe(recipe=Recipe(id="b", title="B"), total_score=70, index=0)
    c = RankedRecipe(recipe=Recipe(id="c", title="C"), total_score=90, index=2)
    assert [r.recipe.id for r in sorted([a, b, c], key=RankedRecipe.sort_key)] == ["c", "b", "a"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
