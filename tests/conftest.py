"""
Shared fixtures for recipe ranker tests.
"""
from datetime import datetime

import pytest

from recipe_ranker.models import (
    InteractionRecord, InteractionType, MacroGoals, MacroProfile, Recipe,
    ScoringContext, UserBehaviorData, UserPreferences,
)


# Wednesday evening in autumn
NOW = datetime(2026, 10, 14, 19, 0)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def italian_recipe():
    """Italian dish whose macros exactly match italian_goals."""
    return Recipe(
        id="it-1",
        title="Penne al Pomodoro",
        cuisine="Italian",
        cook_time=30,
        macros=MacroProfile(calories=500, protein=25, carbs=50, fat=20),
        ingredients=("200 g penne pasta", "400 g crushed tomatoes", "1 clove garlic"),
        instructions=("Boil pasta", "Simmer sauce", "Combine"),
    )


@pytest.fixture
def italian_goals():
    return MacroGoals(calories=500, protein=25, carbs=50, fat=20)


@pytest.fixture
def italian_preferences():
    return UserPreferences(
        liked_cuisines=["Italian"],
        spice_level="medium",
        cook_time_preference=30,
    )


@pytest.fixture
def recipes():
    """Small, varied candidate set."""
    return [
        Recipe(
            id="r1", title="Oat Bowl", cuisine="American", cook_time=5,
            macros=MacroProfile(calories=350, protein=15, carbs=55, fat=8, fiber=8),
            ingredients=("1 cup oats", "1/2 cup blueberries", "1 cup milk"),
            instructions=("Mix", "Serve"),
        ),
        Recipe(
            id="r2", title="Salmon Rice", cuisine="Japanese", cook_time=30,
            macros=MacroProfile(calories=640, protein=42, carbs=60, fat=22),
            ingredients=("200 g salmon fillet", "1 cup brown rice", "1 cup broccoli"),
            instructions=("Cook rice", "Bake salmon", "Serve"),
        ),
        Recipe(
            id="r3", title="Pasta Primavera", cuisine="Italian", cook_time=25,
            macros=MacroProfile(calories=540, protein=18, carbs=80, fat=16),
            ingredients=("200 g penne pasta", "1 zucchini", "2 tbsp olive oil"),
            instructions=("Cook pasta", "Saute vegetables", "Toss"),
        ),
        Recipe(
            id="r4", title="Beef Stew", cuisine="American", cook_time=120,
            macros=MacroProfile(calories=650, protein=40, carbs=35, fat=36),
            ingredients=("800 g beef chuck", "4 potatoes", "3 carrots", "1 tbsp butter"),
            instructions=("Brown beef", "Add vegetables", "Simmer", "Thicken"),
        ),
        Recipe(
            id="r5", title="Edamame", cuisine="Japanese", cook_time=8,
            macros=MacroProfile(calories=150, protein=12, carbs=10, fat=6),
            ingredients=("2 cups edamame", "1 tsp sea salt"),
            instructions=("Boil", "Salt"),
        ),
    ]


def make_behavior(entries, recipes_by_id):
    """Build UserBehaviorData from (kind, recipe_id, timestamp) tuples."""
    return UserBehaviorData.from_records(
        InteractionRecord.from_recipe(kind, recipes_by_id[rid], ts)
        for kind, rid, ts in entries
    )


@pytest.fixture
def behavior(recipes):
    by_id = {r.id: r for r in recipes}
    return make_behavior([
        (InteractionType.LIKED, "r2", datetime(2026, 10, 1, 19, 0)),
        (InteractionType.LIKED, "r3", datetime(2026, 10, 5, 19, 30)),
        (InteractionType.CONSUMED, "r1", datetime(2026, 10, 10, 8, 0)),
        (InteractionType.SAVED, "r5", datetime(2026, 10, 12, 16, 0)),
        (InteractionType.DISLIKED, "r4", datetime(2026, 10, 13, 18, 0)),
    ], by_id)


@pytest.fixture
def context(italian_preferences, now):
    return ScoringContext(
        preferences=italian_preferences,
        macro_goals=MacroGoals(calories=2000, protein=120, carbs=220, fat=70),
        now=now,
    )
