"""
Data models for the recipe ranking engine.
"""
from .recipe import Recipe, MacroProfile, MACRO_KEYS
from .preferences import (
    UserPreferences, MacroGoals, PhysicalProfile, FitnessGoal,
    KitchenProfile, CookTimeContext, SPICE_LEVELS,
)
from .behavior import InteractionType, InteractionRecord, UserBehaviorData
from .temporal import (
    TemporalContext, UserTemporalPatterns, MealPeriod, Season,
    Clock, system_clock,
)
from .scoring_context import ScoringContext, ScoreResult, RankedRecipe, NEUTRAL_SCORE
from .weights import (
    ScoringWeights, WeightAdjustmentResult, DEFAULT_WEIGHTS,
    INTERNAL_WEIGHT_NAMES, EXTERNAL_WEIGHT_NAMES, SIGNAL_NAMES,
)
from .engine_config import EngineConfig, DEFAULT_MEAL_DISTRIBUTION, DEFAULT_MEAL_SLOTS

__all__ = [
    # Recipe models
    'Recipe',
    'MacroProfile',
    'MACRO_KEYS',
    # User inputs
    'UserPreferences',
    'MacroGoals',
    'PhysicalProfile',
    'FitnessGoal',
    'KitchenProfile',
    'CookTimeContext',
    'SPICE_LEVELS',
    # History
    'InteractionType',
    'InteractionRecord',
    'UserBehaviorData',
    # Time
    'TemporalContext',
    'UserTemporalPatterns',
    'MealPeriod',
    'Season',
    'Clock',
    'system_clock',
    # Scoring
    'ScoringContext',
    'ScoreResult',
    'RankedRecipe',
    'NEUTRAL_SCORE',
    # Weights
    'ScoringWeights',
    'WeightAdjustmentResult',
    'DEFAULT_WEIGHTS',
    'INTERNAL_WEIGHT_NAMES',
    'EXTERNAL_WEIGHT_NAMES',
    'SIGNAL_NAMES',
    # Config
    'EngineConfig',
    'DEFAULT_MEAL_DISTRIBUTION',
    'DEFAULT_MEAL_SLOTS',
]
