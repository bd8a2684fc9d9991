"""
Daily meal planning on top of the ranking engine.
"""
from .meal_distribution import distribute_macro_goals, slot_shares, normalize_slots, SLOT_MEAL_PERIODS
from .daily_planner import (
    MealSuggestion,
    DailyPlan,
    slot_heuristic,
    macro_fit,
    calculate_meal_type_score,
    generate_reasoning,
    assess_difficulty,
    calculate_total_macros,
    calculate_macro_progress,
    plan_slot,
    generate_daily_plan,
)
from .insights import PlanInsights, get_daily_plan_insights

__all__ = [
    'distribute_macro_goals',
    'slot_shares',
    'normalize_slots',
    'SLOT_MEAL_PERIODS',
    'MealSuggestion',
    'DailyPlan',
    'slot_heuristic',
    'macro_fit',
    'calculate_meal_type_score',
    'generate_reasoning',
    'assess_difficulty',
    'calculate_total_macros',
    'calculate_macro_progress',
    'plan_slot',
    'generate_daily_plan',
    'PlanInsights',
    'get_daily_plan_insights',
]
