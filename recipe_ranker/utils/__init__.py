"""
Utility functions for the recipe ranking engine.
"""
from .logger import setup_logging, get_logger, ContextLogger
from .time_utils import (
    MEAL_SLOTS,
    normalize_meal_name,
    categorize_hour,
    days_since,
    format_cook_time,
)

__all__ = [
    'setup_logging',
    'get_logger',
    'ContextLogger',
    'MEAL_SLOTS',
    'normalize_meal_name',
    'categorize_hour',
    'days_since',
    'format_cook_time',
]
