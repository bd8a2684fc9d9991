# recipe_ranker/utils/time_utils.py
"""
Time-related utility functions.
"""
from datetime import datetime
from typing import Optional

# Canonical meal slot names in display order
MEAL_SLOTS = [
    "breakfast",
    "lunch",
    "dinner",
    "snack",
    "dessert",
]

_SLOT_ALIASES = {
    "morning snack": "snack",
    "afternoon snack": "snack",
    "evening snack": "snack",
    "am snack": "snack",
    "pm snack": "snack",
    "supper": "dinner",
    "brunch": "breakfast",
}


def normalize_meal_name(input_name: str) -> str:
    """
    Normalize meal slot input to canonical form.
    Handles various input formats:
    - "Breakfast" (mixed case)
    - "EVENING_SNACK" (underscores, mapped to "snack")
    - "supper" (alias, mapped to "dinner")

    Args:
        input_name: User input slot name

    Returns:
        Canonical slot name or stripped lowercase input if no match
    """
    if not input_name:
        return input_name

    normalized = input_name.lower().replace("_", " ").strip()

    if normalized in MEAL_SLOTS:
        return normalized

    return _SLOT_ALIASES.get(normalized, normalized)


def categorize_hour(hour: int) -> str:
    """
    Categorize an hour into a cooking time-of-day bucket.

    Args:
        hour: 0-23

    Returns:
        "morning" (5-11), "afternoon" (12-16), "evening" (17-21) or "night"
    """
    if 5 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 22:
        return "evening"
    return "night"


def days_since(moment: Optional[datetime], now: datetime) -> Optional[int]:
    """
    Whole days elapsed between moment and now (floored).

    Returns:
        Day count, or None when moment is None
    """
    if moment is None:
        return None
    return int((now - moment).total_seconds() // 86400)


def format_cook_time(minutes: int) -> str:
    """
    Human-readable cook time.

    Example:
        >>> format_cook_time(45)
        '45 minutes'
        >>> format_cook_time(120)
        '2 hours'
        >>> format_cook_time(95)
        '1h 35m'
    """
    minutes = int(minutes)
    if minutes < 60:
        return f"{minutes} minutes"

    hours, remaining = divmod(minutes, 60)
    if remaining == 0:
        return f"{hours} hour{'s' if hours > 1 else ''}"
    return f"{hours}h {remaining}m"
