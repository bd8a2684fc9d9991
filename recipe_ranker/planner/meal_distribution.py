# recipe_ranker/planner/meal_distribution.py
"""
Split a day's macro goals into per-slot targets.

Each slot gets a fixed share of the day (breakfast 25%, lunch 35%,
dinner 30%, snack 10%, dessert 8%). Shares are renormalized over the
slots actually requested, so the targets always add up to the day.
"""
from typing import Dict, List, Mapping, Optional, Sequence

from recipe_ranker.models.engine_config import DEFAULT_MEAL_DISTRIBUTION
from recipe_ranker.models.preferences import MacroGoals
from recipe_ranker.models.temporal import MealPeriod
from recipe_ranker.utils.time_utils import normalize_meal_name


# Temporal meal period used when scoring each slot
SLOT_MEAL_PERIODS: Dict[str, MealPeriod] = {
    "breakfast": MealPeriod.BREAKFAST,
    "lunch": MealPeriod.LUNCH,
    "dinner": MealPeriod.DINNER,
    "snack": MealPeriod.SNACK,
    "dessert": MealPeriod.DINNER,
}


def normalize_slots(slots: Sequence[str],
                    distribution: Mapping[str, float] = DEFAULT_MEAL_DISTRIBUTION) -> List[str]:
    """
    Canonical slot names in request order, duplicates dropped.

    Raises:
        ValueError: If a slot has no share in the distribution
    """
    result = []
    for slot in slots:
        name = normalize_meal_name(slot)
        if name not in distribution:
            raise ValueError(f"Unknown meal slot: {slot!r}. Available: {list(distribution)}")
        if name not in result:
            result.append(name)
    return result


def slot_shares(slots: Sequence[str],
                distribution: Mapping[str, float] = DEFAULT_MEAL_DISTRIBUTION) -> Dict[str, float]:
    """
    Renormalized share of the day per slot.

    Example:
        >>> slot_shares(["breakfast", "lunch"])
        {'breakfast': 0.4166..., 'lunch': 0.5833...}
    """
    names = normalize_slots(slots, distribution)
    total = sum(distribution[name] for name in names)
    if total <= 0:
        return {name: 0.0 for name in names}
    return {name: distribution[name] / total for name in names}


def distribute_macro_goals(daily_goals: Optional[MacroGoals], slots: Sequence[str],
                           distribution: Mapping[str, float] = DEFAULT_MEAL_DISTRIBUTION
                           ) -> Dict[str, Optional[MacroGoals]]:
    """
    Per-slot macro targets.

    Args:
        daily_goals: Goals for the whole day (None -> None per slot)
        slots: Requested slots
        distribution: slot -> share of the day (before renormalization)

    Returns:
        slot -> MacroGoals scaled by the slot's share
    """
    shares = slot_shares(slots, distribution)
    if daily_goals is None:
        return {name: None for name in shares}
    return {name: daily_goals.scale(share) for name, share in shares.items()}
