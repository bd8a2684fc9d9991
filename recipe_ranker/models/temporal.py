# recipe_ranker/models/temporal.py
"""
Temporal context models.

TemporalContext is derived from an explicit timestamp rather than the
wall clock, so scoring stays a pure function of its inputs. Callers that
want "now" pass a Clock.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple


Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Default clock: local wall-clock time."""
    return datetime.now()


class MealPeriod(Enum):
    """Meal period derived from hour of day."""
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"

    @classmethod
    def from_hour(cls, hour: int) -> 'MealPeriod':
        """
        6-10 breakfast, 11-14 lunch, 15-20 dinner, anything else snack.
        """
        if 6 <= hour < 11:
            return cls.BREAKFAST
        if 11 <= hour < 15:
            return cls.LUNCH
        if 15 <= hour < 21:
            return cls.DINNER
        return cls.SNACK


class Season(Enum):
    """Meteorological season (northern hemisphere)."""
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"
    WINTER = "winter"

    @classmethod
    def from_month_index(cls, month: int) -> 'Season':
        """
        Args:
            month: 0-based month (0 = January)
        """
        if 2 <= month <= 4:
            return cls.SPRING
        if 5 <= month <= 7:
            return cls.SUMMER
        if 8 <= month <= 10:
            return cls.FALL
        return cls.WINTER


# Hour window each meal is clamped into when planning ahead
MEAL_HOUR_WINDOWS: Dict[MealPeriod, Tuple[int, int]] = {
    MealPeriod.BREAKFAST: (6, 10),
    MealPeriod.LUNCH: (11, 14),
    MealPeriod.DINNER: (17, 20),
    MealPeriod.SNACK: (15, 22),
}


@dataclass(frozen=True)
class TemporalContext:
    """
    Time-derived scoring context.

    Attributes:
        hour: 0-23
        weekday: 0 = Sunday ... 6 = Saturday
        month: 0 = January ... 11 = December
        is_weekend: Saturday or Sunday
        meal_period: MealPeriod for the hour (or the slot being planned)
        season: Season for the month
    """
    hour: int
    weekday: int
    month: int
    is_weekend: bool
    meal_period: MealPeriod
    season: Season

    @property
    def is_weekday(self) -> bool:
        return not self.is_weekend

    @classmethod
    def from_datetime(cls, moment: datetime) -> 'TemporalContext':
        """Derive the context for a given timestamp."""
        weekday = (moment.weekday() + 1) % 7
        month = moment.month - 1
        return cls(
            hour=moment.hour,
            weekday=weekday,
            month=month,
            is_weekend=weekday in (0, 6),
            meal_period=MealPeriod.from_hour(moment.hour),
            season=Season.from_month_index(month),
        )

    @classmethod
    def now(cls, clock: Optional[Clock] = None) -> 'TemporalContext':
        """Derive the context from a clock (system clock by default)."""
        return cls.from_datetime((clock or system_clock)())

    def for_meal_period(self, period: MealPeriod) -> 'TemporalContext':
        """
        Context adjusted for planning a specific meal.

        The hour is clamped into the meal's window and the meal period
        is forced, so a plan built at 7am still scores dinner as dinner.
        """
        low, high = MEAL_HOUR_WINDOWS[period]
        return replace(self, hour=max(low, min(high, self.hour)), meal_period=period)


def _empty_period_map() -> Dict[str, Tuple[str, ...]]:
    return {p.value: () for p in MealPeriod}


@dataclass
class UserTemporalPatterns:
    """
    Learned temporal preferences.

    Attributes:
        preferred_hours: meal period value -> hours the user usually eats it
        weekday_preferences: meal period value -> top cuisines on weekdays
        weekend_preferences: meal period value -> top cuisines on weekends
        seasonal_preferences: season value -> top cuisines
    """
    preferred_hours: Dict[str, Tuple[int, ...]] = field(default_factory=dict)
    weekday_preferences: Dict[str, Tuple[str, ...]] = field(default_factory=_empty_period_map)
    weekend_preferences: Dict[str, Tuple[str, ...]] = field(default_factory=_empty_period_map)
    seasonal_preferences: Dict[str, Tuple[str, ...]] = field(
        default_factory=lambda: {s.value: () for s in Season}
    )

    def hours_for(self, period: MealPeriod) -> Tuple[int, ...]:
        return self.preferred_hours.get(period.value, ())

    def cuisines_for_day(self, is_weekend: bool, period: MealPeriod) -> Tuple[str, ...]:
        prefs = self.weekend_preferences if is_weekend else self.weekday_preferences
        return prefs.get(period.value, ())

    def cuisines_for_season(self, season: Season) -> Tuple[str, ...]:
        return self.seasonal_preferences.get(season.value, ())

    def is_empty(self) -> bool:
        """True when nothing has been learned yet."""
        groups: List[Dict] = [self.preferred_hours, self.weekday_preferences,
                              self.weekend_preferences, self.seasonal_preferences]
        return not any(v for group in groups for v in group.values())
