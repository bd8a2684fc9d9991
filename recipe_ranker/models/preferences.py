# recipe_ranker/models/preferences.py
"""
User-supplied preference, goal and profile models.

All of these are supplied per request; no scorer mutates them.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, FrozenSet, Iterable, Optional


SPICE_LEVELS = ("mild", "medium", "spicy")


def _frozen(values: Optional[Iterable[str]]) -> FrozenSet[str]:
    """Normalize an iterable of names to a frozenset of stripped strings."""
    if not values:
        return frozenset()
    if isinstance(values, str):
        values = [values]
    return frozenset(str(v).strip() for v in values if str(v).strip())


class FitnessGoal(Enum):
    """Fitness goal from the user's physical profile."""
    LOSE_WEIGHT = "lose_weight"
    MAINTAIN = "maintain"
    GAIN_MUSCLE = "gain_muscle"
    GAIN_WEIGHT = "gain_weight"

    @classmethod
    def parse(cls, value: Any) -> Optional['FitnessGoal']:
        """Parse a goal from a string or enum. Returns None for empty input."""
        if value is None or value == "":
            return None
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


@dataclass(frozen=True)
class UserPreferences:
    """
    Taste and restriction preferences for one user.

    Attributes:
        liked_cuisines: Cuisine names the user likes (exact match)
        dietary_restrictions: e.g. {"vegetarian", "dairy-free"}
        banned_ingredients: Substrings that veto a recipe (case-insensitive)
        preferred_superfoods: Superfood category ids (e.g. "oliveOil")
        spice_level: "mild", "medium", "spicy" or None
        cook_time_preference: Preferred cook time in minutes (None = no preference)
    """
    liked_cuisines: FrozenSet[str] = frozenset()
    dietary_restrictions: FrozenSet[str] = frozenset()
    banned_ingredients: FrozenSet[str] = frozenset()
    preferred_superfoods: FrozenSet[str] = frozenset()
    spice_level: Optional[str] = None
    cook_time_preference: Optional[int] = None

    def __post_init__(self):
        for name in ("liked_cuisines", "dietary_restrictions",
                     "banned_ingredients", "preferred_superfoods"):
            value = getattr(self, name)
            if not isinstance(value, frozenset):
                object.__setattr__(self, name, _frozen(value))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UserPreferences':
        """
        Build from a preferences dict (e.g. a user profile JSON block).

        Args:
            data: Dict with list-valued preference keys

        Returns:
            UserPreferences instance
        """
        spice = data.get("spice_level")
        cook_time = data.get("cook_time_preference")
        return cls(
            liked_cuisines=_frozen(data.get("liked_cuisines")),
            dietary_restrictions=_frozen(
                d.lower() for d in (data.get("dietary_restrictions") or [])
            ),
            banned_ingredients=_frozen(data.get("banned_ingredients")),
            preferred_superfoods=_frozen(data.get("preferred_superfoods")),
            spice_level=str(spice).lower() if spice else None,
            cook_time_preference=int(cook_time) if cook_time is not None else None,
        )


@dataclass(frozen=True)
class MacroGoals:
    """
    Macro targets for a period (a day, or one meal once scaled).

    Example:
        >>> daily = MacroGoals(calories=2000, protein=150, carbs=200, fat=70)
        >>> daily.scale(0.25).calories
        500.0
    """
    calories: float
    protein: float
    carbs: float
    fat: float

    def scale(self, factor: float) -> 'MacroGoals':
        """Return new goals multiplied by factor."""
        return MacroGoals(
            calories=self.calories * factor,
            protein=self.protein * factor,
            carbs=self.carbs * factor,
            fat=self.fat * factor,
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MacroGoals':
        """
        Raises:
            ValueError: If any of the four targets is missing
        """
        missing = [k for k in ("calories", "protein", "carbs", "fat") if data.get(k) is None]
        if missing:
            raise ValueError(f"Macro goals missing: {', '.join(missing)}")
        return cls(
            calories=float(data["calories"]),
            protein=float(data["protein"]),
            carbs=float(data["carbs"]),
            fat=float(data["fat"]),
        )


@dataclass(frozen=True)
class PhysicalProfile:
    """Physical profile; only fitness_goal influences scoring."""
    gender: Optional[str] = None
    age: Optional[int] = None
    activity_level: Optional[str] = None
    fitness_goal: Optional[FitnessGoal] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PhysicalProfile':
        age = data.get("age")
        return cls(
            gender=data.get("gender"),
            age=int(age) if age is not None else None,
            activity_level=data.get("activity_level"),
            fitness_goal=FitnessGoal.parse(data.get("fitness_goal")),
        )


@dataclass(frozen=True)
class KitchenProfile:
    """
    Cooking capability profile used by the convenience scorer.

    Attributes:
        cooking_skill: "beginner", "intermediate" or "advanced"
        preferred_cook_time: Preferred maximum cook time in minutes
        kitchen_equipment: Available equipment names
        dietary_restrictions: Restriction names
        budget: "low", "medium" or "high"
    """
    cooking_skill: str = "intermediate"
    preferred_cook_time: int = 30
    kitchen_equipment: FrozenSet[str] = frozenset({"oven", "stovetop", "knife", "cutting board"})
    dietary_restrictions: FrozenSet[str] = frozenset()
    budget: str = "medium"

    def __post_init__(self):
        for name in ("kitchen_equipment", "dietary_restrictions"):
            value = getattr(self, name)
            if not isinstance(value, frozenset):
                object.__setattr__(self, name, _frozen(value))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'KitchenProfile':
        default = cls()
        equipment = data.get("kitchen_equipment")
        return cls(
            cooking_skill=data.get("cooking_skill", default.cooking_skill),
            preferred_cook_time=int(data.get("preferred_cook_time", default.preferred_cook_time)),
            kitchen_equipment=default.kitchen_equipment if equipment is None else _frozen(equipment),
            dietary_restrictions=_frozen(data.get("dietary_restrictions")),
            budget=data.get("budget", default.budget),
        )


@dataclass(frozen=True)
class CookTimeContext:
    """
    Situational cooking-time context for the convenience scorer.

    Attributes:
        available_time: Minutes available for cooking
        time_of_day: "morning", "afternoon", "evening" or "night"
        day_type: "weekday" or "weekend"
        urgency: "low", "medium" or "high"
    """
    available_time: int = 45
    time_of_day: str = "evening"
    day_type: str = "weekday"
    urgency: str = "medium"
