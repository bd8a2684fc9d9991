# recipe_ranker/data/profile_manager.py
"""
User profile manager for the requesting user's scoring inputs.

Manages a user profile JSON file with preferences, macro goals,
physical profile, kitchen profile and cook-time context. Every section
is optional; a missing section leaves that part of the scoring context
empty, and the scorers fall back to neutral scores.

Expected structure:
{
    "user_id": "u1",
    "preferences": {"liked_cuisines": [...], "banned_ingredients": [...], ...},
    "macro_goals": {"calories": 2000, "protein": 150, "carbs": 200, "fat": 70},
    "physical_profile": {"fitness_goal": "gain_muscle", ...},
    "kitchen_profile": {"cooking_skill": "beginner", ...},
    "cook_time_context": {"available_time": 30, "urgency": "high", ...}
}
"""
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from recipe_ranker.models.preferences import (
    CookTimeContext, KitchenProfile, MacroGoals, PhysicalProfile, UserPreferences,
)
from recipe_ranker.utils.logger import get_logger


logger = get_logger(__name__)

KNOWN_SECTIONS = (
    "preferences", "macro_goals", "physical_profile", "kitchen_profile", "cook_time_context",
)


class ProfileManager:
    """
    Loads and validates one user profile.

    Invalid sections are reported but don't block the others.
    """

    def __init__(self, filepath: Path):
        """
        Initialize profile manager.

        Args:
            filepath: Path to user profile JSON file
        """
        self.filepath = Path(filepath)
        self._profile: Optional[Dict[str, Any]] = None
        self._validation_errors: List[str] = []
        self._is_valid = False

    def load(self) -> bool:
        """
        Load and validate the profile from disk.

        Returns:
            True if loaded (possibly with section warnings), False otherwise
        """
        self._validation_errors.clear()
        self._is_valid = False
        self._profile = None

        if not self.filepath.exists():
            self._validation_errors.append(f"User profile not found: {self.filepath}")
            return False

        try:
            with open(self.filepath, 'r', encoding='utf-8') as f:
                self._profile = json.load(f)
        except json.JSONDecodeError as e:
            self._validation_errors.append(f"Invalid JSON in user profile: {e}")
            return False
        except OSError as e:
            self._validation_errors.append(f"Error reading user profile: {e}")
            return False

        if not isinstance(self._profile, dict):
            self._validation_errors.append("User profile must be a JSON object")
            self._profile = None
            return False

        self._validate_structure()
        for warning in self._validation_errors:
            logger.warning("User profile %s: %s", self.filepath, warning)

        self._is_valid = True
        return True

    def _validate_structure(self) -> None:
        """Lenient checks: wrong section types are reported, unknown keys ignored."""
        for section in KNOWN_SECTIONS:
            value = self._profile.get(section)
            if value is not None and not isinstance(value, dict):
                self._validation_errors.append(f"'{section}' must be an object")

        goals = self._profile.get("macro_goals")
        if isinstance(goals, dict):
            try:
                MacroGoals.from_dict(goals)
            except (ValueError, TypeError) as e:
                self._validation_errors.append(f"macro_goals: {e}")

        physical = self._profile.get("physical_profile")
        if isinstance(physical, dict):
            try:
                PhysicalProfile.from_dict(physical)
            except (ValueError, TypeError) as e:
                self._validation_errors.append(f"physical_profile: {e}")

    @property
    def is_valid(self) -> bool:
        """Check if the profile is loaded."""
        return self._is_valid

    @property
    def validation_errors(self) -> List[str]:
        """Get list of validation error messages."""
        return self._validation_errors.copy()

    def get_error_message(self) -> str:
        """Get formatted error message for display."""
        if not self._validation_errors:
            return "User profile not loaded"

        if len(self._validation_errors) == 1:
            return self._validation_errors[0]

        return f"User profile has {len(self._validation_errors)} issues"

    @property
    def profile(self) -> Optional[Dict[str, Any]]:
        """Get raw profile dict (None if not loaded)."""
        return self._profile if self._is_valid else None

    # =========================================================================
    # Typed sections
    # =========================================================================

    def _section(self, name: str) -> Optional[Dict[str, Any]]:
        if not self.is_valid:
            return None
        value = self._profile.get(name)
        return value if isinstance(value, dict) else None

    @property
    def user_id(self) -> Optional[str]:
        if not self.is_valid:
            return None
        user_id = self._profile.get("user_id")
        return str(user_id) if user_id is not None else None

    def get_preferences(self) -> Optional[UserPreferences]:
        data = self._section("preferences")
        return UserPreferences.from_dict(data) if data is not None else None

    def get_macro_goals(self) -> Optional[MacroGoals]:
        data = self._section("macro_goals")
        if data is None:
            return None
        try:
            return MacroGoals.from_dict(data)
        except (ValueError, TypeError):
            return None

    def get_physical_profile(self) -> Optional[PhysicalProfile]:
        data = self._section("physical_profile")
        if data is None:
            return None
        try:
            return PhysicalProfile.from_dict(data)
        except (ValueError, TypeError):
            return None

    def get_kitchen_profile(self) -> Optional[KitchenProfile]:
        data = self._section("kitchen_profile")
        return KitchenProfile.from_dict(data) if data is not None else None

    def get_cook_time_context(self) -> Optional[CookTimeContext]:
        data = self._section("cook_time_context")
        if data is None:
            return None
        default = CookTimeContext()
        return CookTimeContext(
            available_time=int(data.get("available_time", default.available_time)),
            time_of_day=data.get("time_of_day", default.time_of_day),
            day_type=data.get("day_type", default.day_type),
            urgency=data.get("urgency", default.urgency),
        )
