# recipe_ranker/models/engine_config.py
"""
Configuration adapter for the ranking engine.

Reads and validates the 'ranking' block from the engine config JSON,
providing typed access to all tunable parameters. Validates eagerly on
construction so configuration errors surface before a ranking pass starts.

Expected config structure:
{
    "ranking": {
        "max_workers": null,
        "executor": "thread",
        "min_sample_size": 10,
        "user_similarity_threshold": 0.3,
        "max_similar_users": 20,
        "recipe_similarity_threshold": 0.4,
        "max_similar_recipes": 10,
        "meal_slots": ["breakfast", "lunch", "dinner", "snack"],
        "meal_distribution": {
            "breakfast": 0.25,
            "lunch": 0.35,
            "dinner": 0.30,
            "snack": 0.10,
            "dessert": 0.08
        }
    }
}
"""
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from recipe_ranker.data.errors import ConfigError


DEFAULT_MEAL_DISTRIBUTION: Dict[str, float] = {
    "breakfast": 0.25,
    "lunch": 0.35,
    "dinner": 0.30,
    "snack": 0.10,
    "dessert": 0.08,
}

DEFAULT_MEAL_SLOTS: List[str] = ["breakfast", "lunch", "dinner", "snack"]

EXECUTOR_KINDS = ("thread", "process")


@dataclass
class EngineConfig:
    """
    Typed access to the 'ranking' block.

    All parameters have defaults so an empty block (or no file at all)
    yields a working engine.
    """
    # Worker pool
    max_workers: Optional[int] = None  # None = os.cpu_count()
    executor: str = "thread"

    # Weight learning
    min_sample_size: int = 10

    # Collaborative filtering
    user_similarity_threshold: float = 0.3
    max_similar_users: int = 20
    recipe_similarity_threshold: float = 0.4
    max_similar_recipes: int = 10

    # Daily planning
    meal_slots: List[str] = field(default_factory=lambda: list(DEFAULT_MEAL_SLOTS))
    meal_distribution: Dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_MEAL_DISTRIBUTION)
    )

    @property
    def worker_count(self) -> int:
        """Resolved pool size (at least 1)."""
        return max(1, self.max_workers or os.cpu_count() or 1)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> 'EngineConfig':
        """
        Extract and validate the 'ranking' block.

        Accepts either the full config dict (looks for 'ranking' key)
        or just the ranking sub-dict directly.

        Args:
            config: Full config dict or ranking sub-dict

        Returns:
            Validated EngineConfig instance

        Raises:
            ConfigError: If the block is malformed or contains invalid values
        """
        block = config.get("ranking", config) if isinstance(config, dict) else config
        if not isinstance(block, dict):
            raise ConfigError("'ranking' config must be a dict")

        distribution = dict(DEFAULT_MEAL_DISTRIBUTION)
        overrides = block.get("meal_distribution", {})
        if not isinstance(overrides, dict):
            raise ConfigError("meal_distribution must be a dict of slot -> share")
        distribution.update(overrides)

        defaults = cls()
        instance = cls(
            max_workers=block.get("max_workers", defaults.max_workers),
            executor=block.get("executor", defaults.executor),
            min_sample_size=block.get("min_sample_size", defaults.min_sample_size),
            user_similarity_threshold=block.get(
                "user_similarity_threshold", defaults.user_similarity_threshold),
            max_similar_users=block.get("max_similar_users", defaults.max_similar_users),
            recipe_similarity_threshold=block.get(
                "recipe_similarity_threshold", defaults.recipe_similarity_threshold),
            max_similar_recipes=block.get("max_similar_recipes", defaults.max_similar_recipes),
            meal_slots=list(block.get("meal_slots", defaults.meal_slots)),
            meal_distribution=distribution,
        )

        errors = instance.validate()
        if errors:
            error_msg = "Engine config validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            raise ConfigError(error_msg)

        return instance

    @classmethod
    def from_file(cls, filepath: Path) -> 'EngineConfig':
        """
        Load from a JSON file. A missing file yields defaults.

        Raises:
            ConfigError: If the file exists but is not valid JSON or fails validation
        """
        if not filepath.exists():
            return cls()
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in engine config {filepath}: {e}") from e
        return cls.from_config(data)

    def validate(self) -> List[str]:
        """
        Validate all config values.

        Returns:
            List of error messages. Empty list means valid.
        """
        errors = []

        if self.max_workers is not None and (
                not isinstance(self.max_workers, int) or self.max_workers < 1):
            errors.append(f"max_workers must be null or integer >= 1, got {self.max_workers}")

        if self.executor not in EXECUTOR_KINDS:
            errors.append(f"executor must be one of {EXECUTOR_KINDS}, got {self.executor!r}")

        if not isinstance(self.min_sample_size, int) or self.min_sample_size < 1:
            errors.append(f"min_sample_size must be integer >= 1, got {self.min_sample_size}")

        for name, value in [("user_similarity_threshold", self.user_similarity_threshold),
                            ("recipe_similarity_threshold", self.recipe_similarity_threshold)]:
            if not isinstance(value, (int, float)) or value < 0.0 or value > 1.0:
                errors.append(f"{name} must be 0.0-1.0, got {value}")

        for name, value in [("max_similar_users", self.max_similar_users),
                            ("max_similar_recipes", self.max_similar_recipes)]:
            if not isinstance(value, int) or value < 1:
                errors.append(f"{name} must be integer >= 1, got {value}")

        if not self.meal_slots:
            errors.append("meal_slots must list at least one slot")
        for slot in self.meal_slots:
            if slot not in self.meal_distribution:
                errors.append(f"meal slot '{slot}' has no entry in meal_distribution")

        for slot, share in self.meal_distribution.items():
            if not isinstance(share, (int, float)) or share <= 0.0:
                errors.append(f"meal_distribution['{slot}'] must be > 0, got {share}")

        return errors
