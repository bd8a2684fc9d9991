# recipe_ranker/data/errors.py
"""
Exception types raised by the ranking engine.

Missing or degenerate scoring inputs are never errors (they degrade to
neutral scores). Only unusable configuration and collaborator failures
are raised.
"""


class RecipeRankerError(Exception):
    """Base class for all engine errors."""


class ConfigError(RecipeRankerError, ValueError):
    """Engine configuration is missing or invalid."""


class CollaboratorError(RecipeRankerError):
    """
    A data-access collaborator failed or returned unusable data.

    Raised with the original exception chained so callers can decide
    whether to retry. The engine itself never retries.

    Attributes:
        operation: Collaborator operation that failed (e.g. "get_recipes")
    """

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"{operation}: {message}")
