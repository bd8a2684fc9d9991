"""
Data access for the recipe ranking engine.

errors is imported first: the models package depends on it.
"""
from .errors import RecipeRankerError, ConfigError, CollaboratorError
from .recipes_manager import RecipesManager
from .interaction_store import (
    InteractionStore,
    DataFrameInteractionStore,
    StoredUserProfile,
    build_behavior_data,
)
from .profile_manager import ProfileManager

__all__ = [
    'RecipeRankerError',
    'ConfigError',
    'CollaboratorError',
    'RecipesManager',
    'InteractionStore',
    'DataFrameInteractionStore',
    'StoredUserProfile',
    'build_behavior_data',
    'ProfileManager',
]
