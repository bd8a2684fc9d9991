# recipe_ranker/data/interaction_store.py
"""
Interaction store - read-only access to other users' profiles and history.

The collaborative filtering engine only talks to the InteractionStore
interface. DataFrameInteractionStore is the pandas-backed implementation
used by the CLI and tests.

File formats:
    users.csv:         user_id,liked_cuisines,dietary_restrictions,has_macro_goals
    interactions.csv:  user_id,recipe_id,kind,timestamp

List cells are "|"-separated. kind is liked, disliked, saved or consumed.
"""
import pandas as pd
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from recipe_ranker.data.errors import CollaboratorError
from recipe_ranker.data.recipes_manager import split_list_field
from recipe_ranker.models.behavior import InteractionRecord, InteractionType, UserBehaviorData
from recipe_ranker.models.recipe import Recipe
from recipe_ranker.utils.logger import get_logger


logger = get_logger(__name__)

USER_COLUMNS = ["user_id", "liked_cuisines", "dietary_restrictions", "has_macro_goals"]
INTERACTION_COLUMNS = ["user_id", "recipe_id", "kind", "timestamp"]

POSITIVE_KINDS = (InteractionType.LIKED, InteractionType.SAVED, InteractionType.CONSUMED)

_TRUE_STRINGS = {"true", "yes", "1", "y"}


@dataclass(frozen=True)
class StoredUserProfile:
    """
    The slice of a user's profile the similarity measure needs.

    Attributes:
        user_id: User identifier
        liked_cuisines: Lowercased liked cuisine names
        dietary_restrictions: Lowercased restriction names
        has_macro_goals: Whether the user has macro goals set
    """
    user_id: str
    liked_cuisines: FrozenSet[str] = frozenset()
    dietary_restrictions: FrozenSet[str] = frozenset()
    has_macro_goals: bool = False


# Interaction row as returned by get_interactions
Interaction = Tuple[InteractionType, str, datetime]


class InteractionStore(ABC):
    """
    Read-only data access used by collaborative filtering.

    Implementations raise CollaboratorError for any failure. The engine
    never writes through this interface and never retries.
    """

    @abstractmethod
    def get_other_user_ids(self, user_id: str) -> List[str]:
        """All user ids except user_id, in a stable order."""
        pass

    @abstractmethod
    def get_user_profile(self, user_id: str) -> Optional[StoredUserProfile]:
        """Profile for user_id, or None if the user has no preferences on file."""
        pass

    @abstractmethod
    def get_positive_recipe_ids(self, user_id: str) -> Dict[InteractionType, FrozenSet[str]]:
        """Recipe ids per positive interaction kind (liked, saved, consumed)."""
        pass

    @abstractmethod
    def get_recipes(self, recipe_ids: Iterable[str]) -> List[Recipe]:
        """Recipes for the given ids (unknown ids are left out)."""
        pass

    @abstractmethod
    def get_interactions(self, user_id: str) -> List[Interaction]:
        """(kind, recipe_id, timestamp) rows for user_id, oldest first."""
        pass


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return False
    return str(value).strip().lower() in _TRUE_STRINGS


def _lowered(value) -> FrozenSet[str]:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return frozenset()
    return frozenset(part.lower() for part in split_list_field(value))


class DataFrameInteractionStore(InteractionStore):
    """
    InteractionStore backed by pandas DataFrames.

    Args:
        users: DataFrame with USER_COLUMNS
        interactions: DataFrame with INTERACTION_COLUMNS
        recipes: Known recipes (the lookup table for get_recipes)
    """

    def __init__(self, users: pd.DataFrame, interactions: pd.DataFrame,
                 recipes: Iterable[Recipe] = ()):
        self.users = users
        self.interactions = interactions
        self._recipes: Dict[str, Recipe] = {r.id: r for r in recipes}

    @classmethod
    def from_csv(cls, users_file: Path, interactions_file: Path,
                 recipes: Iterable[Recipe] = ()) -> 'DataFrameInteractionStore':
        """
        Load users and interactions from CSV files.

        A missing interactions file is treated as "no history"; a missing
        users file as "no other users".

        Raises:
            CollaboratorError: If a file exists but cannot be parsed
        """
        users = cls._read_csv("load_users", Path(users_file), USER_COLUMNS)
        interactions = cls._read_csv("load_interactions", Path(interactions_file), INTERACTION_COLUMNS)
        logger.debug("Interaction store: %d users, %d interactions", len(users), len(interactions))
        return cls(users, interactions, recipes)

    @staticmethod
    def _read_csv(operation: str, filepath: Path, columns: List[str]) -> pd.DataFrame:
        if not filepath.exists():
            logger.warning("%s: file not found: %s", operation, filepath)
            return pd.DataFrame(columns=columns)
        try:
            df = pd.read_csv(filepath, dtype={"user_id": str, "recipe_id": str})
        except (pd.errors.ParserError, pd.errors.EmptyDataError, OSError, UnicodeDecodeError) as e:
            raise CollaboratorError(operation, f"cannot read {filepath}: {e}") from e

        missing = [c for c in columns if c not in df.columns]
        if missing:
            raise CollaboratorError(operation, f"{filepath} missing columns: {', '.join(missing)}")
        return df

    # =========================================================================
    # InteractionStore
    # =========================================================================

    def get_other_user_ids(self, user_id: str) -> List[str]:
        try:
            ids = self.users["user_id"].astype(str).str.strip()
            return [uid for uid in ids.tolist() if uid != str(user_id)]
        except (KeyError, AttributeError) as e:
            raise CollaboratorError("get_other_user_ids", str(e)) from e

    def get_user_profile(self, user_id: str) -> Optional[StoredUserProfile]:
        try:
            match = self.users[self.users["user_id"].astype(str).str.strip() == str(user_id)]
            if match.empty:
                return None
            row = match.iloc[0]
            return StoredUserProfile(
                user_id=str(user_id),
                liked_cuisines=_lowered(row.get("liked_cuisines")),
                dietary_restrictions=_lowered(row.get("dietary_restrictions")),
                has_macro_goals=_parse_bool(row.get("has_macro_goals")),
            )
        except (KeyError, AttributeError, TypeError) as e:
            raise CollaboratorError("get_user_profile", str(e)) from e

    def get_positive_recipe_ids(self, user_id: str) -> Dict[InteractionType, FrozenSet[str]]:
        try:
            rows = self._rows_for(user_id)
            kinds = rows["kind"].astype(str).str.strip().str.lower()
            recipe_ids = rows["recipe_id"].astype(str).str.strip()
            return {
                kind: frozenset(recipe_ids[kinds == kind.value].tolist())
                for kind in POSITIVE_KINDS
            }
        except (KeyError, AttributeError) as e:
            raise CollaboratorError("get_positive_recipe_ids", str(e)) from e

    def get_recipes(self, recipe_ids: Iterable[str]) -> List[Recipe]:
        return [self._recipes[rid] for rid in recipe_ids if rid in self._recipes]

    def get_interactions(self, user_id: str) -> List[Interaction]:
        try:
            rows = self._rows_for(user_id)
            result = []
            for _, row in rows.iterrows():
                kind = InteractionType(str(row["kind"]).strip().lower())
                timestamp = pd.Timestamp(row["timestamp"]).to_pydatetime()
                result.append((kind, str(row["recipe_id"]).strip(), timestamp))
        except (KeyError, ValueError, TypeError) as e:
            raise CollaboratorError("get_interactions", str(e)) from e

        result.sort(key=lambda item: item[2])
        return result

    def _rows_for(self, user_id: str) -> pd.DataFrame:
        return self.interactions[self.interactions["user_id"].astype(str).str.strip() == str(user_id)]


def build_behavior_data(store: InteractionStore, user_id: str,
                        recipes: Optional[Iterable[Recipe]] = None) -> UserBehaviorData:
    """
    Build a user's behavior history from the store.

    Each interaction is snapshotted against its recipe. Interactions with
    recipes that cannot be found are skipped.

    Args:
        store: Interaction store
        user_id: User whose history to build
        recipes: Recipe lookup table (defaults to store.get_recipes)

    Returns:
        UserBehaviorData with records oldest first
    """
    interactions = store.get_interactions(user_id)
    if recipes is None:
        lookup = {r.id: r for r in store.get_recipes({rid for _, rid, _ in interactions})}
    else:
        lookup = {r.id: r for r in recipes}

    records = []
    missing = 0
    for kind, recipe_id, timestamp in interactions:
        recipe = lookup.get(recipe_id)
        if recipe is None:
            missing += 1
            continue
        records.append(InteractionRecord.from_recipe(kind, recipe, timestamp))

    if missing:
        logger.warning("User %s: %d interactions reference unknown recipes", user_id, missing)
    return UserBehaviorData.from_records(records)
