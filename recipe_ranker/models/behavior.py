# recipe_ranker/models/behavior.py
"""
Interaction history models.

Each InteractionRecord carries a denormalized snapshot of the recipe it
refers to, so behavioral scoring never has to look recipes up again.
UserBehaviorData is the aggregate of all records for one user.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Iterable, List, Set, Tuple

from recipe_ranker.models.recipe import MacroProfile, Recipe


class InteractionType(Enum):
    """Kind of interaction a user had with a recipe."""
    LIKED = "liked"
    DISLIKED = "disliked"
    SAVED = "saved"
    CONSUMED = "consumed"

    @property
    def is_positive(self) -> bool:
        """Liked, saved and consumed all count as positive engagement."""
        return self is not InteractionType.DISLIKED


@dataclass(frozen=True)
class InteractionRecord:
    """
    One user interaction with a recipe snapshot.

    Attributes:
        kind: InteractionType
        recipe_id: Interacted recipe id
        timestamp: When the interaction happened
        cuisine / cook_time / macros / ingredients: Recipe snapshot
    """
    kind: InteractionType
    recipe_id: str
    timestamp: datetime
    cuisine: str = ""
    cook_time: int = 0
    macros: MacroProfile = field(default_factory=MacroProfile)
    ingredients: Tuple[str, ...] = ()

    def __post_init__(self):
        if not isinstance(self.ingredients, tuple):
            object.__setattr__(self, "ingredients", tuple(self.ingredients or ()))

    @property
    def calories(self) -> float:
        return self.macros.calories

    @property
    def protein(self) -> float:
        return self.macros.protein

    @property
    def carbs(self) -> float:
        return self.macros.carbs

    @property
    def fat(self) -> float:
        return self.macros.fat

    @classmethod
    def from_recipe(cls, kind: InteractionType, recipe: Recipe,
                    timestamp: datetime) -> 'InteractionRecord':
        """Snapshot a Recipe into an interaction record."""
        return cls(
            kind=kind,
            recipe_id=recipe.id,
            timestamp=timestamp,
            cuisine=recipe.cuisine,
            cook_time=recipe.cook_time,
            macros=recipe.macros,
            ingredients=recipe.ingredients,
        )


@dataclass(frozen=True)
class UserBehaviorData:
    """
    All interaction records for one user.

    Append-only from the caller's perspective; scorers only read.
    """
    records: Tuple[InteractionRecord, ...] = ()

    def __post_init__(self):
        if not isinstance(self.records, tuple):
            object.__setattr__(self, "records", tuple(self.records))

    @classmethod
    def from_records(cls, records: Iterable[InteractionRecord]) -> 'UserBehaviorData':
        return cls(records=tuple(records))

    def _of_kind(self, kind: InteractionType) -> List[InteractionRecord]:
        return [r for r in self.records if r.kind is kind]

    @property
    def liked(self) -> List[InteractionRecord]:
        return self._of_kind(InteractionType.LIKED)

    @property
    def disliked(self) -> List[InteractionRecord]:
        return self._of_kind(InteractionType.DISLIKED)

    @property
    def saved(self) -> List[InteractionRecord]:
        return self._of_kind(InteractionType.SAVED)

    @property
    def consumed(self) -> List[InteractionRecord]:
        return self._of_kind(InteractionType.CONSUMED)

    @property
    def positive(self) -> List[InteractionRecord]:
        """Liked, then saved, then consumed records."""
        return self.liked + self.saved + self.consumed

    @property
    def is_empty(self) -> bool:
        return len(self.records) == 0

    def recipe_ids(self, *kinds: InteractionType) -> Set[str]:
        """Unique recipe ids for the given kinds (all kinds if none given)."""
        wanted = set(kinds) if kinds else set(InteractionType)
        return {r.recipe_id for r in self.records if r.kind in wanted}

    def positive_recipe_ids(self) -> Set[str]:
        return self.recipe_ids(InteractionType.LIKED, InteractionType.SAVED,
                               InteractionType.CONSUMED)

    def negative_recipe_ids(self) -> Set[str]:
        return self.recipe_ids(InteractionType.DISLIKED)

    def counts(self) -> Dict[str, int]:
        """Record counts per interaction kind."""
        return {kind.value: len(self._of_kind(kind)) for kind in InteractionType}

    def __len__(self) -> int:
        return len(self.records)
