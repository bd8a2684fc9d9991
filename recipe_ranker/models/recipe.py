# recipe_ranker/models/recipe.py
"""
Recipe and macro profile models.

Recipes are immutable snapshots for scoring purposes. They are owned by
the storage/generation collaborator and only read by the engine.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, Optional, Tuple


MACRO_KEYS = ("calories", "protein", "carbs", "fat")


def _get_float(data: Dict[str, Any], key_variants: tuple, default: Optional[float] = 0.0) -> Optional[float]:
    """Try multiple key variants and return first parseable value."""
    for key in key_variants:
        if key in data and data[key] is not None:
            try:
                return float(data[key])
            except (ValueError, TypeError):
                pass
    return default


@dataclass(frozen=True)
class MacroProfile:
    """
    Macronutrient profile for one serving of a recipe.

    Attributes:
        calories: Energy in kcal
        protein: Protein in grams
        carbs: Carbohydrates in grams
        fat: Fat in grams
        fiber: Fiber in grams (optional)

    Example:
        >>> macros = MacroProfile(calories=500, protein=25, carbs=50, fat=20)
        >>> macros.as_tuple()
        (500, 25, 50, 20)
    """
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: Optional[float] = None

    def as_tuple(self) -> Tuple[float, float, float, float]:
        """Return (calories, protein, carbs, fat)."""
        return (self.calories, self.protein, self.carbs, self.fat)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary format.

        Returns:
            Dictionary with calories, protein, carbs, fat, fiber keys
        """
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "fiber": self.fiber,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MacroProfile':
        """
        Create from dictionary format.

        Args:
            data: Dictionary with macro values (various key formats supported)

        Returns:
            MacroProfile instance
        """
        return cls(
            calories=_get_float(data, ("calories", "cal")),
            protein=_get_float(data, ("protein", "protein_g", "prot_g")),
            carbs=_get_float(data, ("carbs", "carbs_g", "carbohydrates_g")),
            fat=_get_float(data, ("fat", "fat_g")),
            fiber=_get_float(data, ("fiber", "fiber_g"), default=None),
        )

    def add(self, other: 'MacroProfile') -> 'MacroProfile':
        """
        Add another profile to this one (returns new instance).

        Fiber is summed only when both sides carry it.
        """
        fiber = None
        if self.fiber is not None or other.fiber is not None:
            fiber = (self.fiber or 0.0) + (other.fiber or 0.0)
        return MacroProfile(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
            fiber=fiber,
        )


@dataclass(frozen=True)
class Recipe:
    """
    A candidate recipe.

    Attributes:
        id: Recipe identifier
        title: Display title
        cuisine: Cuisine name (e.g., "Italian")
        cook_time: Total cook time in minutes
        servings: Number of servings
        macros: Per-serving macro profile
        ingredients: Ordered ingredient texts ("2 tbsp olive oil")
        instructions: Ordered instruction texts
        external_id / external_source: Enrichment provenance
        quality_score / popularity_score / health_score: Enrichment scores (0-100)
        aggregate_likes: Like count from the enrichment source
        last_enriched: When enrichment data was last refreshed
    """
    id: str
    title: str
    cuisine: str = ""
    cook_time: int = 0
    servings: int = 1
    macros: MacroProfile = field(default_factory=MacroProfile)
    ingredients: Tuple[str, ...] = ()
    instructions: Tuple[str, ...] = ()

    # Enrichment fields
    external_id: Optional[str] = None
    external_source: Optional[str] = None
    quality_score: Optional[float] = None
    popularity_score: Optional[float] = None
    health_score: Optional[float] = None
    aggregate_likes: Optional[int] = None
    last_enriched: Optional[datetime] = None

    def __post_init__(self):
        """Coerce list inputs to tuples so the snapshot stays hashable."""
        if not isinstance(self.ingredients, tuple):
            object.__setattr__(self, "ingredients", tuple(self.ingredients or ()))
        if not isinstance(self.instructions, tuple):
            object.__setattr__(self, "instructions", tuple(self.instructions or ()))

    # Convenience accessors used throughout the scorers
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

    @property
    def fiber(self) -> float:
        return self.macros.fiber or 0.0

    @property
    def has_external_data(self) -> bool:
        """True when the recipe was enriched from an external source."""
        return bool(self.external_id) and bool(self.external_source)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary (datetimes as ISO strings)."""
        return {
            "id": self.id,
            "title": self.title,
            "cuisine": self.cuisine,
            "cook_time": self.cook_time,
            "servings": self.servings,
            **self.macros.to_dict(),
            "ingredients": list(self.ingredients),
            "instructions": list(self.instructions),
            "external_id": self.external_id,
            "external_source": self.external_source,
            "quality_score": self.quality_score,
            "popularity_score": self.popularity_score,
            "health_score": self.health_score,
            "aggregate_likes": self.aggregate_likes,
            "last_enriched": self.last_enriched.isoformat() if self.last_enriched else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Recipe':
        """
        Create from dictionary format.

        Macros may be given flat or under a "macros" key. Ingredients may
        be plain strings or {"text": ...} dicts.

        Raises:
            ValueError: If 'id' is missing
        """
        if not data.get("id"):
            raise ValueError("Recipe data missing 'id'")

        macro_data = data.get("macros") or data
        last_enriched = data.get("last_enriched")
        if isinstance(last_enriched, str) and last_enriched:
            last_enriched = datetime.fromisoformat(last_enriched)

        likes = data.get("aggregate_likes")

        return cls(
            id=str(data["id"]),
            title=str(data.get("title", "")),
            cuisine=str(data.get("cuisine") or ""),
            cook_time=int(_get_float(data, ("cook_time", "cookTime"))),
            servings=int(_get_float(data, ("servings",), default=1.0)),
            macros=MacroProfile.from_dict(macro_data),
            ingredients=tuple(_text_of(i) for i in data.get("ingredients") or ()),
            instructions=tuple(_text_of(i) for i in data.get("instructions") or ()),
            external_id=data.get("external_id"),
            external_source=data.get("external_source"),
            quality_score=_get_float(data, ("quality_score",), default=None),
            popularity_score=_get_float(data, ("popularity_score",), default=None),
            health_score=_get_float(data, ("health_score",), default=None),
            aggregate_likes=int(likes) if likes is not None else None,
            last_enriched=last_enriched or None,
        )

    def __str__(self) -> str:
        return f"{self.title} ({self.cuisine}, {self.cook_time} min)"


def _text_of(item: Any) -> str:
    """Ingredient/instruction entries may be strings or {'text': ...} dicts."""
    if isinstance(item, dict):
        return str(item.get("text") or item.get("name") or "")
    return str(item)
