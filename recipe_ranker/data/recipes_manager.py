# recipe_ranker/data/recipes_manager.py
"""
Recipes manager for the candidate set.

Manages recipes.csv with id as the lookup key. Ingredient and
instruction texts are stored in one column each, separated by "|".
"""
import pandas as pd
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from recipe_ranker.models.recipe import Recipe
from recipe_ranker.utils.logger import get_logger


logger = get_logger(__name__)

RECIPE_COLUMNS = [
    "id", "title", "cuisine", "cook_time", "servings",
    "calories", "protein", "carbs", "fat", "fiber",
    "ingredients", "instructions",
    "external_id", "external_source", "quality_score", "popularity_score",
    "health_score", "aggregate_likes", "last_enriched",
]

LIST_SEPARATOR = "|"


def split_list_field(value: Any) -> List[str]:
    """
    Split a "|"-separated cell into stripped, non-empty parts.

    Example:
        >>> split_list_field("2 cups pasta | 1 tbsp olive oil")
        ['2 cups pasta', '1 tbsp olive oil']
    """
    if value is None:
        return []
    return [part.strip() for part in str(value).split(LIST_SEPARATOR) if part.strip()]


def row_to_recipe(row: Dict[str, Any]) -> Recipe:
    """
    Convert one CSV row (NaN already replaced by None) into a Recipe.

    Raises:
        ValueError: If the row has no id or unparseable numbers
    """
    data = dict(row)
    data["ingredients"] = split_list_field(row.get("ingredients"))
    data["instructions"] = split_list_field(row.get("instructions"))

    last_enriched = row.get("last_enriched")
    if isinstance(last_enriched, datetime):
        data["last_enriched"] = last_enriched
    elif last_enriched:
        data["last_enriched"] = str(last_enriched).strip()
    else:
        data["last_enriched"] = None

    for key in ("external_id", "external_source"):
        if data.get(key) is not None:
            data[key] = str(data[key]).strip() or None

    return Recipe.from_dict(data)


class RecipesManager:
    """
    Manages the candidate recipe list.

    Keyed by id. The file is optional: a missing file yields an empty
    candidate set. Rows that cannot be parsed are skipped with a warning.
    """

    def __init__(self, filepath: Path):
        """
        Initialize recipes manager.

        Args:
            filepath: Path to recipes CSV file
        """
        self.filepath = Path(filepath)
        self._df = None
        self._recipes: Optional[List[Recipe]] = None
        self.skipped_rows = 0

    def load(self) -> pd.DataFrame:
        """
        Load recipes from disk.

        Returns empty DataFrame if file doesn't exist (optional file).

        Returns:
            DataFrame with one row per recipe
        """
        self._recipes = None
        if not self.filepath.exists():
            logger.warning("Recipes file not found: %s", self.filepath)
            self._df = pd.DataFrame(columns=RECIPE_COLUMNS)
            return self._df

        try:
            self._df = pd.read_csv(self.filepath, dtype={"id": str})
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            logger.warning("Could not read recipes file %s: %s", self.filepath, e)
            self._df = pd.DataFrame(columns=RECIPE_COLUMNS)

        logger.debug("Loaded %d recipe rows from %s", len(self._df), self.filepath)
        return self._df

    @property
    def df(self) -> pd.DataFrame:
        """Get recipes DataFrame (loads if needed)."""
        if self._df is None:
            self.load()
        return self._df

    def get_recipes(self) -> List[Recipe]:
        """
        Get all parseable recipes in file order.

        Returns:
            List of Recipe (bad rows skipped and counted in skipped_rows)
        """
        if self._recipes is not None:
            return list(self._recipes)

        self.skipped_rows = 0
        recipes = []
        if self.df.empty:
            self._recipes = recipes
            return []

        clean = self.df.astype(object).where(pd.notna(self.df), None)
        for line_no, row in enumerate(clean.to_dict("records"), start=2):
            try:
                recipes.append(row_to_recipe(row))
            except (ValueError, TypeError) as e:
                self.skipped_rows += 1
                logger.warning("Skipping recipe row %d in %s: %s", line_no, self.filepath, e)

        if self.skipped_rows:
            logger.info("Loaded %d recipes (%d rows skipped)", len(recipes), self.skipped_rows)
        self._recipes = recipes
        return list(recipes)

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        """
        Get a recipe by id.

        Args:
            recipe_id: Recipe id (exact match after stripping)

        Returns:
            Recipe, or None if not found
        """
        wanted = str(recipe_id).strip()
        for recipe in self.get_recipes():
            if recipe.id == wanted:
                return recipe
        return None

    def get_recipes_by_id(self) -> Dict[str, Recipe]:
        """Map of id -> Recipe."""
        return {recipe.id: recipe for recipe in self.get_recipes()}

    def has_recipe(self, recipe_id: str) -> bool:
        return self.get_recipe(recipe_id) is not None
