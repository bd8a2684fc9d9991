# recipe_ranker/taxonomy/dietary.py
"""
Keyword heuristics for banned ingredients and dietary restrictions.

These are deliberately simple substring checks over ingredient text;
no structured ingredient data is assumed.
"""
from typing import Dict, Iterable, List, Optional, Tuple


NON_VEGETARIAN_KEYWORDS: Tuple[str, ...] = (
    "chicken", "beef", "pork", "fish", "meat", "seafood",
)

NON_VEGAN_KEYWORDS: Tuple[str, ...] = (
    "milk", "cheese", "butter", "eggs", "honey", "yogurt",
)

DAIRY_KEYWORDS: Tuple[str, ...] = (
    "milk", "cheese", "butter", "cream", "yogurt", "sour cream",
    "whey", "casein", "lactose", "ghee", "buttermilk",
)

# Restriction name -> keywords that violate it. Vegan inherits vegetarian.
RESTRICTION_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "vegetarian": NON_VEGETARIAN_KEYWORDS,
    "vegan": NON_VEGETARIAN_KEYWORDS + NON_VEGAN_KEYWORDS,
    "dairy-free": DAIRY_KEYWORDS,
}

# Accept common spellings of restriction names
_RESTRICTION_ALIASES: Dict[str, str] = {
    "dairy free": "dairy-free",
    "dairy_free": "dairy-free",
    "dairyfree": "dairy-free",
    "no dairy": "dairy-free",
}


def normalize_restriction(name: str) -> str:
    """Lowercase and map aliases ("dairy free" -> "dairy-free")."""
    key = str(name).strip().lower()
    return _RESTRICTION_ALIASES.get(key, key)


def _contains_any(ingredients: Iterable[str], keywords: Iterable[str]) -> bool:
    lowered = [text.lower() for text in ingredients]
    keys = [k.lower() for k in keywords if k]
    return any(k in text for text in lowered for k in keys)


def find_banned_ingredient(ingredients: Iterable[str], banned: Iterable[str]) -> Optional[str]:
    """
    First banned substring found in any ingredient (case-insensitive).

    Args:
        ingredients: Ingredient texts
        banned: Banned substrings

    Returns:
        The matching banned entry, or None
    """
    lowered = [text.lower() for text in ingredients]
    for entry in banned:
        needle = str(entry).strip().lower()
        if needle and any(needle in text for text in lowered):
            return entry
    return None


def contains_banned_ingredient(ingredients: Iterable[str], banned: Iterable[str]) -> bool:
    """True if any banned substring occurs in any ingredient."""
    return find_banned_ingredient(ingredients, banned) is not None


def is_non_vegetarian(ingredients: Iterable[str]) -> bool:
    return _contains_any(ingredients, NON_VEGETARIAN_KEYWORDS)


def is_non_vegan(ingredients: Iterable[str]) -> bool:
    return _contains_any(ingredients, RESTRICTION_KEYWORDS["vegan"])


def contains_dairy(ingredients: Iterable[str]) -> bool:
    return _contains_any(ingredients, DAIRY_KEYWORDS)


def violated_restrictions(ingredients: Iterable[str], restrictions: Iterable[str]) -> List[str]:
    """
    Restrictions the ingredient list violates.

    Unknown restriction names (e.g. "low-sodium") have no keyword
    heuristic and are never reported as violated.

    Args:
        ingredients: Ingredient texts
        restrictions: Restriction names

    Returns:
        Sorted list of normalized restriction names that are violated
    """
    ingredients = list(ingredients)
    violated = set()
    for restriction in restrictions:
        name = normalize_restriction(restriction)
        keywords = RESTRICTION_KEYWORDS.get(name)
        if keywords and _contains_any(ingredients, keywords):
            violated.add(name)
    return sorted(violated)
