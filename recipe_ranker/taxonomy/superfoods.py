# recipe_ranker/taxonomy/superfoods.py
"""
Superfood detection from free-text ingredient strings.

Aliases are matched as whole phrases with word boundaries, so "olive oil"
matches "2 tbsp extra virgin olive oil" but nothing matches inside
"olive garden dressing" or "olives".
"""
import re
from typing import Dict, FrozenSet, Iterable, List, Pattern, Set


# Category id -> aliases (lowercase)
SUPERFOODS: Dict[str, List[str]] = {
    # Legumes
    "beans": ["beans", "black beans", "kidney beans", "pinto beans", "navy beans",
              "chickpeas", "garbanzo beans", "lentils", "lentil", "black-eyed peas",
              "cannellini beans", "white beans"],

    # Healthy fats
    "oliveOil": ["olive oil", "extra virgin olive oil", "evoo", "virgin olive oil"],

    # Fermented
    "fermented": ["kimchi", "sauerkraut", "yogurt", "greek yogurt", "kefir", "miso",
                  "tempeh", "kombucha", "fermented"],

    # Spices
    "ginger": ["ginger", "fresh ginger", "ginger root", "ground ginger"],
    "turmeric": ["turmeric", "curcumin"],

    # Omega-3 fish
    "cod": ["cod", "cod fish", "cod fillet"],
    "sardines": ["sardines", "sardine", "canned sardines"],
    "salmon": ["salmon", "salmon fillet", "wild salmon", "atlantic salmon", "pacific salmon"],
    "mackerel": ["mackerel", "mackerel fillet"],
    "herring": ["herring", "herring fillet"],

    # Berries
    "blueberries": ["blueberries", "blueberry", "wild blueberries"],
    "strawberries": ["strawberries", "strawberry"],
    "raspberries": ["raspberries", "raspberry"],
    "blackberries": ["blackberries", "blackberry"],

    # Leafy greens
    "spinach": ["spinach", "baby spinach", "fresh spinach"],
    "kale": ["kale", "curly kale", "lacinato kale"],
    "arugula": ["arugula", "rocket"],

    # Nuts and seeds
    "almonds": ["almonds", "almond", "sliced almonds", "almond butter"],
    "walnuts": ["walnuts", "walnut", "walnut pieces"],
    "chiaSeeds": ["chia seeds", "chia seed", "chia"],
    "flaxSeeds": ["flax seeds", "flaxseed", "ground flaxseed", "flax"],

    # Whole grains
    "quinoa": ["quinoa", "quinoa grain"],
    "oats": ["oats", "rolled oats", "steel-cut oats", "oatmeal"],
    "brownRice": ["brown rice", "whole grain rice"],

    # Other
    "avocado": ["avocado", "avocados", "avocado oil"],
    "sweetPotato": ["sweet potato", "sweet potatoes", "yam"],
    "broccoli": ["broccoli", "broccoli florets", "broccoli crown"],
    "garlic": ["garlic", "garlic cloves", "minced garlic", "garlic powder"],
}

# Display metadata for UI selection lists
SUPERFOOD_LABELS: Dict[str, tuple] = {
    "beans": ("Beans & Legumes", "Black beans, chickpeas, lentils, etc."),
    "oliveOil": ("Olive Oil", "Extra virgin olive oil and healthy fats"),
    "fermented": ("Fermented Foods", "Kimchi, yogurt, sauerkraut, miso, etc."),
    "ginger": ("Ginger", "Fresh or ground ginger"),
    "turmeric": ("Turmeric", "Turmeric and curcumin"),
    "cod": ("Cod", "Cod fish (Omega-3 rich)"),
    "sardines": ("Sardines", "Sardines (Omega-3 rich)"),
    "salmon": ("Salmon", "Salmon (Omega-3 rich)"),
    "mackerel": ("Mackerel", "Mackerel (Omega-3 rich)"),
    "herring": ("Herring", "Herring (Omega-3 rich)"),
    "blueberries": ("Blueberries", "Blueberries and other berries"),
    "strawberries": ("Strawberries", "Strawberries"),
    "raspberries": ("Raspberries", "Raspberries"),
    "blackberries": ("Blackberries", "Blackberries"),
    "spinach": ("Spinach", "Spinach and leafy greens"),
    "kale": ("Kale", "Kale"),
    "arugula": ("Arugula", "Arugula/rocket"),
    "almonds": ("Almonds", "Almonds and almond products"),
    "walnuts": ("Walnuts", "Walnuts"),
    "chiaSeeds": ("Chia Seeds", "Chia seeds"),
    "flaxSeeds": ("Flax Seeds", "Flax seeds"),
    "quinoa": ("Quinoa", "Quinoa"),
    "oats": ("Oats", "Oats and oatmeal"),
    "brownRice": ("Brown Rice", "Brown rice"),
    "avocado": ("Avocado", "Avocado and avocado oil"),
    "sweetPotato": ("Sweet Potato", "Sweet potatoes/yams"),
    "broccoli": ("Broccoli", "Broccoli"),
    "garlic": ("Garlic", "Garlic"),
}


def _compile(aliases: Iterable[str]) -> List[Pattern]:
    return [re.compile(r"\b" + re.escape(alias) + r"\b", re.IGNORECASE) for alias in aliases]


# Compiled once at import; category order follows SUPERFOODS
_PATTERNS: Dict[str, List[Pattern]] = {
    category: _compile(aliases) for category, aliases in SUPERFOODS.items()
}


def detect_superfoods(ingredient_text: str) -> List[str]:
    """
    Detect superfood categories in one ingredient string.

    Args:
        ingredient_text: e.g. "2 tbsp olive oil"

    Returns:
        Category ids in SUPERFOODS order, each at most once
    """
    if not ingredient_text:
        return []

    detected = []
    for category, patterns in _PATTERNS.items():
        if any(p.search(ingredient_text) for p in patterns):
            detected.append(category)
    return detected


def detect_recipe_superfoods(ingredients: Iterable[str]) -> Set[str]:
    """
    Detect all superfood categories across a recipe's ingredients.

    Args:
        ingredients: Ingredient texts

    Returns:
        Set of unique category ids
    """
    found: Set[str] = set()
    for text in ingredients:
        found.update(detect_superfoods(text))
    return found


def superfood_boost(ingredients: Iterable[str], preferred: FrozenSet[str]) -> float:
    """
    Fraction of the user's preferred superfoods present in the recipe.

    boost = min(1, matched / preferred_count), floored at 0.2 when at
    least one preferred category matched, 0 otherwise.

    Args:
        ingredients: Recipe ingredient texts
        preferred: Preferred category ids

    Returns:
        Boost in [0, 1]
    """
    if not preferred:
        return 0.0

    matched = len(detect_recipe_superfoods(ingredients) & set(preferred))
    if matched == 0:
        return 0.0

    return max(0.2, min(1.0, matched / len(preferred)))


def get_all_superfood_categories() -> List[Dict[str, str]]:
    """
    All categories for UI selection.

    Returns:
        List of {"id", "name", "description"} dicts in SUPERFOODS order
    """
    return [
        {"id": category, "name": SUPERFOOD_LABELS[category][0],
         "description": SUPERFOOD_LABELS[category][1]}
        for category in SUPERFOODS
    ]
