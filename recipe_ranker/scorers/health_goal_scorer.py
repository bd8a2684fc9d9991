# recipe_ranker/scorers/health_goal_scorer.py
"""
Health Goal Scorer - evaluates recipes against the user's fitness goal.

Sub-scores (weights):
- calorie_alignment (.30)
- protein_alignment (.35)
- macro_balance (.20): energy share of protein/carbs/fat per goal
- nutrient_density (.15): protein and fiber per calorie

Calorie and protein alignment are tiered per goal. With macro goals the
tiers compare against the target; without them (or with a target of 0)
general per-meal bands are used. All tiers are lookup data below: each
entry is (condition, score), the first matching condition wins and the
last entry is the fallback.
"""
from typing import Callable, Dict, List, Optional, Tuple

from .base_scorer import Scorer, clamp_score, round_score
from recipe_ranker.models.preferences import FitnessGoal, MacroGoals
from recipe_ranker.models.recipe import Recipe
from recipe_ranker.models.scoring_context import ScoringContext, ScoreResult, NEUTRAL_SCORE


HEALTH_GOAL_WEIGHTS = {
    "calorie_alignment": 0.30,
    "protein_alignment": 0.35,
    "macro_balance": 0.20,
    "nutrient_density": 0.15,
}

# condition(value, target, pct_difference) -> bool
TargetTier = Tuple[Callable[[float, float, float], bool], int]
# condition(value) -> bool
GeneralTier = Tuple[Callable[[float], bool], int]


def _otherwise_vs_target(value: float, target: float, pct: float) -> bool:
    return True


def _otherwise(value: float) -> bool:
    return True


# =============================================================================
# Calorie alignment
# =============================================================================

CALORIE_TARGET_TIERS: Dict[FitnessGoal, List[TargetTier]] = {
    # Slightly under target is best for weight loss
    FitnessGoal.LOSE_WEIGHT: [
        (lambda v, t, pct: v <= t * 0.95, 100),
        (lambda v, t, pct: v <= t, 90),
        (lambda v, t, pct: pct <= 10, 70),
        (lambda v, t, pct: pct <= 20, 50),
        (_otherwise_vs_target, 30),
    ],
    # At or slightly over target supports muscle building
    FitnessGoal.GAIN_MUSCLE: [
        (lambda v, t, pct: t * 0.95 <= v <= t * 1.1, 100),
        (lambda v, t, pct: v >= t * 0.85, 85),
        (lambda v, t, pct: pct <= 15, 70),
        (lambda v, t, pct: v < t * 0.85, 40),
        (_otherwise_vs_target, 60),
    ],
    FitnessGoal.GAIN_WEIGHT: [
        (lambda v, t, pct: v >= t, 100),
        (lambda v, t, pct: v >= t * 0.9, 85),
        (lambda v, t, pct: v >= t * 0.8, 70),
        (_otherwise_vs_target, 50),
    ],
    FitnessGoal.MAINTAIN: [
        (lambda v, t, pct: pct <= 5, 100),
        (lambda v, t, pct: pct <= 10, 85),
        (lambda v, t, pct: pct <= 20, 70),
        (_otherwise_vs_target, 50),
    ],
}

CALORIE_GENERAL_TIERS: Dict[FitnessGoal, List[GeneralTier]] = {
    FitnessGoal.LOSE_WEIGHT: [
        (lambda v: 300 <= v <= 500, 100),
        (lambda v: 250 <= v <= 600, 80),
        (lambda v: v < 300, 70),
        (_otherwise, 40),
    ],
    FitnessGoal.GAIN_MUSCLE: [
        (lambda v: 400 <= v <= 700, 100),
        (lambda v: 350 <= v <= 800, 80),
        (lambda v: v < 350, 50),
        (_otherwise, 70),
    ],
    FitnessGoal.GAIN_WEIGHT: [
        (lambda v: 500 <= v <= 800, 100),
        (lambda v: v >= 400, 80),
        (_otherwise, 50),
    ],
    FitnessGoal.MAINTAIN: [
        (lambda v: 400 <= v <= 600, 100),
        (lambda v: 300 <= v <= 700, 80),
        (_otherwise, 60),
    ],
}


# =============================================================================
# Protein alignment
# =============================================================================

PROTEIN_TARGET_TIERS: Dict[FitnessGoal, List[TargetTier]] = {
    FitnessGoal.LOSE_WEIGHT: [
        (lambda v, t, pct: v >= t, 100),
        (lambda v, t, pct: v >= t * 0.85, 85),
        (lambda v, t, pct: v >= t * 0.7, 70),
        (_otherwise_vs_target, 50),
    ],
    FitnessGoal.GAIN_MUSCLE: [
        (lambda v, t, pct: v >= t, 100),
        (lambda v, t, pct: v >= t * 0.9, 90),
        (lambda v, t, pct: v >= t * 0.75, 75),
        (_otherwise_vs_target, 40),
    ],
    FitnessGoal.GAIN_WEIGHT: [
        (lambda v, t, pct: v >= t * 0.8, 100),
        (lambda v, t, pct: v >= t * 0.6, 80),
        (_otherwise_vs_target, 60),
    ],
    FitnessGoal.MAINTAIN: [
        (lambda v, t, pct: pct <= 10, 100),
        (lambda v, t, pct: pct <= 20, 85),
        (lambda v, t, pct: pct <= 30, 70),
        (_otherwise_vs_target, 50),
    ],
}

PROTEIN_GENERAL_TIERS: Dict[FitnessGoal, List[GeneralTier]] = {
    FitnessGoal.LOSE_WEIGHT: [
        (lambda v: v >= 25, 100),
        (lambda v: v >= 20, 90),
        (lambda v: v >= 15, 75),
        (_otherwise, 50),
    ],
    FitnessGoal.GAIN_MUSCLE: [
        (lambda v: v >= 30, 100),
        (lambda v: v >= 25, 95),
        (lambda v: v >= 20, 80),
        (_otherwise, 50),
    ],
    FitnessGoal.GAIN_WEIGHT: [
        (lambda v: v >= 20, 100),
        (lambda v: v >= 15, 85),
        (_otherwise, 70),
    ],
    FitnessGoal.MAINTAIN: [
        (lambda v: 15 <= v <= 25, 100),
        (lambda v: v >= 10, 80),
        (_otherwise, 60),
    ],
}


# =============================================================================
# Macro balance: per macro, (low, high, bonus) bands; first match wins.
# None means unbounded on that side.
# =============================================================================

Band = Tuple[Optional[float], Optional[float], int]

MACRO_BALANCE_BANDS: Dict[FitnessGoal, Dict[str, List[Band]]] = {
    FitnessGoal.LOSE_WEIGHT: {
        "protein": [(0.25, None, 20), (0.20, None, 10)],
        "carbs": [(0.35, 0.50, 15)],
        "fat": [(None, 0.30, 15)],
    },
    FitnessGoal.GAIN_MUSCLE: {
        "protein": [(0.30, None, 25), (0.25, None, 15)],
        "carbs": [(0.40, None, 15)],
        "fat": [(0.20, 0.30, 10)],
    },
    FitnessGoal.GAIN_WEIGHT: {
        "protein": [(0.20, None, 15)],
        "carbs": [(0.40, None, 15)],
        "fat": [(0.25, None, 20)],
    },
    FitnessGoal.MAINTAIN: {
        "protein": [(0.20, 0.30, 20)],
        "carbs": [(0.35, 0.50, 15)],
        "fat": [(0.20, 0.35, 15)],
    },
}

# Energy per gram
KCAL_PER_GRAM = {"protein": 4, "carbs": 4, "fat": 9}

# Nutrient density: (minimum grams per kcal, bonus); first match wins
PROTEIN_DENSITY_BANDS = [(0.20, 30), (0.15, 20), (0.10, 10)]
FIBER_DENSITY_BANDS: Dict[FitnessGoal, List[Tuple[float, int]]] = {
    FitnessGoal.LOSE_WEIGHT: [(0.03, 20), (0.02, 10)],
    FitnessGoal.MAINTAIN: [(0.03, 20), (0.02, 10)],
    FitnessGoal.GAIN_MUSCLE: [(0.02, 10)],
    FitnessGoal.GAIN_WEIGHT: [(0.02, 10)],
}


def _first_target_tier(tiers: List[TargetTier], value: float, target: float) -> int:
    pct = abs(value - target) / target * 100
    for condition, score in tiers:
        if condition(value, target, pct):
            return score
    return NEUTRAL_SCORE


def _first_general_tier(tiers: List[GeneralTier], value: float) -> int:
    for condition, score in tiers:
        if condition(value):
            return score
    return NEUTRAL_SCORE


def _in_band(value: float, low: Optional[float], high: Optional[float]) -> bool:
    return (low is None or value >= low) and (high is None or value <= high)


def calorie_alignment(calories: float, goal: FitnessGoal,
                      macro_goals: Optional[MacroGoals] = None) -> int:
    if macro_goals is None or macro_goals.calories <= 0:
        return _first_general_tier(CALORIE_GENERAL_TIERS[goal], calories)
    return _first_target_tier(CALORIE_TARGET_TIERS[goal], calories, macro_goals.calories)


def protein_alignment(protein: float, goal: FitnessGoal,
                      macro_goals: Optional[MacroGoals] = None) -> int:
    if macro_goals is None or macro_goals.protein <= 0:
        return _first_general_tier(PROTEIN_GENERAL_TIERS[goal], protein)
    return _first_target_tier(PROTEIN_TARGET_TIERS[goal], protein, macro_goals.protein)


def macro_balance(recipe: Recipe, goal: FitnessGoal) -> float:
    """50 plus a bonus for each macro whose energy share falls in the goal's band."""
    if recipe.calories <= 0:
        return NEUTRAL_SCORE

    score = NEUTRAL_SCORE
    for macro, bands in MACRO_BALANCE_BANDS[goal].items():
        share = getattr(recipe, macro) * KCAL_PER_GRAM[macro] / recipe.calories
        for low, high, bonus in bands:
            if _in_band(share, low, high):
                score += bonus
                break
    return clamp_score(score)


def nutrient_density(recipe: Recipe, goal: FitnessGoal) -> float:
    """50 plus bonuses for protein and fiber per calorie."""
    if recipe.calories <= 0:
        return NEUTRAL_SCORE

    score = NEUTRAL_SCORE
    protein_per_kcal = recipe.protein / recipe.calories
    fiber_per_kcal = recipe.fiber / recipe.calories

    for minimum, bonus in PROTEIN_DENSITY_BANDS:
        if protein_per_kcal >= minimum:
            score += bonus
            break
    for minimum, bonus in FIBER_DENSITY_BANDS[goal]:
        if fiber_per_kcal >= minimum:
            score += bonus
            break
    return clamp_score(score)


def calculate_health_goal_score(recipe: Recipe, fitness_goal: Optional[FitnessGoal],
                                macro_goals: Optional[MacroGoals] = None) -> ScoreResult:
    """
    Score a recipe against a fitness goal.

    Args:
        recipe: Candidate recipe
        fitness_goal: Goal from the physical profile (None -> neutral 50)
        macro_goals: Optional per-meal macro targets

    Returns:
        ScoreResult named "health_goal"
    """
    if fitness_goal is None:
        return ScoreResult(
            scorer_name="health_goal",
            total=NEUTRAL_SCORE,
            breakdown={name: NEUTRAL_SCORE for name in HEALTH_GOAL_WEIGHTS},
            details={"reason": "No fitness goal"},
        )

    breakdown = {
        "calorie_alignment": calorie_alignment(recipe.calories, fitness_goal, macro_goals),
        "protein_alignment": protein_alignment(recipe.protein, fitness_goal, macro_goals),
        "macro_balance": macro_balance(recipe, fitness_goal),
        "nutrient_density": nutrient_density(recipe, fitness_goal),
    }
    total = round_score(sum(breakdown[k] * w for k, w in HEALTH_GOAL_WEIGHTS.items()))

    return ScoreResult(
        scorer_name="health_goal",
        total=clamp_score(total),
        breakdown={k: round_score(v) for k, v in breakdown.items()},
        details={
            "fitness_goal": fitness_goal.value,
            "uses_macro_goals": macro_goals is not None,
        },
    )


class HealthGoalScorer(Scorer):
    """Scores recipes against the fitness goal from the physical profile."""

    @property
    def name(self) -> str:
        return "health_goal"

    def evaluate(self, recipe: Recipe, context: ScoringContext) -> ScoreResult:
        profile = context.physical_profile
        if profile is None or profile.fitness_goal is None:
            return self._neutral_result("No fitness goal")
        return calculate_health_goal_score(recipe, profile.fitness_goal, context.macro_goals)
