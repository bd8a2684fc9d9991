# recipe_ranker/planner/daily_planner.py
"""
Daily plan orchestrator.

Picks one recipe per meal slot from a candidate pool. For each slot:

1. The day's macro goals are scaled to the slot (meal_distribution).
2. The temporal context is moved into the slot's meal window.
3. Every candidate gets
       slot_score = round(0.7 * composite + 0.3 * meal_type)
   where composite is the composite score against the slot target and
       meal_type = round(0.6 * macro_fit + 0.4 * slot_heuristic)
4. The highest slot_score wins. Ties go to the earlier candidate in
   input order.

Slots are planned independently, so one recipe may win several slots.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Union

from recipe_ranker.models.engine_config import EngineConfig
from recipe_ranker.models.preferences import MacroGoals
from recipe_ranker.models.recipe import MACRO_KEYS, Recipe
from recipe_ranker.models.scoring_context import ScoringContext, NEUTRAL_SCORE
from recipe_ranker.models.temporal import MealPeriod
from recipe_ranker.planner.meal_distribution import (
    SLOT_MEAL_PERIODS, distribute_macro_goals, normalize_slots,
)
from recipe_ranker.ranking.ranker import prepare_context
from recipe_ranker.scorers.base_scorer import round_score
from recipe_ranker.scorers.composite_scorer import CompositeScorer
from recipe_ranker.scorers.temporal_scorer import (
    MEAL_PERIOD_RULES, TIME_OF_DAY_RULES, Rule, apply_rules, cuisine_in,
)
from recipe_ranker.utils.logger import get_logger, ContextLogger
from recipe_ranker.utils.time_utils import format_cook_time


logger = get_logger(__name__)

COMPOSITE_SHARE = 0.7
MEAL_TYPE_SHARE = 0.3
MACRO_FIT_SHARE = 0.6
HEURISTIC_SHARE = 0.4

CandidatePool = Union[Sequence[Recipe], Mapping[str, Sequence[Recipe]]]


@dataclass
class MealSuggestion:
    """
    The recipe chosen for one slot.

    Attributes:
        meal_type: Slot name
        recipe: Chosen recipe
        score: Slot score (0-100)
        reasoning: Human-readable reasons, best first
        estimated_time: Formatted cook time
        difficulty: "easy", "medium" or "hard"
        composite_score / meal_type_score / macro_score: Score parts
        temporal_score / behavioral_score: Signal scores (None if unavailable)
        target: Macro target for the slot
    """
    meal_type: str
    recipe: Recipe
    score: int
    reasoning: List[str] = field(default_factory=list)
    estimated_time: str = ""
    difficulty: str = "medium"
    composite_score: int = NEUTRAL_SCORE
    meal_type_score: int = NEUTRAL_SCORE
    macro_score: int = NEUTRAL_SCORE
    temporal_score: Optional[float] = None
    behavioral_score: Optional[float] = None
    target: Optional[MacroGoals] = None


@dataclass
class DailyPlan:
    """
    One day's plan.

    Attributes:
        date: ISO date the plan is for
        slots: Requested slots in order
        suggestions: slot -> MealSuggestion (None when the slot had no candidates)
        total_macros: Summed macros of the chosen recipes
        macro_goals: The day's goals (None if not supplied)
        macro_progress: Percent of each daily goal covered (0 when the goal is 0)
    """
    date: str
    slots: List[str]
    suggestions: Dict[str, Optional[MealSuggestion]] = field(default_factory=dict)
    total_macros: Dict[str, float] = field(default_factory=dict)
    macro_goals: Optional[MacroGoals] = None
    macro_progress: Dict[str, int] = field(default_factory=dict)

    def get(self, slot: str) -> Optional[MealSuggestion]:
        return self.suggestions.get(slot)

    @property
    def chosen(self) -> List[MealSuggestion]:
        """Filled slots in slot order."""
        return [self.suggestions[s] for s in self.slots if self.suggestions.get(s) is not None]


# =============================================================================
# Slot heuristics
# =============================================================================

# slot -> [(predicate, bonus)]; the heuristic starts at 50.
# Main meals share the temporal hour-band rules, snacks the snack period rules.
SLOT_HEURISTICS: Dict[str, List[Rule]] = {
    "breakfast": TIME_OF_DAY_RULES["breakfast"],
    "lunch": TIME_OF_DAY_RULES["lunch"],
    "dinner": TIME_OF_DAY_RULES["dinner"],
    "snack": MEAL_PERIOD_RULES[MealPeriod.SNACK],
    "dessert": [
        (lambda r: r.cook_time <= 20, 15),
        (lambda r: r.calories <= 350, 20),
        (cuisine_in("French", "American"), 10),
    ],
}


def slot_heuristic(recipe: Recipe, slot: str) -> int:
    """50 plus the slot's bonuses, capped at 100."""
    return min(100, apply_rules(recipe, SLOT_HEURISTICS.get(slot, [])))


def macro_fit(recipe: Recipe, target: Optional[MacroGoals]) -> float:
    """
    100 - mean relative deviation x100, floored at 0.

    A target of 0 counts as full deviation; no target is a neutral 50.
    """
    if target is None:
        return float(NEUTRAL_SCORE)
    deviations = []
    for key in MACRO_KEYS:
        goal = getattr(target, key)
        if goal <= 0:
            deviations.append(1.0)
        else:
            deviations.append(abs(getattr(recipe, key) - goal) / goal)
    return max(0.0, 100 - sum(deviations) / len(deviations) * 100)


def calculate_meal_type_score(recipe: Recipe, slot: str, target: Optional[MacroGoals]) -> int:
    """round(0.6 * macro fit against the slot target + 0.4 * slot heuristic)."""
    return round_score(macro_fit(recipe, target) * MACRO_FIT_SHARE
                       + slot_heuristic(recipe, slot) * HEURISTIC_SHARE)


# =============================================================================
# Reasoning and presentation helpers
# =============================================================================

# slot -> (predicate, reason)
SLOT_REASONS = {
    "breakfast": (lambda r: r.cook_time <= 15, "Quick to prepare for busy mornings"),
    "lunch": (lambda r: r.cook_time <= 30, "Perfect for lunch break"),
    "dinner": (lambda r: r.cook_time >= 30, "Worth the extra time for a satisfying dinner"),
    "snack": (lambda r: r.calories <= 200, "Light and healthy snack option"),
    "dessert": (lambda r: r.calories <= 350, "Light enough to finish the day on track"),
}


def generate_reasoning(suggestion: MealSuggestion) -> List[str]:
    """Reasons for a suggestion, from overall fit down to slot specifics."""
    slot = suggestion.meal_type
    score = suggestion.score
    reasons = []

    if score >= 80:
        reasons.append(f"Perfect match for {slot} ({score}% compatibility)")
    elif score >= 60:
        reasons.append(f"Good choice for {slot} ({score}% compatibility)")
    else:
        reasons.append(f"Suitable for {slot} ({score}% compatibility)")

    if suggestion.macro_score >= 70:
        reasons.append("Excellent macro balance for your goals")
    elif suggestion.macro_score >= 50:
        reasons.append("Good macro balance")

    temporal = suggestion.temporal_score
    if temporal is not None and temporal >= 80:
        reasons.append("Perfect timing for this meal period")
    elif temporal is not None and temporal >= 60:
        reasons.append("Good timing for this meal")

    if suggestion.behavioral_score is not None and suggestion.behavioral_score >= 70:
        reasons.append("Matches your taste preferences")

    rule = SLOT_REASONS.get(slot)
    if rule is not None and rule[0](suggestion.recipe):
        reasons.append(rule[1])

    return reasons


def assess_difficulty(recipe: Recipe) -> str:
    """
    easy / medium / hard from cook time, ingredient count and step count.

    Each factor adds 1-4 (cook time) or 1-3 points; <=3 is easy, <=6 medium.
    """
    points = 0
    if recipe.cook_time <= 15:
        points += 1
    elif recipe.cook_time <= 30:
        points += 2
    elif recipe.cook_time <= 60:
        points += 3
    else:
        points += 4

    ingredients = len(recipe.ingredients)
    points += 1 if ingredients <= 5 else 2 if ingredients <= 10 else 3

    steps = len(recipe.instructions)
    points += 1 if steps <= 3 else 2 if steps <= 6 else 3

    if points <= 3:
        return "easy"
    if points <= 6:
        return "medium"
    return "hard"


def calculate_total_macros(suggestions: Sequence[Optional[MealSuggestion]]) -> Dict[str, float]:
    totals = {key: 0.0 for key in MACRO_KEYS}
    for suggestion in suggestions:
        if suggestion is None:
            continue
        for key in MACRO_KEYS:
            totals[key] += getattr(suggestion.recipe, key) or 0.0
    return totals


def calculate_macro_progress(total_macros: Mapping[str, float],
                             goals: Optional[MacroGoals]) -> Dict[str, int]:
    """Percent of each goal covered; 0 for a missing or zero goal."""
    progress = {}
    for key in MACRO_KEYS:
        goal = getattr(goals, key) if goals is not None else 0
        if goal <= 0:
            progress[key] = 0
        else:
            progress[key] = round_score(total_macros.get(key, 0.0) / goal * 100)
    return progress


# =============================================================================
# Planning
# =============================================================================

def _slot_candidates(candidates: CandidatePool, slot: str) -> Sequence[Recipe]:
    if isinstance(candidates, Mapping):
        return candidates.get(slot, ())
    return candidates


def plan_slot(slot: str, candidates: Sequence[Recipe], context: ScoringContext,
              target: Optional[MacroGoals], scorer: Optional[CompositeScorer] = None
              ) -> Optional[MealSuggestion]:
    """
    Best candidate for one slot, or None if there are no candidates.

    Args:
        slot: Canonical slot name
        candidates: Candidate recipes (input order is the tie-break)
        context: Day-level context (macro goals are replaced by target)
        target: Slot macro target
        scorer: Composite scorer to reuse
    """
    if not candidates:
        return None

    scorer = scorer or CompositeScorer()
    slot_context = context.with_updates(macro_goals=target)
    if context.temporal_context is not None:
        period = SLOT_MEAL_PERIODS[slot]
        slot_context = slot_context.with_updates(
            temporal_context=context.temporal_context.for_meal_period(period))

    best: Optional[MealSuggestion] = None
    for recipe in candidates:
        result = scorer.evaluate(recipe, slot_context)
        composite = int(result.total)
        meal_type = calculate_meal_type_score(recipe, slot, target)
        score = round_score(composite * COMPOSITE_SHARE + meal_type * MEAL_TYPE_SHARE)

        # Strictly greater keeps the earliest candidate on ties
        if best is None or score > best.score:
            best = MealSuggestion(
                meal_type=slot,
                recipe=recipe,
                score=score,
                composite_score=composite,
                meal_type_score=meal_type,
                macro_score=int(result.breakdown.get("macro_score", NEUTRAL_SCORE)),
                temporal_score=result.details.get("temporal_score"),
                behavioral_score=result.details.get("behavioral_score"),
                target=target,
            )

    best.reasoning = generate_reasoning(best)
    best.estimated_time = format_cook_time(best.recipe.cook_time)
    best.difficulty = assess_difficulty(best.recipe)
    logger.debug("Slot %s: %s (%d)", slot, best.recipe.id, best.score)
    return best


def generate_daily_plan(candidates: CandidatePool, context: ScoringContext,
                        slots: Optional[Sequence[str]] = None,
                        config: Optional[EngineConfig] = None) -> DailyPlan:
    """
    Plan one day.

    Args:
        candidates: One pool for every slot, or slot -> pool
        context: Scoring context; context.macro_goals are the DAILY goals
        slots: Slots to fill (defaults to config.meal_slots)
        config: Slot defaults and distribution table

    Returns:
        DailyPlan with one suggestion per slot (None for empty pools)

    Raises:
        ValueError: If a slot is unknown
    """
    config = config or EngineConfig()
    slot_names = normalize_slots(slots or config.meal_slots, config.meal_distribution)
    targets = distribute_macro_goals(context.macro_goals, slot_names, config.meal_distribution)

    context = prepare_context(context)
    scorer = CompositeScorer()

    with ContextLogger(logger, f"daily plan for {', '.join(slot_names)}"):
        suggestions = {
            slot: plan_slot(slot, _slot_candidates(candidates, slot), context, targets[slot], scorer)
            for slot in slot_names
        }

    totals = calculate_total_macros(list(suggestions.values()))
    return DailyPlan(
        date=context.reference_time().date().isoformat(),
        slots=slot_names,
        suggestions=suggestions,
        total_macros=totals,
        macro_goals=context.macro_goals,
        macro_progress=calculate_macro_progress(totals, context.macro_goals),
    )
