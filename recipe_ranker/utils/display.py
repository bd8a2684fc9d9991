# recipe_ranker/utils/display.py
"""
Terminal rendering of ranking results, plans and learned weights.
"""
from typing import Optional, Sequence

from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from recipe_ranker.models.scoring_context import RankedRecipe
from recipe_ranker.models.weights import SIGNAL_NAMES, WeightAdjustmentResult
from recipe_ranker.planner.daily_planner import DailyPlan
from recipe_ranker.planner.insights import PlanInsights
from recipe_ranker.utils.time_utils import format_cook_time

console = Console()


def _score_style(score: float) -> str:
    if score >= 80:
        return "green"
    if score >= 60:
        return "yellow"
    return "red"


def render_ranking(ranked: Sequence[RankedRecipe], top: Optional[int] = None,
                   out: Optional[Console] = None) -> None:
    """
    Render ranked recipes as a table with per-scorer totals.

    Args:
        ranked: Ranked entries, best first
        top: Only show the first N entries
        out: Console to print to (module console by default)
    """
    out = out or console
    entries = list(ranked[:top] if top else ranked)
    if not entries:
        out.print("[dim]No candidates to rank.[/dim]\n")
        return

    scorer_names = [r.scorer_name for r in entries[0].individual_scores]
    table = Table(title="Ranked recipes", show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("Recipe")
    table.add_column("Cuisine")
    table.add_column("Time", justify="right")
    table.add_column("Score", justify="right")
    for name in scorer_names:
        table.add_column(name, justify="right", style="dim")

    for position, entry in enumerate(entries, start=1):
        style = _score_style(entry.total_score)
        row = [
            str(position),
            entry.recipe.title or entry.recipe.id,
            entry.recipe.cuisine,
            format_cook_time(entry.recipe.cook_time),
            f"[{style}]{entry.total_score:.0f}[/{style}]",
        ]
        breakdown = entry.breakdown
        row.extend(f"{breakdown.get(name, 0):.0f}" for name in scorer_names)
        table.add_row(*row)

    out.print(table)
    out.print()


def render_daily_plan(plan: DailyPlan, out: Optional[Console] = None) -> None:
    """Render the plan as markdown: one section per slot plus macro totals."""
    out = out or console
    lines = [f"# Daily plan for {plan.date}", ""]

    for slot in plan.slots:
        suggestion = plan.get(slot)
        lines.append(f"## {slot.title()}")
        if suggestion is None:
            lines.extend(["_No candidates for this slot._", ""])
            continue
        recipe = suggestion.recipe
        lines.append(
            f"**{recipe.title or recipe.id}** ({recipe.cuisine}) - score {suggestion.score}, "
            f"{suggestion.estimated_time}, {suggestion.difficulty}"
        )
        lines.append("")
        lines.extend(f"- {reason}" for reason in suggestion.reasoning)
        lines.append("")

    out.print(Markdown("\n".join(lines)))

    table = Table(title="Macros")
    table.add_column("Macro")
    table.add_column("Planned", justify="right")
    table.add_column("Goal", justify="right")
    table.add_column("Progress", justify="right")
    for key, total in plan.total_macros.items():
        goal = getattr(plan.macro_goals, key) if plan.macro_goals is not None else None
        progress = plan.macro_progress.get(key, 0)
        table.add_row(
            key,
            f"{total:.0f}",
            f"{goal:.0f}" if goal is not None else "-",
            f"{progress}%",
        )
    out.print(table)
    out.print()


def render_insights(insights: PlanInsights, out: Optional[Console] = None) -> None:
    out = out or console
    style = {"excellent": "green", "good": "yellow"}.get(insights.macro_balance, "red")
    out.print(f"Overall: [bold]{insights.overall_score}[/bold] "
              f"([{style}]{insights.macro_balance}[/{style}])")
    for strength in insights.strengths:
        out.print(f"  [green]+[/green] {strength}")
    for improvement in insights.improvements:
        out.print(f"  [yellow]-[/yellow] {improvement}")
    out.print()


def render_weights(result: WeightAdjustmentResult, out: Optional[Console] = None) -> None:
    """Render learned weights next to their correlations."""
    out = out or console
    table = Table(title=f"Weights (confidence {result.confidence:.2f}, "
                        f"{result.sample_size} interactions)")
    table.add_column("Signal")
    table.add_column("Weight", justify="right")
    table.add_column("Learned", justify="right", style="dim")
    table.add_column("Correlation", justify="right")
    for signal in SIGNAL_NAMES:
        table.add_row(
            signal,
            f"{result.weights.get(signal):.3f}",
            f"{result.learned_weights.get(signal):.3f}",
            f"{result.correlations.get(signal, 0.0):+.2f}",
        )
    out.print(table)
    out.print()


def render_collaborative(recipes: Sequence, scores: Sequence, top: Optional[int] = None,
                         out: Optional[Console] = None) -> None:
    """Render collaborative scores (recipes and scores in matching order), best first."""
    out = out or console
    pairs = sorted(zip(recipes, scores), key=lambda pair: -pair[1].total)
    if top:
        pairs = pairs[:top]
    if not pairs:
        return

    table = Table(title="Collaborative filtering")
    table.add_column("Recipe")
    table.add_column("Total", justify="right")
    table.add_column("Users", justify="right")
    table.add_column("Recipes", justify="right")
    table.add_column("Similar users", justify="right", style="dim")
    for recipe, score in pairs:
        table.add_row(
            recipe.title or recipe.id,
            str(score.total),
            str(score.user_based),
            str(score.item_based),
            str(score.details.get("similar_users_count", 0)),
        )
    out.print(table)
    out.print()
