"""
Recipe Ranker - Main Entry Point

Ranks the sample recipes for one user, learns their blend weights and
builds a daily plan, rendering everything to the terminal.
"""
import argparse
import sys
from datetime import datetime

from config import (
    RECIPES_FILE, USERS_FILE, INTERACTIONS_FILE, PROFILE_FILE, ENGINE_CONFIG_FILE,
    LOG_LEVEL, LOG_FILE, DEFAULT_TOP_N, verify_data_files,
)
from recipe_ranker.collaborative import CollaborativeFilter
from recipe_ranker.data import (
    CollaboratorError, ConfigError, DataFrameInteractionStore, ProfileManager,
    RecipesManager, build_behavior_data,
)
from recipe_ranker.learning import calculate_historical_scores, learn_weights
from recipe_ranker.models import EngineConfig, ScoringContext, TemporalContext
from recipe_ranker.planner import generate_daily_plan, get_daily_plan_insights
from recipe_ranker.ranking import rank_candidates
from recipe_ranker.scorers import analyze_user_temporal_patterns
from recipe_ranker.utils import setup_logging, get_logger
from recipe_ranker.utils.display import (
    console, render_collaborative, render_daily_plan, render_insights,
    render_ranking, render_weights,
)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rank recipes and plan a day of meals.")
    parser.add_argument("--user", help="User id for history lookups (defaults to the profile's user_id)")
    parser.add_argument("--top", type=int, default=DEFAULT_TOP_N, help="Number of ranked recipes to show")
    parser.add_argument("--slots", nargs="+", help="Meal slots to plan (e.g. breakfast lunch dinner)")
    parser.add_argument("--log-level", default=LOG_LEVEL, help="DEBUG, INFO, WARNING or ERROR")
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    """
    Run one ranking + planning pass.

    Returns:
        Process exit code
    """
    setup_logging(args.log_level, LOG_FILE)
    logger = get_logger("main")

    try:
        verify_data_files()
        engine_config = EngineConfig.from_file(ENGINE_CONFIG_FILE)
    except (FileNotFoundError, ConfigError) as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    recipes = RecipesManager(RECIPES_FILE).get_recipes()

    profile = ProfileManager(PROFILE_FILE)
    if not profile.load():
        console.print(f"[red]Error:[/red] {profile.get_error_message()}")
        return 1

    user_id = args.user or profile.user_id
    if not user_id:
        console.print("[red]Error:[/red] no user id (pass --user or set user_id in the profile)")
        return 1

    now = datetime.now()
    try:
        store = DataFrameInteractionStore.from_csv(USERS_FILE, INTERACTIONS_FILE, recipes)
        behavior = build_behavior_data(store, user_id, recipes)
    except CollaboratorError as e:
        console.print(f"[red]Data error:[/red] {e}")
        return 1

    context = ScoringContext(
        preferences=profile.get_preferences(),
        macro_goals=profile.get_macro_goals(),
        physical_profile=profile.get_physical_profile(),
        behavior=behavior,
        temporal_context=TemporalContext.from_datetime(now),
        temporal_patterns=analyze_user_temporal_patterns(behavior.consumed),
        cook_time_context=profile.get_cook_time_context(),
        kitchen_profile=profile.get_kitchen_profile(),
        now=now,
    )
    logger.info("User %s: %d candidates, %d interactions", user_id, len(recipes), len(behavior))

    historical = calculate_historical_scores(behavior, context, recipes)
    weights = learn_weights(behavior, historical, engine_config.min_sample_size)

    ranked = rank_candidates(recipes, context, engine_config, weights.weights)

    try:
        collaborative = CollaborativeFilter(store, engine_config).score_candidates(recipes, user_id, behavior)
    except CollaboratorError as e:
        console.print(f"[red]Data error:[/red] {e}")
        return 1

    try:
        plan = generate_daily_plan(recipes, context, args.slots, engine_config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    console.print(f"[bold]Recipe Ranker[/bold] - user {user_id}\n")
    render_ranking(ranked, top=args.top)
    render_collaborative(recipes, collaborative, top=5)
    render_daily_plan(plan)
    render_insights(get_daily_plan_insights(plan))
    render_weights(weights)
    return 0


def main(argv=None) -> int:
    return run(parse_args(argv))


if __name__ == "__main__":
    sys.exit(main())
