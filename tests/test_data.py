"""
Tests for the data managers and the interaction store.
"""
import json
from pathlib import Path

import pandas as pd
import pytest

from recipe_ranker.data import (
    CollaboratorError,
    DataFrameInteractionStore,
    ProfileManager,
    RecipesManager,
    build_behavior_data,
)
from recipe_ranker.data.recipes_manager import RECIPE_COLUMNS, split_list_field
from recipe_ranker.models import FitnessGoal, InteractionType


DATA_DIR = Path(__file__).parent.parent / "data"


@pytest.fixture
def recipes_manager():
    return RecipesManager(DATA_DIR / "recipes.csv")


@pytest.fixture
def store(recipes_manager):
    return DataFrameInteractionStore.from_csv(
        DATA_DIR / "users.csv", DATA_DIR / "interactions.csv", recipes_manager.get_recipes())


# RecipesManager tests
def test_split_list_field():
    """Test list cells are split and stripped."""
    assert split_list_field(" a | b ||c ") == ["a", "b", "c"]
    assert split_list_field(None) == []


def test_load_sample_recipes(recipes_manager):
    """Test the shipped recipes load in file order."""
    recipes = recipes_manager.get_recipes()
    assert len(recipes) == 18
    assert recipes[0].id == "r01"
    assert recipes_manager.skipped_rows == 0


def test_enriched_recipe_fields(recipes_manager):
    """Test enrichment columns are parsed."""
    oats = recipes_manager.get_recipe("r01")
    assert oats.has_external_data
    assert oats.aggregate_likes == 640
    assert oats.last_enriched.year == 2026
    assert "1/2 cup blueberries" in oats.ingredients


def test_unenriched_recipe_fields(recipes_manager):
    """Test empty enrichment cells become None."""
    omelette = recipes_manager.get_recipe("r02")
    assert not omelette.has_external_data
    assert omelette.quality_score is None
    assert omelette.last_enriched is None


def test_get_recipe_unknown(recipes_manager):
    """Test lookups of unknown ids."""
    assert recipes_manager.get_recipe("r99") is None
    assert not recipes_manager.has_recipe("r99")
    assert recipes_manager.has_recipe(" r05 ")


def test_bad_rows_skipped(tmp_path):
    """Test rows without an id or with a bad date are skipped."""
    path = tmp_path / "recipes.csv"
    pd.DataFrame([
        {"id": "a", "title": "Good", "cook_time": 10, "calories": 300, "ingredients": "rice|beans"},
        {"id": None, "title": "No id", "cook_time": 10},
        {"id": "c", "title": "Bad date", "cook_time": 10, "last_enriched": "yesterday"},
    ], columns=RECIPE_COLUMNS).to_csv(path, index=False)

    manager = RecipesManager(path)
    recipes = manager.get_recipes()
    assert [r.id for r in recipes] == ["a"]
    assert recipes[0].ingredients == ("rice", "beans")
    assert manager.skipped_rows == 2


def test_missing_recipes_file(tmp_path):
    """Test a missing file is an empty candidate set."""
    manager = RecipesManager(tmp_path / "missing.csv")
    assert manager.get_recipes() == []
    assert list(manager.df.columns) == RECIPE_COLUMNS


# Interaction store tests
def test_other_user_ids(store):
    """Test every other user, in file order."""
    assert store.get_other_user_ids("u1") == ["u2", "u3", "u4", "u5"]


def test_stored_profile(store):
    """Test list cells are lowercased and booleans parsed."""
    profile = store.get_user_profile("u3")
    assert profile.liked_cuisines == {"mexican", "indian"}
    assert profile.dietary_restrictions == {"vegetarian"}
    assert profile.has_macro_goals is False
    assert store.get_user_profile("nobody") is None


def test_positive_recipe_ids(store):
    """Test ids are grouped by positive kind."""
    sets = store.get_positive_recipe_ids("u1")
    assert sets[InteractionType.LIKED] == {"r04", "r06", "r17"}
    assert sets[InteractionType.SAVED] == {"r08", "r03"}
    assert InteractionType.DISLIKED not in sets


def test_interactions_sorted(store):
    """Test interactions come back oldest first."""
    rows = store.get_interactions("u2")
    assert [rid for _, rid, _ in rows] == ["r04", "r08", "r07", "r17", "r15"]
    assert rows[0][0] == InteractionType.LIKED


def test_bad_interaction_kind(recipes_manager):
    """Test an unknown interaction kind surfaces as CollaboratorError."""
    users = pd.DataFrame(columns=["user_id", "liked_cuisines", "dietary_restrictions", "has_macro_goals"])
    interactions = pd.DataFrame([
        {"user_id": "u1", "recipe_id": "r01", "kind": "shared", "timestamp": "2026-10-01T08:00:00"},
    ])
    store = DataFrameInteractionStore(users, interactions, recipes_manager.get_recipes())
    with pytest.raises(CollaboratorError) as excinfo:
        store.get_interactions("u1")
    assert excinfo.value.operation == "get_interactions"


def test_missing_columns(tmp_path):
    """Test a users file without the expected columns is rejected."""
    users = tmp_path / "users.csv"
    users.write_text("user_id,cuisines\nu1,Italian\n", encoding="utf-8")
    with pytest.raises(CollaboratorError, match="missing columns"):
        DataFrameInteractionStore.from_csv(users, tmp_path / "interactions.csv")


def test_missing_files_mean_no_history(tmp_path):
    """Test missing files give an empty store."""
    store = DataFrameInteractionStore.from_csv(tmp_path / "u.csv", tmp_path / "i.csv")
    assert store.get_other_user_ids("u1") == []
    assert store.get_interactions("u1") == []


def test_build_behavior_data(store):
    """Test interactions are snapshotted against their recipes."""
    behavior = build_behavior_data(store, "u1")
    assert len(behavior) == 13
    assert behavior.positive_recipe_ids() == {"r04", "r06", "r17", "r08", "r03", "r01", "r12", "r14"}
    assert behavior.negative_recipe_ids() == {"r11", "r05", "r13"}
    assert behavior.liked[0].cuisine == "Mediterranean"


def test_build_behavior_data_skips_unknown_recipes(store, recipes_manager):
    """Test interactions with unknown recipes are dropped."""
    known = [r for r in recipes_manager.get_recipes() if r.id != "r04"]
    behavior = build_behavior_data(store, "u1", known)
    assert len(behavior) == 11


# ProfileManager tests
def test_load_sample_profile():
    """Test every section of the shipped profile."""
    manager = ProfileManager(DATA_DIR / "user_profile.json")
    assert manager.load()
    assert manager.validation_errors == []
    assert manager.user_id == "u1"
    assert manager.get_preferences().banned_ingredients == {"shrimp"}
    assert manager.get_macro_goals().protein == 140
    assert manager.get_physical_profile().fitness_goal == FitnessGoal.GAIN_MUSCLE
    assert "blender" in manager.get_kitchen_profile().kitchen_equipment
    assert manager.get_cook_time_context().available_time == 40


def test_missing_profile(tmp_path):
    """Test a missing profile fails to load."""
    manager = ProfileManager(tmp_path / "profile.json")
    assert not manager.load()
    assert "not found" in manager.get_error_message()
    assert manager.get_preferences() is None


def test_invalid_json_profile(tmp_path):
    """Test malformed JSON fails to load."""
    path = tmp_path / "profile.json"
    path.write_text("{", encoding="utf-8")
    manager = ProfileManager(path)
    assert not manager.load()
    assert manager.get_error_message().startswith("Invalid JSON")


def test_bad_sections_do_not_block_others(tmp_path):
    """Test invalid sections are reported and left empty."""
    path = tmp_path / "profile.json"
    path.write_text(json.dumps({
        "preferences": {"liked_cuisines": ["Thai"]},
        "macro_goals": {"calories": 2000},
        "physical_profile": {"fitness_goal": "get_huge"},
        "kitchen_profile": "none",
    }), encoding="utf-8")
    manager = ProfileManager(path)
    assert manager.load()
    assert len(manager.validation_errors) == 3
    assert manager.get_error_message() == "User profile has 3 issues"
    assert manager.get_preferences().liked_cuisines == {"Thai"}
    assert manager.get_macro_goals() is None
    assert manager.get_physical_profile() is None
    assert manager.get_kitchen_profile() is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
