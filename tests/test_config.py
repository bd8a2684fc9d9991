"""
Tests for EngineConfig loading and validation.
"""
import json
import os
from pathlib import Path

import pytest

from recipe_ranker.data import ConfigError
from recipe_ranker.models import EngineConfig


CONFIG_FILE = Path(__file__).parent.parent / "data" / "engine_config.json"


# Defaults tests
def test_defaults_are_valid():
    """Test an empty block gives a valid engine."""
    config = EngineConfig.from_config({})
    assert config.validate() == []
    assert config.executor == "thread"
    assert config.meal_slots == ["breakfast", "lunch", "dinner", "snack"]
    assert config.meal_distribution["dessert"] == 0.08


def test_worker_count():
    """Test None resolves to the CPU count and explicit sizes are kept."""
    assert EngineConfig().worker_count == max(1, os.cpu_count() or 1)
    assert EngineConfig(max_workers=3).worker_count == 3


# from_config tests
def test_nested_and_direct_blocks():
    """Test the 'ranking' key is optional."""
    nested = EngineConfig.from_config({"ranking": {"max_workers": 2}})
    direct = EngineConfig.from_config({"max_workers": 2})
    assert nested.max_workers == direct.max_workers == 2


def test_distribution_override_merges():
    """Test distribution overrides keep the other defaults."""
    config = EngineConfig.from_config({"meal_distribution": {"snack": 0.2}})
    assert config.meal_distribution["snack"] == 0.2
    assert config.meal_distribution["dinner"] == 0.30


@pytest.mark.parametrize("block, fragment", [
    ({"max_workers": 0}, "max_workers"),
    ({"executor": "fiber"}, "executor"),
    ({"min_sample_size": 0}, "min_sample_size"),
    ({"user_similarity_threshold": 1.5}, "user_similarity_threshold"),
    ({"max_similar_recipes": 0}, "max_similar_recipes"),
    ({"meal_slots": []}, "at least one slot"),
    ({"meal_slots": ["elevenses"]}, "elevenses"),
    ({"meal_distribution": {"lunch": 0}}, "meal_distribution['lunch']"),
])
def test_invalid_values(block, fragment):
    """Test each invalid value is reported."""
    with pytest.raises(ConfigError) as excinfo:
        EngineConfig.from_config({"ranking": block})
    assert fragment in str(excinfo.value)


def test_non_dict_block():
    """Test a non-dict ranking block is rejected."""
    with pytest.raises(ConfigError):
        EngineConfig.from_config({"ranking": ["thread"]})


def test_config_error_is_value_error():
    """Test callers catching ValueError also catch config errors."""
    with pytest.raises(ValueError):
        EngineConfig.from_config({"executor": "fiber"})


# from_file tests
def test_from_file_missing(tmp_path):
    """Test a missing file yields defaults."""
    assert EngineConfig.from_file(tmp_path / "nope.json") == EngineConfig()


def test_from_file_invalid_json(tmp_path):
    """Test malformed JSON raises ConfigError."""
    path = tmp_path / "engine_config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid JSON"):
        EngineConfig.from_file(path)


def test_from_file_round_trip(tmp_path):
    """Test values written to disk are read back."""
    path = tmp_path / "engine_config.json"
    path.write_text(json.dumps({"ranking": {"executor": "process", "max_similar_users": 5}}),
                    encoding="utf-8")
    config = EngineConfig.from_file(path)
    assert config.executor == "process"
    assert config.max_similar_users == 5


def test_shipped_config_is_valid():
    """Test the example config in data/ loads."""
    config = EngineConfig.from_file(CONFIG_FILE)
    assert config.max_workers == 4
    assert config.validate() == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
