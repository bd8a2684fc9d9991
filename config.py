"""
Configuration for the Recipe Ranker demo.

Toggle between PRODUCTION and DEVELOPMENT mode.
"""
import os
from pathlib import Path

# ==================== MODE SELECTION ====================
# Change this to switch between production and development data
MODE = os.environ.get("RECIPE_RANKER_MODE", "DEVELOPMENT")  # Options: "PRODUCTION" or "DEVELOPMENT"
# ========================================================

# Base paths
PROJECT_ROOT = Path(__file__).parent
PRODUCTION_DATA_PATH = Path(os.environ.get("RECIPE_RANKER_DATA", str(PROJECT_ROOT / "data")))
DEVELOPMENT_DATA_PATH = PROJECT_ROOT / "data"

# Select data path based on mode
if MODE == "PRODUCTION":
    DATA_PATH = PRODUCTION_DATA_PATH
elif MODE == "DEVELOPMENT":
    DATA_PATH = DEVELOPMENT_DATA_PATH
else:
    raise ValueError(f"Invalid MODE: {MODE}. Must be 'PRODUCTION' or 'DEVELOPMENT'")

# File paths
RECIPES_FILE = DATA_PATH / "recipes.csv"
USERS_FILE = DATA_PATH / "users.csv"
INTERACTIONS_FILE = DATA_PATH / "interactions.csv"
PROFILE_FILE = DATA_PATH / "user_profile.json"
ENGINE_CONFIG_FILE = DATA_PATH / "engine_config.json"


def verify_data_files():
    """Check that all required data files exist."""
    missing = []

    # Recipes and profile are required; history files are optional
    for file_path in [RECIPES_FILE, PROFILE_FILE]:
        if not file_path.exists():
            missing.append(str(file_path))

    if missing:
        raise FileNotFoundError(
            f"Missing data files in {MODE} mode:\n" +
            "\n".join(f"  - {f}" for f in missing)
        )

    return True


# Logging
LOG_LEVEL = os.environ.get("RECIPE_RANKER_LOG_LEVEL", "WARNING")
LOG_FILE = DATA_PATH / "logs" / "recipe_ranker.log"

# Application settings
DEFAULT_TOP_N = 10
