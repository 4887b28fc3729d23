import json
from config.paths import CONSTANTS_PATH

"""
Loads configuration constants from config/constants.json and exposes them as module-level variables.
Edit constants.json to change values; import from utils.constants to use in code.
"""

with open(CONSTANTS_PATH, "r", encoding="utf-8") as f:
    _constants = json.load(f)

# Week layout
TOTAL_DAYS = _constants["TOTAL_DAYS"]
DAY_LABELS = _constants["DAY_LABELS"]
DEFAULT_HOURS_PER_DAY = _constants["DEFAULT_HOURS_PER_DAY"]
MIN_HOURS_PER_DAY = _constants["MIN_HOURS_PER_DAY"]
MAX_HOURS_PER_DAY = _constants["MAX_HOURS_PER_DAY"]
MAX_NAME_LENGTH = _constants["MAX_NAME_LENGTH"]
DEFAULT_SCHOOL_NAME = _constants["DEFAULT_SCHOOL_NAME"]
DEFAULT_PRINCIPAL_NAME = _constants["DEFAULT_PRINCIPAL_NAME"]

# Lesson priorities (1 = placed first on ties)
DEFAULT_PRIORITY = _constants["DEFAULT_PRIORITY"]
LESSON_PRIORITIES = _constants["LESSON_PRIORITIES"]

# Search budget
TIME_LIMIT_TIERS = [tuple(tier) for tier in _constants["TIME_LIMIT_TIERS"]]
TIME_LIMIT_MAX = _constants["TIME_LIMIT_MAX"]
NUM_SEARCH_WORKERS = _constants["NUM_SEARCH_WORKERS"]
CP_MODEL_PRESOLVE = _constants["CP_MODEL_PRESOLVE"]

# Progress reporting
PROGRESS_INTERVAL_SECONDS = _constants["PROGRESS_INTERVAL_SECONDS"]
MODEL_PROGRESS_EVERY = _constants["MODEL_PROGRESS_EVERY"]
SEARCH_PROGRESS_CAP = _constants["SEARCH_PROGRESS_CAP"]
