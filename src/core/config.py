"""
Configuration constants and environment setup.
"""

import os
import warnings
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = PROJECT_ROOT / "data"
OUTPUT_DIR = PROJECT_ROOT / "output"
REFERENCE_TABLE_PATH = Path(
    os.environ.get("SHADOW_MAPPING_CSV", str(DATA_DIR / "Shadow_Calendar_Task_Mapping.csv"))
)
DB_PATH = Path(os.environ.get("SHADOW_DB_PATH", str(DATA_DIR / "db" / "shadow-hours.db")))

# =============================================================================
# REFERENCE TABLE CONFIGURATION
# =============================================================================

DESCRIPTION_COLUMN = "Description"
TASK_CODE_COLUMN = "Subtask"
CSV_FILL_VALUE = "-"  # Written into columns the core does not know about

# =============================================================================
# MATCHING CONFIGURATION
# =============================================================================

UNMAPPED = "UNMAPPED"

# rapidfuzz scores are 0-100; candidates below the cutoff are not returned
MATCH_SCORE_CUTOFF = float(os.environ.get("MATCH_SCORE_CUTOFF", "60"))

# "binary": 1.0 for any match, 0.0 for UNMAPPED
# "score":  rapidfuzz score scaled to [0, 1]
CONFIDENCE_MODES = {"binary", "score"}
DEFAULT_CONFIDENCE_MODE = "binary"


def resolve_confidence_mode(value: str | None) -> str:
    """Validated confidence mode; unknown values fall back to the default."""
    mode = (value or DEFAULT_CONFIDENCE_MODE).strip().lower()
    if mode not in CONFIDENCE_MODES:
        warnings.warn(
            f"Unknown CONFIDENCE_MODE '{value}', using '{DEFAULT_CONFIDENCE_MODE}'"
        )
        return DEFAULT_CONFIDENCE_MODE
    return mode


CONFIDENCE_MODE = resolve_confidence_mode(os.environ.get("CONFIDENCE_MODE"))

# =============================================================================
# DATE CONFIGURATION
# =============================================================================

# Month-name locales accepted in date headers, e.g. "12 Jan, 2024", "3 März 2024"
DATE_LANGUAGES = ["en", "de"]
DATE_PARSER_SETTINGS = {
    "DATE_ORDER": "DMY",
    "STRICT_PARSING": True,
    "REQUIRE_PARTS": ["day", "month", "year"],
    # No relative ("today") or timestamp fallbacks: a header without a real
    # month must fail instead of resolving against the current date
    "PARSERS": ["absolute-time"],
}

# =============================================================================
# EXPORT CONFIGURATION
# =============================================================================

DEFAULT_EMPLOYEE = "UNKNOWN"

EXPORT_HEADERS = [
    "Employee", "Date", "Start", "End",
    "Description", "ERP Subtask", "Confidence",
]
EXPORT_SHEET_NAME = "Shadow Hours"

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "4000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
# Comma-separated origins allowed to call the API from a browser (the UI runs
# on its own dev server); empty disables CORS
CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]
MAX_TEXT_SIZE_KB = int(os.environ.get("MAX_TEXT_SIZE_KB", "1024"))
MAX_TEXT_SIZE_BYTES = MAX_TEXT_SIZE_KB * 1024
API_VERSION = "1.0.0"
