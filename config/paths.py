"""
Project Path Configuration

Centralized path definitions for data and outputs
Using Medallion Architecture: Bronze (raw) → Silver (cleaned)
"""

from pathlib import Path

# Project root
PROJECT_ROOT = Path(__file__).parent.parent

# ==============================================================================
# MEDALLION ARCHITECTURE (Bronze / Silver)
# ==============================================================================

DATA_ROOT = PROJECT_ROOT / "data"

# Bronze Layer: Raw survey export, as downloaded
BRONZE = DATA_ROOT / "bronze"
BRONZE_SURVEY = BRONZE / "survey"

# Silver Layer: Cleaned, type-coerced, deduplicated
SILVER = DATA_ROOT / "silver"
SILVER_SURVEY = SILVER / "survey"

# ==============================================================================
# DEFAULT FILES
# ==============================================================================

DEFAULT_RAW_FILE = BRONZE_SURVEY / "nutrition_physical_activity_obesity.csv"
CLEANED_DATA_FILE = SILVER_SURVEY / "cleaned_data.csv"

# ==============================================================================
# OUTPUTS
# ==============================================================================

OUTPUTS_ROOT = PROJECT_ROOT / "outputs"
FIGURES = OUTPUTS_ROOT / "figures"
REPORTS = OUTPUTS_ROOT / "reports"

# ==============================================================================
# DIRECTORY INITIALIZATION
# ==============================================================================

def ensure_directories():
    """Create all necessary directories if they don't exist"""

    data_dirs = [
        BRONZE, BRONZE_SURVEY,
        SILVER, SILVER_SURVEY,
    ]

    output_dirs = [
        OUTPUTS_ROOT, FIGURES, REPORTS
    ]

    for directory in data_dirs + output_dirs:
        directory.mkdir(parents=True, exist_ok=True)
