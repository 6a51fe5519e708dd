"""
Data loading utilities for the survey analyses
Reads the cleaned artifact fresh on every call, with declared dtypes
"""

from pathlib import Path
from typing import Optional

import pandas as pd

from config.paths import CLEANED_DATA_FILE
from data_engineering.clean.column_lists import CANONICAL_CATEGORICAL_COLUMNS

CLEANED_DTYPES = {
    'year_start': 'Int64',
    'year_end': 'Int64',
    'value': 'float64',
    **{col: 'string' for col in CANONICAL_CATEGORICAL_COLUMNS},
}


def load_cleaned_dataset(file_path: Optional[Path] = None) -> pd.DataFrame:
    """
    Load the cleaned survey table

    Args:
        file_path: Path to cleaned CSV (default: config.paths.CLEANED_DATA_FILE)

    Returns:
        DataFrame with Int64 years, float values and string labels
    """
    file_path = Path(file_path) if file_path is not None else CLEANED_DATA_FILE

    if not file_path.exists():
        raise FileNotFoundError(
            f'Cleaned dataset not found at {file_path}. '
            f'Run: python -m data_engineering.clean.build_cleaned_dataset'
        )

    # Empty cells are the only missing marker; labels like 'n/a' stay text
    return pd.read_csv(file_path, dtype=CLEANED_DTYPES,
                       keep_default_na=False, na_values=[''])
