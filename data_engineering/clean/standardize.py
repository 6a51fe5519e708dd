"""
Categorical Standardizer

Lowercases and trims categorical labels so grouping is stable across
inconsistent capitalisation and stray padding. Internal whitespace is left
as-is. Idempotent: standardizing standardized data changes nothing.
"""

from typing import Iterable, Optional

import pandas as pd

from .column_lists import STANDARDIZED_COLUMNS


def standardize_labels(series: pd.Series) -> pd.Series:
    """'  Male ' -> 'male'; missing stays missing"""
    return series.astype('string').str.strip().str.lower()


def standardize_categoricals(
    df: pd.DataFrame,
    columns: Optional[Iterable[str]] = None,
    verbose: bool = True
) -> pd.DataFrame:
    """
    Return a copy of `df` with every listed categorical column standardized.

    Args:
        df: Type-coerced table
        columns: Columns to standardize (default: STANDARDIZED_COLUMNS)
        verbose: Print a summary line
    """
    if columns is None:
        columns = STANDARDIZED_COLUMNS

    result = df.copy()
    present = [col for col in columns if col in result.columns]

    for col in present:
        result[col] = standardize_labels(result[col])

    if verbose:
        print(f'  ✓ Standardized {len(present)} categorical columns')

    return result
