"""
Type Coercer

Casts canonical columns to their declared semantic types. Coercion never
drops rows: a value that fails to parse becomes missing in that field only.
"""

import numpy as np
import pandas as pd

from .column_lists import INTEGER_COLUMNS, NUMERIC_COLUMNS, CATEGORICAL_COLUMNS


def to_integer(series: pd.Series) -> pd.Series:
    """Truncating integer parse; invalid -> <NA> (nullable Int64)"""
    numeric = to_numeric(series)
    # Int64 range; larger magnitudes count as parse failures
    numeric = numeric.where(np.isfinite(numeric) & numeric.abs().lt(2**63))
    return np.trunc(numeric).astype('Int64')


def to_numeric(series: pd.Series) -> pd.Series:
    """Coerce possibly string-encoded numerics to float; invalid -> NaN"""
    return pd.to_numeric(series, errors='coerce').astype('float64')


def to_categorical(series: pd.Series) -> pd.Series:
    """Plain string labels; missing stays missing"""
    return series.astype('string')


def coerce_types(df: pd.DataFrame, verbose: bool = True) -> pd.DataFrame:
    """
    Cast declared columns to integer / numeric / categorical.

    Columns not present in this export are skipped. Row count and order are
    preserved exactly.

    Args:
        df: Table with canonical column names
        verbose: Print per-column parse failures

    Returns:
        New DataFrame with coerced columns
    """
    result = df.copy()

    casts = (
        [(col, to_integer) for col in INTEGER_COLUMNS] +
        [(col, to_numeric) for col in NUMERIC_COLUMNS] +
        [(col, to_categorical) for col in CATEGORICAL_COLUMNS]
    )

    for col, cast in casts:
        if col not in result.columns:
            continue

        before = result[col].notna().sum()
        result[col] = cast(result[col])
        failed = before - result[col].notna().sum()

        if verbose and failed > 0:
            print(f'  ⚠️  {col}: {failed:,} values failed to parse (set to missing)')

    if verbose:
        print(f'  ✓ Coerced types for {len(result):,} rows')

    return result
