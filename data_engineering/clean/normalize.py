"""
Schema Normalizer

Turns whatever headers the survey export ships with into canonical,
machine-safe column names.

Two phases, always in this order:
1. Generic transform: every non-alphanumeric character becomes '_', then the
   name is lowercased ("Age(years)" -> "age_years_")
2. Explicit overrides looked up by the *transformed* name
   ("age_years_" -> "age")

Downstream consumers depend on the exact names this produces, so the override
keys must anticipate the generic transform's output.
"""

import re
from typing import Dict, Iterable, List, Optional

import pandas as pd

from .column_lists import COLUMN_OVERRIDES

_NON_ALNUM = re.compile(r'[^A-Za-z0-9]')


def normalize_column_name(name: str) -> str:
    """Replace non-alphanumerics with '_' and lowercase"""
    return _NON_ALNUM.sub('_', str(name)).lower()


def normalize_column_names(
    columns: Iterable[str],
    overrides: Optional[Dict[str, str]] = None
) -> List[str]:
    """
    Normalize a sequence of header names, preserving order.

    Args:
        columns: Raw header names
        overrides: Post-transform name -> canonical name (default: COLUMN_OVERRIDES)

    Returns:
        Canonical names, same length and order as `columns`
    """
    if overrides is None:
        overrides = COLUMN_OVERRIDES

    transformed = [normalize_column_name(col) for col in columns]
    return [overrides.get(col, col) for col in transformed]


def inert_overrides(columns: Iterable[str], overrides: Optional[Dict[str, str]] = None) -> List[str]:
    """Override keys that match none of the transformed `columns`"""
    if overrides is None:
        overrides = COLUMN_OVERRIDES

    transformed = {normalize_column_name(col) for col in columns}
    return [key for key in overrides if key not in transformed]


def normalize_columns(
    df: pd.DataFrame,
    overrides: Optional[Dict[str, str]] = None,
    verbose: bool = True
) -> pd.DataFrame:
    """
    Return a copy of `df` with canonical column names.

    Column order and row order are unchanged. Overrides that reference a
    name absent from this export are reported (when verbose) and ignored.
    """
    result = df.copy()
    result.columns = normalize_column_names(df.columns, overrides)

    if verbose:
        print(f'  ✓ Normalized {len(result.columns)} column names')
        unused = inert_overrides(df.columns, overrides)
        if unused:
            print(f'  ⚠️  Overrides with no matching column (ignored): {", ".join(unused)}')

    return result
