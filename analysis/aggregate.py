#!/usr/bin/env python3
"""
Grouped Aggregates over the Cleaned Survey Table

Every chart and narrative is fed by one call:

    aggregate(table, topic_filter, group_by, year_filter=None, allow_list=None)

which filters by class (case-insensitive substring), optionally restricts the
stratification field to an analysis-specific allow-list and a single year,
groups, and takes the mean of the defined values per group.

Grouping and reduction are kept as separate steps (`group_rows` then
`mean_of_defined`) so each can be tested on its own.

Usage:
    from analysis.aggregate import aggregate, GENDERS, LATEST_YEAR

    by_location = aggregate(df, 'obesity', 'location', year_filter=LATEST_YEAR)
    by_gender = aggregate(df, 'obesity', 'stratification',
                          year_filter=LATEST_YEAR, allow_list=GENDERS)
"""

from dataclasses import dataclass
from typing import Dict, Hashable, Optional, Sequence, Tuple, Union

import pandas as pd

MEAN_COLUMN = 'mean_value'

# year_filter value meaning "max year_start present after the other filters"
LATEST_YEAR = 'latest'


class InvalidGroupingKeyError(KeyError):
    """Raised when a grouping or filter field is not a column of the table."""


# ============================================================================
# ALLOW-LISTS
# ============================================================================

@dataclass(frozen=True)
class AllowList:
    """Fixed set of valid labels for one reading of the stratification field"""
    name: str
    field: str
    values: Tuple[str, ...]

    def mask(self, df: pd.DataFrame) -> pd.Series:
        return df[self.field].isin(self.values).astype(bool)


AGE_GROUPS = AllowList(
    name='age_group',
    field='stratification',
    values=('18 - 24', '25 - 34', '35 - 44', '45 - 54', '55 - 64', '65 or older'),
)

GENDERS = AllowList(
    name='gender',
    field='stratification',
    values=('male', 'female'),
)


# ============================================================================
# FILTERS
# ============================================================================

def require_columns(df: pd.DataFrame, columns: Sequence[str]):
    """Raise InvalidGroupingKeyError naming any column `df` lacks"""
    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise InvalidGroupingKeyError(f'Unknown column(s): {", ".join(missing)}')


def filter_by_topic(df: pd.DataFrame, topic_filter: Optional[str]) -> pd.DataFrame:
    """Rows whose `class` contains `topic_filter` (case-insensitive); None keeps all"""
    if not topic_filter:
        return df
    matches = df['class'].astype('string').str.contains(
        topic_filter, case=False, regex=False, na=False
    )
    return df[matches.astype(bool)]


def most_recent_year(df: pd.DataFrame) -> Optional[int]:
    """Max `year_start` in `df`, or None if no row has a year"""
    years = pd.to_numeric(df['year_start'], errors='coerce').dropna()
    if years.empty:
        return None
    return int(years.max())


def filter_by_year(df: pd.DataFrame, year_filter: Union[int, str, None]) -> pd.DataFrame:
    """Restrict to one `year_start`; LATEST_YEAR resolves against `df` itself"""
    if year_filter is None:
        return df

    year = most_recent_year(df) if year_filter == LATEST_YEAR else int(year_filter)
    if year is None:
        return df.iloc[0:0]

    years = pd.to_numeric(df['year_start'], errors='coerce')
    return df[(years == year).astype(bool)]


# ============================================================================
# GROUP-BY / REDUCE
# ============================================================================

def group_rows(df: pd.DataFrame, keys: Sequence[str]) -> Dict[Tuple[Hashable, ...], pd.DataFrame]:
    """
    Split `df` into groups keyed by the tuple of `keys` values.

    Groups come back in order of first appearance. Rows with a missing key
    value belong to no group.
    """
    grouped = df.groupby(list(keys), sort=False, dropna=True, observed=True)
    groups = {}
    for key, rows in grouped:
        if not isinstance(key, tuple):
            key = (key,)
        groups[key] = rows
    return groups


def mean_of_defined(values: pd.Series) -> Optional[float]:
    """Mean of the non-missing values; None when none are defined"""
    defined = pd.to_numeric(values, errors='coerce').dropna()
    if defined.empty:
        return None
    return float(defined.mean())


def aggregate(
    table: pd.DataFrame,
    topic_filter: Optional[str],
    group_by: Union[str, Sequence[str]],
    year_filter: Union[int, str, None] = None,
    allow_list: Optional[AllowList] = None,
    value_col: str = 'value'
) -> pd.DataFrame:
    """
    Grouped mean of `value_col`, sorted descending.

    Args:
        table: Cleaned survey table
        topic_filter: Case-insensitive substring matched against `class`
        group_by: One column name or a sequence of them
        year_filter: A `year_start` to keep, LATEST_YEAR, or None for all years
        allow_list: Keep only rows whose `allow_list.field` is one of its values
        value_col: Column to average

    Returns:
        DataFrame with the `group_by` columns plus `mean_value`, one row per
        group with at least one defined value. Ties on the mean are ordered
        by the group key as text. Empty (same columns) if nothing matches.

    Raises:
        InvalidGroupingKeyError: If a grouping or filter field is not a column
    """
    keys = [group_by] if isinstance(group_by, str) else list(group_by)
    if not keys:
        raise InvalidGroupingKeyError('At least one grouping key is required')

    required = keys + [value_col]
    if topic_filter:
        required.append('class')
    if allow_list is not None:
        required.append(allow_list.field)
    if year_filter is not None:
        required.append('year_start')
    require_columns(table, required)

    rows = filter_by_topic(table, topic_filter)
    if allow_list is not None:
        rows = rows[allow_list.mask(rows)]
    rows = filter_by_year(rows, year_filter)

    records = []
    for key, group in group_rows(rows, keys).items():
        mean = mean_of_defined(group[value_col])
        if mean is None:
            continue
        record = dict(zip(keys, key))
        record[MEAN_COLUMN] = mean
        records.append(record)

    records.sort(key=lambda r: (-r[MEAN_COLUMN], tuple(str(r[k]) for k in keys)))

    return pd.DataFrame(records, columns=keys + [MEAN_COLUMN])

