#!/usr/bin/env python3
"""
Data Quality and Schema Validation

Uses pandera to validate the cleaned survey artifact for:
- Schema compliance (integer years, float values, standardized labels)
- Record uniqueness (no two canonical records identical)
- Data quality checks (missing values, out-of-range percentages)

Usage:
    from data_engineering.utils.validation import validate_cleaned_dataset

    # Validate before saving
    validate_cleaned_dataset(canonical_df)
"""

import pandera as pa
from pandera import Column, Check
import pandas as pd

from data_engineering.clean.column_lists import (
    CANONICAL_COLUMNS,
    CANONICAL_CATEGORICAL_COLUMNS,
    missing_canonical_columns,
)


class MissingColumnsError(ValueError):
    """Raised when a table lacks canonical columns it is required to carry."""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(
            f'Missing canonical columns: {", ".join(self.missing)}. '
            f'Check the header overrides against this export.'
        )


def _is_standardized(series: pd.Series) -> pd.Series:
    """True where the label is missing or already lowercase and trimmed"""
    labels = series.astype('string')
    return (labels.isna() | labels.eq(labels.str.strip().str.lower())).astype(bool)


# ============================================================================
# CLEANED SURVEY SCHEMA
# ============================================================================

_standardized = Check(_is_standardized, error='label is not lowercase/trimmed')

_columns = {
    # Temporal keys
    'year_start': Column('Int64', nullable=True,
                         description='Primary temporal key'),
    'year_end': Column('Int64', nullable=True),

    # Measurement (percentage); missing is allowed and excluded from means
    'value': Column('float64', nullable=True),

    # Categorical labels
    **{
        col: Column(checks=_standardized, nullable=True)
        for col in CANONICAL_CATEGORICAL_COLUMNS
    },
}

# Declared in artifact column order (ordered=True)
cleaned_survey_schema = pa.DataFrameSchema(
    {col: _columns[col] for col in CANONICAL_COLUMNS},
    strict=True,
    ordered=True,
    unique=CANONICAL_COLUMNS,
    coerce=False,
    description='Cleaned survey artifact (one row per canonical record)'
)


# ============================================================================
# VALIDATION FUNCTIONS
# ============================================================================

def check_canonical_columns(df: pd.DataFrame):
    """
    Raise MissingColumnsError if any canonical column is absent

    Raises:
        MissingColumnsError: Listing the absent columns
    """
    missing = missing_canonical_columns(df.columns)
    if missing:
        raise MissingColumnsError(missing)


def validate_cleaned_dataset(df: pd.DataFrame, verbose: bool = True) -> bool:
    """
    Validate the cleaned survey artifact

    Args:
        df: Canonical-column DataFrame about to be written
        verbose: Print progress and quality warnings

    Returns:
        True if validation passes

    Raises:
        MissingColumnsError: If canonical columns are absent
        pandera.errors.SchemaErrors: If schema validation fails
    """
    if verbose:
        print(f'\n{"="*80}')
        print('Validating cleaned survey dataset')
        print(f'{"="*80}')

    check_canonical_columns(df)

    try:
        cleaned_survey_schema.validate(df, lazy=True)
        if verbose:
            print('  ✓ Schema validation passed')
    except pa.errors.SchemaErrors as err:
        if verbose:
            print('  ❌ Schema validation failed:')
            print(err.failure_cases)
        raise

    if verbose:
        check_data_quality(df)
        print('  ✓ All validations passed\n')

    return True


def check_data_quality(df: pd.DataFrame):
    """
    Print data quality warnings beyond schema validation

    Checks:
    - Missing value percentages
    - Percentages outside 0-100
    - Year ranges where year_end precedes year_start
    """
    if len(df) == 0:
        print('  ⚠️  Dataset is empty')
        return

    # Missing values
    missing_pct = (df.isnull().sum() / len(df) * 100).sort_values(ascending=False)
    high_missing = missing_pct[missing_pct > 50]
    if len(high_missing) > 0:
        print('  ⚠️  High missing values (>50%):')
        for col, pct in high_missing.items():
            print(f'     - {col}: {pct:.1f}%')

    if 'value' in df.columns:
        defined = df['value'].dropna()
        out_of_range = ((defined < 0) | (defined > 100)).sum()
        if out_of_range > 0:
            print(f'  ⚠️  {out_of_range:,} values outside 0-100')
        print(f'  Defined values: {len(defined):,} / {len(df):,} ({len(defined)/len(df)*100:.1f}%)')

    if 'year_start' in df.columns and 'year_end' in df.columns:
        both = df['year_start'].notna() & df['year_end'].notna()
        inverted = (df.loc[both, 'year_end'] < df.loc[both, 'year_start']).sum()
        if inverted > 0:
            print(f'  ⚠️  {inverted:,} rows with year_end before year_start')
