#!/usr/bin/env python3
"""
Cleaned Survey Dataset Builder

Cleans the raw nutrition / physical activity / obesity survey export into the
canonical table every analysis reads.

Steps (fixed order):
1. Load raw export (all fields kept as raw strings)
2. Normalize column names (generic transform + overrides)
3. Drop exact duplicates (compared on raw string values)
4. Coerce types (integer years, numeric value, categorical labels)
5. Standardize categorical labels (lowercase, trimmed)
6. Project to canonical columns, validate, write

Output: data/silver/survey/cleaned_data.csv (overwritten on every run)

Usage:
  python -m data_engineering.clean.build_cleaned_dataset
  python -m data_engineering.clean.build_cleaned_dataset --raw-file path/to/export.csv
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path

import pandas as pd

# Import paths from config
sys.path.append(str(Path(__file__).parent.parent.parent))
from config.paths import DEFAULT_RAW_FILE, CLEANED_DATA_FILE

from data_engineering.clean.column_lists import CANONICAL_COLUMNS
from data_engineering.clean.normalize import normalize_columns
from data_engineering.clean.deduplicate import drop_exact_duplicates
from data_engineering.clean.coerce import coerce_types
from data_engineering.clean.standardize import standardize_categoricals
from data_engineering.utils.validation import check_canonical_columns, validate_cleaned_dataset


def print_step(title, verbose=True):
    """Print a formatted step header"""
    if verbose:
        print(f'\n{"="*80}')
        print(title)
        print(f'{"="*80}')


def load_raw_survey(raw_file, verbose=True):
    """
    Load the raw export with every field as a raw string

    Empty cells become missing. Nothing is parsed yet so that duplicate
    detection sees the values exactly as published.
    """
    raw_file = Path(raw_file)
    if not raw_file.exists():
        raise FileNotFoundError(f'Raw survey export not found at {raw_file}')

    print_step('STEP 1: LOADING RAW SURVEY EXPORT', verbose)
    if verbose:
        print(f'\nReading {raw_file}...')

    df = pd.read_csv(raw_file, dtype=str, encoding='utf-8-sig')

    if verbose:
        print(f'  ✓ Loaded {len(df):,} rows x {len(df.columns)} columns')

    return df


def clean_survey(raw_df, verbose=True):
    """
    Run the cleaning steps in their fixed order

    Normalize -> Deduplicate -> Coerce -> Standardize. Each step returns a
    new frame; `raw_df` is not modified.

    Args:
        raw_df: Raw export as loaded by load_raw_survey
        verbose: Print per-step progress

    Returns:
        Cleaned DataFrame carrying every normalized column
    """
    print_step('STEP 2: NORMALIZING COLUMN NAMES', verbose)
    df = normalize_columns(raw_df, verbose=verbose)

    print_step('STEP 3: REMOVING EXACT DUPLICATES', verbose)
    df = drop_exact_duplicates(df, verbose=verbose)

    print_step('STEP 4: COERCING TYPES', verbose)
    df = coerce_types(df, verbose=verbose)

    print_step('STEP 5: STANDARDIZING CATEGORICAL LABELS', verbose)
    df = standardize_categoricals(df, verbose=verbose)

    return df


def to_canonical(cleaned_df, verbose=True):
    """
    Project onto the canonical record columns

    Rows that only differed in dropped columns (or in case/padding before
    standardization) collapse into one record; the first is kept.

    Raises:
        MissingColumnsError: If a canonical column is absent
    """
    check_canonical_columns(cleaned_df)

    canonical = cleaned_df[CANONICAL_COLUMNS]
    canonical = drop_exact_duplicates(canonical, verbose=verbose)
    return canonical.reset_index(drop=True)


def write_cleaned_dataset(cleaned_df, output_file=CLEANED_DATA_FILE, verbose=True):
    """
    Write the canonical table, replacing any previous artifact

    Returns:
        Tuple of (canonical DataFrame, output Path)
    """
    print_step('STEP 6: SAVING CLEANED DATASET', verbose)

    canonical = to_canonical(cleaned_df, verbose=verbose)
    validate_cleaned_dataset(canonical, verbose=verbose)

    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    canonical.to_csv(output_file, index=False)

    if verbose:
        print(f'  ✓ Saved {len(canonical):,} records: {output_file} '
              f'({output_file.stat().st_size / 1024 / 1024:.1f} MB)')

    return canonical, output_file


def build_cleaned_dataset(raw_file=DEFAULT_RAW_FILE, output_file=CLEANED_DATA_FILE, verbose=True):
    """Load, clean and write in one call; returns (canonical DataFrame, output Path)"""
    raw_df = load_raw_survey(raw_file, verbose=verbose)
    cleaned = clean_survey(raw_df, verbose=verbose)
    return write_cleaned_dataset(cleaned, output_file, verbose=verbose)


def print_summary(raw_count, canonical):
    """Print dataset summary"""
    print(f'\n{"="*80}')
    print('DATASET SUMMARY')
    print(f'{"="*80}')

    print(f'\nRaw rows:       {raw_count:,}')
    print(f'Canonical rows: {len(canonical):,}')

    if len(canonical) > 0:
        years = canonical['year_start'].dropna()
        if len(years) > 0:
            print(f'Years:          {int(years.min())} - {int(years.max())}')
        print(f'Locations:      {canonical["location"].nunique():,}')
        print(f'Classes:        {canonical["class"].nunique():,}')

    print(f'\nField completeness:')
    for col in CANONICAL_COLUMNS:
        completeness = canonical[col].notna().mean() * 100 if len(canonical) else 0.0
        print(f'  {col:25s}: {completeness:5.1f}%')


def main():
    parser = argparse.ArgumentParser(
        description='Clean the raw survey export into the canonical table',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Default input/output locations (see config/paths.py)
  python -m data_engineering.clean.build_cleaned_dataset

  # Custom export
  python -m data_engineering.clean.build_cleaned_dataset \\
    --raw-file downloads/Nutrition__Physical_Activity__and_Obesity.csv
        """
    )

    parser.add_argument('--raw-file', type=str, default=str(DEFAULT_RAW_FILE),
                        help='Path to raw survey CSV')
    parser.add_argument('--output-file', type=str, default=str(CLEANED_DATA_FILE),
                        help='Path of the cleaned CSV (overwritten)')
    parser.add_argument('--quiet', action='store_true',
                        help='Suppress progress output')

    args = parser.parse_args()
    verbose = not args.quiet

    if verbose:
        print(f'\n{"="*80}')
        print('CLEANED SURVEY DATASET BUILDER')
        print(f'{"="*80}')
        print(f'\nTimestamp: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}')
        print(f'Raw file:    {args.raw_file}')
        print(f'Output file: {args.output_file}')

    try:
        raw_df = load_raw_survey(args.raw_file, verbose=verbose)
    except FileNotFoundError as e:
        print(f'ERROR: {e}')
        return 1

    cleaned = clean_survey(raw_df, verbose=verbose)
    canonical, output_path = write_cleaned_dataset(cleaned, args.output_file, verbose=verbose)

    if verbose:
        print_summary(len(raw_df), canonical)
        print(f'\n✅ Cleaned dataset saved:')
        print(f'   {output_path}')
        print()

    return 0


if __name__ == '__main__':
    sys.exit(main())
