#!/usr/bin/env python3
"""
Survey Column Definitions

Documents the canonical column names of the cleaned survey table and the
declared type of each one. Used by every cleaning step so the pipeline and
the downstream analyses agree on names.

These lists should be updated whenever the publisher renames a header.
"""

# ============================================================================
# HEADER OVERRIDES
# ============================================================================

# Keys are names AFTER the generic transform (non-alphanumerics -> '_', then
# lowercase), not the raw headers. An override whose key is not present in a
# given export is simply inert.
COLUMN_OVERRIDES = {
    'age_years_': 'age',                         # "Age(years)"
    'race_ethnicity': 'race',                    # "Race/Ethnicity"
    'yearstart': 'year_start',                   # "YearStart"
    'yearend': 'year_end',                       # "YearEnd"
    'locationdesc': 'location',                  # "LocationDesc"
    'data_value': 'value',                       # "Data_Value"
    'stratificationcategory1': 'stratification_category',
    'stratification1': 'stratification',
}

# ============================================================================
# DECLARED TYPES
# ============================================================================

# Truncating integer parse; anything non-numeric becomes <NA>
INTEGER_COLUMNS = [
    'year_start',
    'year_end',
]

# Float parse; anything non-numeric becomes NaN (excluded from means)
NUMERIC_COLUMNS = [
    'value',
]

# Finite label sets, kept as plain strings
CATEGORICAL_COLUMNS = [
    'race',
    'gender',
    'location',
    'class',
    'topic',
    'question',
]

# Lowercased and trimmed after type coercion
STANDARDIZED_COLUMNS = [
    'race',
    'gender',
    'age',
    'location',
    'class',
    'topic',
    'question',
    'stratification_category',
    'stratification',
]

# ============================================================================
# CANONICAL RECORD (columns written to the cleaned artifact)
# ============================================================================

CANONICAL_COLUMNS = [
    'year_start',
    'year_end',
    'location',
    'class',
    'topic',
    'question',
    'stratification',
    'value',
]

CANONICAL_CATEGORICAL_COLUMNS = [
    'location',
    'class',
    'topic',
    'question',
    'stratification',
]


def missing_canonical_columns(columns):
    """Return canonical columns absent from `columns`, in canonical order"""
    present = set(columns)
    return [col for col in CANONICAL_COLUMNS if col not in present]
