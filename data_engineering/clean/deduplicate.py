"""Exact-duplicate removal"""

import pandas as pd


def drop_exact_duplicates(df: pd.DataFrame, verbose: bool = True) -> pd.DataFrame:
    """
    Keep the first occurrence of each distinct row, comparing all fields.

    Missing values compare equal to each other. Retained rows keep their
    original relative order and are returned unchanged.
    """
    result = df.drop_duplicates(keep='first')

    if verbose:
        dup_count = len(df) - len(result)
        if dup_count > 0:
            print(f'  ⚠️  Found {dup_count:,} exact duplicate rows')
            print(f'     ✓ Removed {dup_count:,} duplicates')
        else:
            print('  ✓ No exact duplicates found')

    return result
