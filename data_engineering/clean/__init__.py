"""Survey cleaning modules"""

from .normalize import (
    normalize_column_name,
    normalize_column_names,
    normalize_columns
)

from .coerce import coerce_types
from .standardize import standardize_categoricals
from .deduplicate import drop_exact_duplicates

__all__ = [
    'normalize_column_name',
    'normalize_column_names',
    'normalize_columns',
    'coerce_types',
    'standardize_categoricals',
    'drop_exact_duplicates'
]
