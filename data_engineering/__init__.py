"""
Data Engineering Module for the Nutrition / Physical Activity / Obesity Survey

This module contains the cleaning code organized by pipeline stage:
1. clean/ - Column normalization, deduplication, type coercion, label cleanup
2. utils/ - Schema validation of the cleaned artifact

Usage:
    from data_engineering.clean.build_cleaned_dataset import build_cleaned_dataset
    from data_engineering.utils.validation import validate_cleaned_dataset
"""

__version__ = "1.0.0"
