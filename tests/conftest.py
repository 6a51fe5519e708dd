"""Shared fixtures for the survey pipeline tests"""

import sys
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from analysis.data_loader import CLEANED_DTYPES
from data_engineering.clean.column_lists import CANONICAL_COLUMNS

RAW_HEADER = [
    'YearStart', 'YearEnd', 'LocationAbbr', 'LocationDesc', 'Class', 'Topic',
    'Question', 'Data_Value', 'Data_Value_Footnote', 'Age(years)', 'Gender',
    'Race/Ethnicity', 'StratificationCategory1', 'Stratification1',
]

OBESITY_CLASS = 'obesity / weight status'
OBESITY_QUESTION = 'percent of adults aged 18 years and older who have obesity'
ACTIVITY_CLASS = 'physical activity'
ACTIVITY_QUESTION = 'percent of adults who engage in no leisure-time physical activity'


def make_table(rows):
    """Canonical table from (year_start, location, class, stratification, value) tuples"""
    records = []
    for year, location, klass, stratification, value in rows:
        question = OBESITY_QUESTION if klass == OBESITY_CLASS else ACTIVITY_QUESTION
        records.append({
            'year_start': year,
            'year_end': year,
            'location': location,
            'class': klass,
            'topic': klass,
            'question': question,
            'stratification': stratification,
            'value': value,
        })
    return pd.DataFrame(records, columns=CANONICAL_COLUMNS).astype(CLEANED_DTYPES)


@pytest.fixture
def canonical_table():
    """Small cleaned table: two states with data, one with only missing values"""
    return make_table([
        (2022, 'alabama', OBESITY_CLASS, 'total', 33.0),
        (2023, 'alabama', OBESITY_CLASS, 'male', 36.0),
        (2023, 'alabama', OBESITY_CLASS, 'female', 34.0),
        (2023, 'alabama', OBESITY_CLASS, '18 - 24', 20.0),
        (2023, 'alabama', OBESITY_CLASS, '65 or older', 30.0),
        (2023, 'alaska', OBESITY_CLASS, 'male', 31.0),
        (2023, 'alaska', OBESITY_CLASS, 'female', np.nan),
        (2023, 'alaska', OBESITY_CLASS, '18 - 24', 25.0),
        (2021, 'alaska', OBESITY_CLASS, 'total', 29.0),
        (2023, 'arizona', OBESITY_CLASS, 'total', np.nan),
        (2023, 'alabama', ACTIVITY_CLASS, 'total', 22.0),
        (2024, 'alabama', ACTIVITY_CLASS, 'total', 24.0),
    ])


@pytest.fixture
def raw_rows():
    """Raw export rows as published (mixed case, padding, a duplicate, a bad value)"""
    return [
        ['2023', '2023', 'AL', 'Alabama', 'Obesity / Weight Status', 'Obesity / Weight Status',
         'Percent of adults aged 18 years and older who have obesity', '36.0', '', '', 'Male', '',
         'Gender', 'Male'],
        # exact duplicate of the first row
        ['2023', '2023', 'AL', 'Alabama', 'Obesity / Weight Status', 'Obesity / Weight Status',
         'Percent of adults aged 18 years and older who have obesity', '36.0', '', '', 'Male', '',
         'Gender', 'Male'],
        # differs from the first row only in a non-canonical column
        ['2023', '2023', 'AL', 'Alabama', 'Obesity / Weight Status', 'Obesity / Weight Status',
         'Percent of adults aged 18 years and older who have obesity', '36.0', 'revised', '', 'Male', '',
         'Gender', 'Male'],
        ['2023', '2023', 'AL', ' Alabama ', 'OBESITY / WEIGHT STATUS', 'Obesity / Weight Status',
         'Percent of adults aged 18 years and older who have obesity', '34.0', '', '', '  Female ', '',
         'Gender', '  Female '],
        ['2022', '2022', 'AK', 'Alaska', 'Obesity / Weight Status', 'Obesity / Weight Status',
         'Percent of adults aged 18 years and older who have obesity', '~', 'Data not available', '', '', '',
         'Total', 'Total'],
        ['2023', '2023', 'AK', 'Alaska', 'Physical Activity', 'Physical Activity - Behavior',
         'Percent of adults who engage in no leisure-time physical activity', '20.5', '', '18 - 24', '', '',
         'Age (years)', '18 - 24'],
    ]


@pytest.fixture
def raw_csv(tmp_path, raw_rows):
    """Raw export written to disk"""
    path = tmp_path / 'raw_export.csv'
    pd.DataFrame(raw_rows, columns=RAW_HEADER).to_csv(path, index=False)
    return path
