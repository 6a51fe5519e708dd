"""End-to-end tests for the cleaned dataset builder"""

import numpy as np
import pandas as pd
import pytest

from analysis.data_loader import load_cleaned_dataset
from data_engineering.clean.build_cleaned_dataset import (
    build_cleaned_dataset,
    clean_survey,
    load_raw_survey,
    to_canonical,
    write_cleaned_dataset,
)
from data_engineering.clean.column_lists import CANONICAL_COLUMNS
from data_engineering.utils.validation import MissingColumnsError
from tests.conftest import OBESITY_CLASS, RAW_HEADER, make_table


def test_load_raw_keeps_strings(raw_csv):
    df = load_raw_survey(raw_csv, verbose=False)

    assert list(df.columns) == RAW_HEADER
    assert len(df) == 6
    assert df['Data_Value'].iloc[4] == '~'
    assert df['LocationDesc'].iloc[3] == ' Alabama '


def test_load_raw_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_raw_survey(tmp_path / 'nope.csv', verbose=False)


def test_clean_survey_runs_steps_in_order(raw_csv):
    raw = load_raw_survey(raw_csv, verbose=False)

    cleaned = clean_survey(raw, verbose=False)

    # only the exact duplicate is gone; the footnote variant survives
    assert len(cleaned) == 5
    assert 'age' in cleaned.columns
    assert 'race' in cleaned.columns
    assert cleaned['location'].tolist() == ['alabama', 'alabama', 'alabama', 'alaska', 'alaska']
    assert cleaned['gender'].iloc[2] == 'female'
    assert cleaned['value'].isna().tolist() == [False, False, False, True, False]
    assert str(cleaned['year_start'].dtype) == 'Int64'
    # input untouched
    assert raw['LocationDesc'].iloc[3] == ' Alabama '


def test_canonical_projection_collapses_duplicates(raw_csv):
    cleaned = clean_survey(load_raw_survey(raw_csv, verbose=False), verbose=False)

    canonical = to_canonical(cleaned, verbose=False)

    assert list(canonical.columns) == CANONICAL_COLUMNS
    assert len(canonical) == 4
    assert not canonical.duplicated().any()


def test_build_writes_canonical_artifact(raw_csv, tmp_path):
    output = tmp_path / 'silver' / 'cleaned_data.csv'

    canonical, path = build_cleaned_dataset(raw_csv, output, verbose=False)

    assert path == output
    assert output.exists()

    reloaded = load_cleaned_dataset(output)
    assert list(reloaded.columns) == CANONICAL_COLUMNS
    assert len(reloaded) == len(canonical) == 4

    assert reloaded['year_start'].tolist() == [2023, 2023, 2022, 2023]
    assert reloaded['stratification'].tolist() == ['male', 'female', 'total', '18 - 24']
    assert reloaded['class'].tolist() == [
        'obesity / weight status', 'obesity / weight status',
        'obesity / weight status', 'physical activity',
    ]
    assert pd.isna(reloaded['value'].iloc[2])
    assert reloaded['value'].iloc[3] == 20.5

    for col in ['location', 'class', 'topic', 'question', 'stratification']:
        labels = reloaded[col].dropna()
        assert (labels == labels.str.strip().str.lower()).all()


def test_build_overwrites_previous_artifact(raw_csv, tmp_path):
    output = tmp_path / 'cleaned_data.csv'
    output.write_text('stale\n')

    build_cleaned_dataset(raw_csv, output, verbose=False)

    assert list(pd.read_csv(output).columns) == CANONICAL_COLUMNS


def test_missing_canonical_column_is_an_error(tmp_path, raw_rows):
    header = list(RAW_HEADER)
    header[header.index('Data_Value')] = 'Measurement'
    raw = tmp_path / 'renamed.csv'
    pd.DataFrame(raw_rows, columns=header).to_csv(raw, index=False)

    with pytest.raises(MissingColumnsError) as excinfo:
        build_cleaned_dataset(raw, tmp_path / 'out.csv', verbose=False)

    assert excinfo.value.missing == ['value']


def test_reload_keeps_labels_that_look_like_missing(tmp_path):
    table = make_table([
        (2023, 'alabama', OBESITY_CLASS, 'n/a', 30.0),
        (2023, 'alabama', OBESITY_CLASS, None, 30.0),
        (2023, 'alaska', OBESITY_CLASS, 'none', np.nan),
    ])
    output = tmp_path / 'cleaned_data.csv'

    write_cleaned_dataset(table, output, verbose=False)
    reloaded = load_cleaned_dataset(output)

    assert reloaded['stratification'].iloc[0] == 'n/a'
    assert pd.isna(reloaded['stratification'].iloc[1])
    assert reloaded['stratification'].iloc[2] == 'none'
    assert pd.isna(reloaded['value'].iloc[2])
    assert not reloaded.duplicated().any()


def test_raw_na_like_label_survives_to_reload(tmp_path, raw_rows):
    rows = [list(raw_rows[0]), list(raw_rows[0])]
    rows[0][-1] = ' N/A '
    rows[1][-1] = ''
    raw = tmp_path / 'raw.csv'
    pd.DataFrame(rows, columns=RAW_HEADER).to_csv(raw, index=False)
    output = tmp_path / 'cleaned_data.csv'

    build_cleaned_dataset(raw, output, verbose=False)
    reloaded = load_cleaned_dataset(output)

    assert len(reloaded) == 2
    assert reloaded['stratification'].iloc[0] == 'n/a'
    assert pd.isna(reloaded['stratification'].iloc[1])
