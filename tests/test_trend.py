"""Tests for the linear trend estimator"""

import numpy as np
import pandas as pd
import pytest

from analysis.aggregate import MEAN_COLUMN, aggregate
from analysis.trend import InsufficientDataError, estimate_trend, fit_trend


def yearly(points):
    return pd.DataFrame(points, columns=['year_start', MEAN_COLUMN])


def test_positive_slope():
    slope = estimate_trend(yearly([(2019, 30.1), (2020, 30.3), (2021, 30.5)]))
    assert slope > 0
    assert slope == pytest.approx(0.2)


def test_fit_details():
    fit = fit_trend(yearly([(2019, 30.1), (2020, 30.3), (2021, 30.5)]))

    assert fit.n_years == 3
    assert fit.r_squared == pytest.approx(1.0)
    assert fit.intercept + fit.slope * 2020 == pytest.approx(30.3)
    assert fit.direction == 'increasing'


def test_negative_slope():
    fit = fit_trend(yearly([(2019, 40.0), (2020, 38.0), (2021, 36.0), (2022, 34.0)]))
    assert fit.slope == pytest.approx(-2.0)
    assert fit.direction == 'decreasing'


def test_single_year_is_insufficient():
    with pytest.raises(InsufficientDataError):
        estimate_trend(yearly([(2023, 30.0)]))


def test_missing_values_do_not_count_as_years():
    with pytest.raises(InsufficientDataError):
        estimate_trend(yearly([(2022, np.nan), (2023, 30.0)]))


def test_empty_input_is_insufficient():
    with pytest.raises(InsufficientDataError):
        estimate_trend(yearly([]))


def test_on_aggregator_output(canonical_table):
    result = aggregate(canonical_table, 'obesity', 'year_start')
    # 2021: 29.0, 2022: 33.0, 2023: 29.33
    assert estimate_trend(result) == pytest.approx(1.0 / 6)
