"""
Linear Trend over Yearly Means

Ordinary least squares of value against year (one predictor, intercept
included), fitted with scikit-learn's LinearRegression on the output of
`aggregate(..., group_by='year_start')`.
"""

from dataclasses import dataclass

import pandas as pd
from sklearn.linear_model import LinearRegression

from analysis.aggregate import MEAN_COLUMN

MIN_YEARS = 2


class InsufficientDataError(ValueError):
    """Raised when fewer than MIN_YEARS distinct years have a defined value."""


@dataclass
class TrendFit:
    slope: float
    intercept: float
    r_squared: float
    n_years: int

    @property
    def direction(self) -> str:
        if self.slope > 0:
            return 'increasing'
        if self.slope < 0:
            return 'decreasing'
        return 'flat'


def fit_trend(
    yearly: pd.DataFrame,
    year_col: str = 'year_start',
    value_col: str = MEAN_COLUMN
) -> TrendFit:
    """
    Fit value ~ year by OLS.

    Args:
        yearly: One row per year (Aggregator output grouped by year)
        year_col: Column holding the year
        value_col: Column holding the yearly value

    Returns:
        TrendFit with slope (units per year), intercept, R^2 and year count

    Raises:
        InsufficientDataError: Fewer than 2 distinct years with defined values
    """
    data = pd.DataFrame({
        year_col: pd.to_numeric(yearly[year_col], errors='coerce'),
        value_col: pd.to_numeric(yearly[value_col], errors='coerce'),
    }).dropna()

    n_years = int(data[year_col].nunique())
    if n_years < MIN_YEARS:
        raise InsufficientDataError(
            f'Trend needs at least {MIN_YEARS} distinct years with defined values, got {n_years}'
        )

    X = data[[year_col]].to_numpy(dtype=float)
    y = data[value_col].to_numpy(dtype=float)

    model = LinearRegression()
    model.fit(X, y)

    return TrendFit(
        slope=float(model.coef_[0]),
        intercept=float(model.intercept_),
        r_squared=float(model.score(X, y)),
        n_years=n_years,
    )


def estimate_trend(
    yearly: pd.DataFrame,
    year_col: str = 'year_start',
    value_col: str = MEAN_COLUMN
) -> float:
    """Slope of the OLS fit of value against year"""
    return fit_trend(yearly, year_col, value_col).slope
