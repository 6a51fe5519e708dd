#!/usr/bin/env python3
"""
Survey Figures and Narratives

Renders aggregate tables as labeled charts and one-sentence summaries.
Consumes only the Aggregator / Trend outputs; never touches the raw data.
"""

from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from analysis.aggregate import MEAN_COLUMN

sns.set_style("whitegrid")

BAR_COLOR = '#4472C4'
TREND_COLOR = '#ED7D31'


def plot_ranking(aggregates, key, title, output_path, top_n=None):
    """
    Horizontal bar chart of mean value per group, highest first

    Args:
        aggregates: Aggregator output
        key: Grouping column to label the bars with
        title: Figure title
        output_path: PNG path
        top_n: Only plot the first N groups

    Returns:
        Path of the saved figure, or None if there is nothing to plot
    """
    if aggregates.empty:
        return None

    plot_df = aggregates.head(top_n) if top_n else aggregates
    plot_df = plot_df.assign(**{key: plot_df[key].astype(str)})

    height = max(4, 0.3 * len(plot_df))
    fig, ax = plt.subplots(figsize=(10, height))

    sns.barplot(data=plot_df, x=MEAN_COLUMN, y=key, color=BAR_COLOR,
                orient='h', ax=ax)

    for i, value in enumerate(plot_df[MEAN_COLUMN]):
        ax.text(value, i, f' {value:.1f}', va='center', ha='left', fontsize=9)

    ax.set_xlabel('Mean value (%)', fontsize=12, fontweight='bold')
    ax.set_ylabel(key.replace('_', ' ').title(), fontsize=12, fontweight='bold')
    ax.set_title(title, fontsize=14, fontweight='bold', pad=15)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    return output_path


def plot_trend(yearly, fit, title, output_path, year_col='year_start'):
    """Yearly means as points plus the fitted OLS line"""
    if yearly.empty:
        return None

    years = yearly[year_col].astype(float).to_numpy()
    values = yearly[MEAN_COLUMN].to_numpy(dtype=float)

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(years, values, marker='o', color=BAR_COLOR, label='Yearly mean')

    if fit is not None:
        line_x = np.array([years.min(), years.max()])
        ax.plot(line_x, fit.intercept + fit.slope * line_x, linestyle='--',
                color=TREND_COLOR, label=f'Trend ({fit.slope:+.2f} / year)')

    ax.set_xlabel('Year', fontsize=12, fontweight='bold')
    ax.set_ylabel('Mean value (%)', fontsize=12, fontweight='bold')
    ax.set_title(title, fontsize=14, fontweight='bold', pad=15)
    ax.xaxis.get_major_locator().set_params(integer=True)
    ax.legend(loc='best')

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    return output_path


def describe_ranking(aggregates, key, label):
    """One sentence naming the highest and lowest groups"""
    if aggregates.empty:
        return f'{label}: no data matched.'

    top = aggregates.iloc[0]
    if len(aggregates) == 1:
        return f'{label}: only {top[key]} reported ({top[MEAN_COLUMN]:.1f}%).'

    bottom = aggregates.iloc[-1]
    return (
        f'{label}: highest in {top[key]} ({top[MEAN_COLUMN]:.1f}%), '
        f'lowest in {bottom[key]} ({bottom[MEAN_COLUMN]:.1f}%) '
        f'across {len(aggregates)} groups.'
    )


def describe_trend(fit, label):
    """One sentence describing the fitted slope"""
    if fit is None:
        return f'{label}: not enough years to estimate a trend.'
    return (
        f'{label}: {fit.direction} by {abs(fit.slope):.2f} points per year '
        f'over {fit.n_years} years (R² = {fit.r_squared:.2f}).'
    )
