#!/usr/bin/env python3
"""
Survey Analysis - Grouped Means and Trend

Runs the standard analyses over the cleaned survey table:
- Obesity by location, age group and gender (most recent year)
- Physical activity by location (most recent year)
- Obesity by year, with a linear trend

Each result is printed, charted, and summarized in one sentence.

Usage:
  python -m analysis.survey_analysis
  python -m analysis.survey_analysis --cleaned-file data/silver/survey/cleaned_data.csv
  python -m analysis.survey_analysis --no-figures
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))
from config.paths import CLEANED_DATA_FILE, FIGURES, REPORTS

from analysis.aggregate import (
    AGE_GROUPS, GENDERS, LATEST_YEAR, MEAN_COLUMN,
    AllowList, aggregate, most_recent_year, filter_by_topic
)
from analysis.data_loader import load_cleaned_dataset
from analysis.trend import InsufficientDataError, fit_trend
from analysis.reports.survey_figures import (
    plot_ranking, plot_trend, describe_ranking, describe_trend
)


@dataclass(frozen=True)
class Analysis:
    """One grouped-mean question asked of the cleaned table"""
    name: str
    title: str
    topic_filter: str
    group_by: str
    year_filter: Union[int, str, None] = LATEST_YEAR
    allow_list: Optional[AllowList] = None


STANDARD_ANALYSES = [
    Analysis('obesity_by_location', 'Obesity prevalence by location',
             'obesity', 'location'),
    Analysis('obesity_by_age_group', 'Obesity prevalence by age group',
             'obesity', 'stratification', allow_list=AGE_GROUPS),
    Analysis('obesity_by_gender', 'Obesity prevalence by gender',
             'obesity', 'stratification', allow_list=GENDERS),
    Analysis('physical_activity_by_location', 'Physical activity by location',
             'physical activity', 'location'),
]

TREND_ANALYSIS = Analysis('obesity_by_year', 'Obesity prevalence by year',
                          'obesity', 'year_start', year_filter=None)


def resolve_year(df, analysis):
    """Concrete year an analysis will use (None = all years)"""
    if analysis.year_filter != LATEST_YEAR:
        return analysis.year_filter
    rows = filter_by_topic(df, analysis.topic_filter)
    if analysis.allow_list is not None:
        rows = rows[analysis.allow_list.mask(rows)]
    return most_recent_year(rows)


def run_analysis(df, analysis, top_n=10, verbose=True):
    """Aggregate one analysis and print its top groups"""
    result = aggregate(
        df,
        analysis.topic_filter,
        analysis.group_by,
        year_filter=analysis.year_filter,
        allow_list=analysis.allow_list,
    )

    if verbose:
        year = resolve_year(df, analysis)
        year_label = f' ({year})' if year is not None else ''
        print(f'\n{"="*70}')
        print(f'{analysis.title.upper()}{year_label}')
        print(f'{"="*70}')

        if result.empty:
            print('  No rows matched')
        for i, row in enumerate(result.head(top_n).itertuples(index=False), 1):
            key = getattr(row, analysis.group_by)
            print(f'{i:2d}. {str(key):35s} {getattr(row, MEAN_COLUMN):6.2f}')

    return result


def run_trend(df, analysis=TREND_ANALYSIS, verbose=True):
    """
    Yearly means plus their OLS fit

    Returns:
        Tuple of (yearly DataFrame, TrendFit or None when there are
        fewer than two usable years)
    """
    yearly = aggregate(df, analysis.topic_filter, analysis.group_by,
                       year_filter=analysis.year_filter,
                       allow_list=analysis.allow_list)
    yearly = yearly.sort_values(analysis.group_by).reset_index(drop=True)

    try:
        fit = fit_trend(yearly, year_col=analysis.group_by)
    except InsufficientDataError as e:
        if verbose:
            print(f'\n⚠️  {analysis.title}: {e}')
        return yearly, None

    if verbose:
        print(f'\n{"="*70}')
        print(f'{analysis.title.upper()} - TREND')
        print(f'{"="*70}')
        for row in yearly.itertuples(index=False):
            print(f'  {getattr(row, analysis.group_by)}: {getattr(row, MEAN_COLUMN):.2f}')
        print(f'  Slope: {fit.slope:+.3f} per year (R² = {fit.r_squared:.3f}, {fit.n_years} years)')

    return yearly, fit


def run_all(df, figures_dir=FIGURES, reports_dir=REPORTS, figures=True, verbose=True):
    """
    Run every standard analysis plus the trend

    Returns:
        Dict mapping analysis name -> aggregate DataFrame, plus
        'trend' -> TrendFit (or None) and 'summary' -> list of sentences
    """
    results = {}
    summary = []

    for analysis in STANDARD_ANALYSES:
        result = run_analysis(df, analysis, verbose=verbose)
        results[analysis.name] = result
        summary.append(describe_ranking(result, analysis.group_by, analysis.title))

        if figures:
            path = plot_ranking(result, analysis.group_by, analysis.title,
                                Path(figures_dir) / f'{analysis.name}.png', top_n=25)
            if verbose and path is not None:
                print(f'  ✓ Saved: {path}')

    yearly, fit = run_trend(df, verbose=verbose)
    results[TREND_ANALYSIS.name] = yearly
    results['trend'] = fit
    summary.append(describe_trend(fit, TREND_ANALYSIS.title))

    if figures:
        path = plot_trend(yearly, fit, TREND_ANALYSIS.title,
                          Path(figures_dir) / f'{TREND_ANALYSIS.name}.png')
        if verbose and path is not None:
            print(f'  ✓ Saved: {path}')

    results['summary'] = summary

    if reports_dir is not None:
        summary_path = Path(reports_dir) / 'summary.txt'
        summary_path.parent.mkdir(parents=True, exist_ok=True)
        summary_path.write_text('\n'.join(summary) + '\n', encoding='utf-8')
        if verbose:
            print(f'\n  ✓ Saved: {summary_path}')

    return results


def main():
    parser = argparse.ArgumentParser(description="Analyze the cleaned survey dataset")
    parser.add_argument('--cleaned-file', type=str, default=str(CLEANED_DATA_FILE),
                        help='Path to cleaned CSV')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Directory for figures and summary (default: outputs/)')
    parser.add_argument('--no-figures', action='store_true',
                        help='Skip chart rendering')

    args = parser.parse_args()

    if args.output_dir:
        figures_dir = Path(args.output_dir) / 'figures'
        reports_dir = Path(args.output_dir) / 'reports'
    else:
        figures_dir, reports_dir = FIGURES, REPORTS

    try:
        df = load_cleaned_dataset(args.cleaned_file)
    except FileNotFoundError as e:
        print(f"❌ {e}")
        return 1

    print(f"✓ Loaded {len(df):,} records from {args.cleaned_file}")

    results = run_all(df, figures_dir=figures_dir, reports_dir=reports_dir,
                      figures=not args.no_figures)

    print(f"\n{'='*70}")
    print("SUMMARY")
    print(f"{'='*70}")
    for sentence in results['summary']:
        print(f"  {sentence}")
    print()

    return 0


if __name__ == "__main__":
    sys.exit(main())
