"""
Analysis Module

Grouped aggregates, trend estimation and reporting over the cleaned survey

Modules:
- aggregate: topic/year/allow-list filtering and grouped means
- trend: OLS slope over yearly means
- survey_analysis: standard analyses (CLI)
- reports: charts and one-line narratives
"""

__version__ = "1.0.0"
