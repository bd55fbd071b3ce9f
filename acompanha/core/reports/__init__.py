"""
Report Data Module

Builds the data behind the patient report and the weekly summary card:
- Period summary: averages of recent check-ins with per-metric labels
- Weekly comparison: latest vs previous check-in
"""
from .period_summary import MetricAverage, PeriodSummary, classify_average, summarize_period
from .weekly_comparison import MetricChange, WeeklyComparison, compare_latest

__all__ = [
    "MetricAverage",
    "PeriodSummary",
    "classify_average",
    "summarize_period",
    "MetricChange",
    "WeeklyComparison",
    "compare_latest",
]
