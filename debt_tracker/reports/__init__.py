"""Derived views over the debtor collection."""

from debt_tracker.reports.dashboard import DashboardSummary, summarize
from debt_tracker.reports.monthly import MONTH_NAMES, MonthlyReport, ReportEntry, project_month

__all__ = [
    "MONTH_NAMES",
    "DashboardSummary",
    "MonthlyReport",
    "ReportEntry",
    "project_month",
    "summarize",
]
