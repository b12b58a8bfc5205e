"""Report engine computing the fixed catalog reports."""

from .engine import CatalogReportEngine, classify_description
from .registry import REPORTS, ReportDefinition, available_reports, get_report, run_report

__all__ = [
    "CatalogReportEngine",
    "REPORTS",
    "ReportDefinition",
    "available_reports",
    "classify_description",
    "get_report",
    "run_report",
]
