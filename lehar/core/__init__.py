"""
Core domain models and pure functions for LEHAR.

This module contains the report models and the pure duplicate
detection and query logic that are independent of storage and HTTP.
"""

from .models import (
    HazardType, Severity, ReportStatus, ReportSource, Location, Report,
    ReportCreate, ReportFilter, ReportPage, FeatureCollection, ReportStats,
)
from .duplicates import find_duplicates
from .query import query_reports, reports_for_map, report_stats

__all__ = [
    "HazardType", "Severity", "ReportStatus", "ReportSource", "Location", "Report",
    "ReportCreate", "ReportFilter", "ReportPage", "FeatureCollection", "ReportStats",
    "find_duplicates", "query_reports", "reports_for_map", "report_stats",
]
