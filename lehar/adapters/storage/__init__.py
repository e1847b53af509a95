"""
Storage adapters for LEHAR.

This module contains the SQLite-backed report store.
"""

from .sqlite_reports import SQLiteReportStore, ReportNotFoundError

__all__ = ["SQLiteReportStore", "ReportNotFoundError"]
