"""
Adapters for LEHAR.

This module contains the concrete implementations of port interfaces
that handle external I/O and infrastructure concerns.
"""

from .storage import SQLiteReportStore, ReportNotFoundError

__all__ = ["SQLiteReportStore", "ReportNotFoundError"]
