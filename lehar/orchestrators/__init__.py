"""
Orchestrators for LEHAR.

This module contains the services that coordinate
the flow between the report store and the core functions.
"""
from .report_service import ReportService

__all__ = ["ReportService"]
