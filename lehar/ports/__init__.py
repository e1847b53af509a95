"""
Port interfaces for LEHAR.

This module defines the port interfaces (Protocols) that define
the contracts between the core domain and external adapters.
"""

from .reports import ReportStorePort

__all__ = ["ReportStorePort"]
