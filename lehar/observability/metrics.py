"""
Metrics definitions for LEHAR.

This module defines Prometheus metrics for monitoring
report submission, review and query traffic.
"""

from prometheus_client import Counter, Histogram, Gauge

# 카운터 메트릭
reports_submitted = Counter(
    "reports_submitted_total",
    "Number of hazard reports submitted",
    ["type", "severity"]
)

duplicates_flagged = Counter(
    "duplicates_flagged_total",
    "Number of submissions or checks that surfaced possible duplicates"
)

status_updates = Counter(
    "status_updates_total",
    "Number of report status changes",
    ["status"]
)

rejected_queries = Counter(
    "rejected_queries_total",
    "Number of queries rejected for invalid filter values"
)

# 히스토그램 메트릭
query_seconds = Histogram(
    "report_query_duration_seconds",
    "Time spent filtering and paginating reports",
    ["kind"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0]
)

duplicate_check_seconds = Histogram(
    "duplicate_check_duration_seconds",
    "Time spent scanning for duplicate reports",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0]
)

# 게이지 메트릭
report_store_size = Gauge(
    "report_store_size",
    "Current number of reports in the store"
)

uptime_seconds = Gauge(
    "uptime_seconds",
    "Service uptime in seconds"
)
