"""Status resolution and report aggregation module."""

from .aggregator import ReportAggregator, ReportPage, ReportRow
from .attribution import classify_attribution, infer_from_history, matches_attribution
from .columns import DEFAULT_COLUMNS, StatusColumn, column_keys, count_columns
from .filters import ColumnFilters, DateRange, DateWindowPolicy, ReportFilters
from .service import ReportService, get_report_service
from .timestamps import current_status_timestamp, resolve_status_timestamp, to_naive_utc

__all__ = [
    # Aggregation
    "ReportAggregator",
    "ReportPage",
    "ReportRow",
    # Attribution
    "classify_attribution",
    "infer_from_history",
    "matches_attribution",
    # Columns
    "DEFAULT_COLUMNS",
    "StatusColumn",
    "column_keys",
    "count_columns",
    # Filters
    "ColumnFilters",
    "DateRange",
    "DateWindowPolicy",
    "ReportFilters",
    # Service
    "ReportService",
    "get_report_service",
    # Timestamps
    "current_status_timestamp",
    "resolve_status_timestamp",
    "to_naive_utc",
]
