"""Core infrastructure: table container, row merge, canonical hashing, configuration, logging."""

from tablefilter.core.aggregation import merge_values, resolve_operations
from tablefilter.core.canonical import (
    CANONICAL_VERSION,
    canonical_json,
    stable_hash,
)
from tablefilter.core.config import (
    AggregationSettings,
    LoggingSettings,
    TableFilterSettings,
    load_settings,
)
from tablefilter.core.logging import (
    configure_logging,
    get_logger,
)
from tablefilter.core.merge import merge_metadata, merge_rows, merge_tables_into
from tablefilter.core.table import DataTable, Row

__all__ = [
    "AggregationSettings",
    "CANONICAL_VERSION",
    "DataTable",
    "LoggingSettings",
    "Row",
    "TableFilterSettings",
    "canonical_json",
    "configure_logging",
    "get_logger",
    "load_settings",
    "merge_metadata",
    "merge_rows",
    "merge_tables_into",
    "merge_values",
    "resolve_operations",
    "stable_hash",
]
