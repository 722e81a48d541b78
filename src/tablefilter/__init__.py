"""tablefilter: in-place filters over in-memory tables of rows.

Usage:
    from tablefilter import DataTable, group_by

    table = DataTable()
    table.add_rows_from_dicts([{"label": "a.com/x", "nb_visits": 3}])
    group_by(table, "label", lambda url: url.split("/")[0])
"""

from tablefilter.contracts import (
    MISSING,
    AggregationOp,
    ColumnNotFoundError,
    Determinism,
    FilterQueueError,
    GroupKeyError,
    MergeError,
    TableFilterError,
    UnknownAggregationError,
    UnknownFilterError,
)
from tablefilter.core import (
    AggregationSettings,
    DataTable,
    Row,
    TableFilterSettings,
    configure_logging,
    load_settings,
    merge_rows,
)
from tablefilter.plugins.filters import GroupBy, group_by

__version__ = "0.1.0"

__all__ = [
    "AggregationOp",
    "AggregationSettings",
    "ColumnNotFoundError",
    "DataTable",
    "Determinism",
    "FilterQueueError",
    "GroupBy",
    "GroupKeyError",
    "MISSING",
    "MergeError",
    "Row",
    "TableFilterError",
    "TableFilterSettings",
    "UnknownAggregationError",
    "UnknownFilterError",
    "__version__",
    "configure_logging",
    "group_by",
    "load_settings",
    "merge_rows",
]
