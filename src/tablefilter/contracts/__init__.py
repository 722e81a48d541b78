"""Shared contracts for cross-boundary data types.

Enums, errors and sentinels used by both the table container and the
filters are defined here.

Import pattern:
    from tablefilter.contracts import AggregationOp, MergeError, MISSING
"""

from tablefilter.contracts.enums import AggregationOp, Determinism
from tablefilter.contracts.errors import (
    ColumnNotFoundError,
    FilterQueueError,
    GroupKeyError,
    MergeError,
    TableFilterError,
    UnknownAggregationError,
    UnknownFilterError,
)
from tablefilter.contracts.sentinels import MISSING

__all__ = [
    # enums
    "AggregationOp",
    "Determinism",
    # errors
    "ColumnNotFoundError",
    "FilterQueueError",
    "GroupKeyError",
    "MergeError",
    "TableFilterError",
    "UnknownAggregationError",
    "UnknownFilterError",
    # sentinels
    "MISSING",
]
