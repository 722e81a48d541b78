"""Aggregation operators for row merges.

Operator names arrive from table metadata as strings. They are translated
to AggregationOp once per filter pass (resolve_operations) and dispatched
with a match statement from then on.

Absent values (MISSING or None) never take part in a comparison or an
addition: the other side wins.
"""

import copy
from collections.abc import Callable, Mapping
from numbers import Number
from typing import Any

import numpy as np

from tablefilter.contracts import (
    MISSING,
    AggregationOp,
    MergeError,
    UnknownAggregationError,
)
from tablefilter.core.table import DataTable

# Signature of the nested sub-table merge hook supplied by core.merge
TableMerger = Callable[[Any, Any], Any]


def resolve_operations(spec: Mapping[str, Any] | None) -> dict[str, AggregationOp]:
    """Translate a column -> operator-name mapping into AggregationOp variants.

    Args:
        spec: Mapping from table metadata, or None when the table has none

    Returns:
        Column -> AggregationOp mapping (empty when spec is None)

    Raises:
        UnknownAggregationError: If any operator name is unknown
        MergeError: If spec is not a mapping
    """
    if spec is None:
        return {}
    if not isinstance(spec, Mapping):
        raise MergeError(
            f"Aggregation operations must be a mapping of column to operator, "
            f"got {type(spec).__name__}"
        )

    resolved: dict[str, AggregationOp] = {}
    for column, name in spec.items():
        try:
            resolved[column] = AggregationOp.from_name(name)
        except UnknownAggregationError:
            raise UnknownAggregationError(name, column=column) from None
    return resolved


def is_absent(value: Any) -> bool:
    return value is MISSING or value is None


def is_numeric(value: Any) -> bool:
    """Numbers and numpy numeric scalars; bools are not numeric here."""
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (Number, np.number))


def merge_values(
    operation: AggregationOp,
    current: Any,
    incoming: Any,
    *,
    merge_tables: TableMerger | None = None,
) -> Any:
    """Combine the representative's value with a merged row's value.

    Args:
        operation: Operator for this column
        current: Representative's value (MISSING if absent)
        incoming: Merged row's value (MISSING if absent)
        merge_tables: Called as merge_tables(current, incoming) when both
            values are nested tables under SUM

    Returns:
        The merged value. Never MISSING when either side is present.

    Raises:
        MergeError: If the values cannot be combined under this operator
    """
    match operation:
        case AggregationOp.SUM:
            return _sum(current, incoming, merge_tables)
        case AggregationOp.MAX:
            return _compare(max, current, incoming, operation)
        case AggregationOp.MIN:
            return _compare(min, current, incoming, operation)
        case AggregationOp.FIRST:
            # A stored None is a value here; only a missing column is replaced
            if current is MISSING:
                return copy.deepcopy(incoming)
            return current
        case AggregationOp.SKIP:
            return None


def _compare(
    pick: Callable[[Any, Any], Any],
    current: Any,
    incoming: Any,
    operation: AggregationOp,
) -> Any:
    if is_absent(incoming):
        return current
    if is_absent(current):
        return copy.deepcopy(incoming)
    try:
        return pick(current, incoming)
    except TypeError as e:
        raise MergeError(
            f"'{operation.value}' cannot compare {type(current).__name__} "
            f"with {type(incoming).__name__}",
            operation=operation.value,
        ) from e


def _sum(current: Any, incoming: Any, merge_tables: TableMerger | None) -> Any:
    if is_absent(incoming):
        return current
    if is_absent(current):
        return copy.deepcopy(incoming)

    if is_numeric(current) and is_numeric(incoming):
        return current + incoming

    if isinstance(current, Mapping) and isinstance(incoming, Mapping):
        summed = dict(current)
        for key, value in incoming.items():
            merged = _sum(summed.get(key, MISSING), value, merge_tables)
            summed[key] = copy.deepcopy(value) if merged is MISSING else merged
        return summed

    if merge_tables is not None and _both_tables(current, incoming):
        return merge_tables(current, incoming)

    raise MergeError(
        f"'sum' cannot add {type(current).__name__} ({current!r}) "
        f"and {type(incoming).__name__} ({incoming!r})",
        operation=AggregationOp.SUM.value,
    )


def _both_tables(current: Any, incoming: Any) -> bool:
    return isinstance(current, DataTable) and isinstance(incoming, DataTable)
