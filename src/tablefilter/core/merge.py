"""Row merge: fold one row into another under per-column aggregation operators.

merge_rows() mutates the representative in place. The merged row is left
as it was but must be treated as discarded by the caller: values copied
from it are deep copies, so deleting it never affects the representative.
"""

import copy
from collections.abc import Mapping

from tablefilter.contracts import MISSING, AggregationOp, MergeError
from tablefilter.core.aggregation import merge_values, resolve_operations
from tablefilter.core.config import AggregationSettings
from tablefilter.core.table import DataTable, Row


def merge_rows(
    representative: Row,
    victim: Row,
    operations: Mapping[str, AggregationOp],
    settings: AggregationSettings | None = None,
    *,
    skip_columns: frozenset[str] = frozenset(),
) -> None:
    """Merge `victim` into `representative`.

    Args:
        representative: Row that survives and accumulates values
        victim: Row being merged away
        operations: Resolved column -> operator map; other columns use
            settings.default_operation
        settings: Merge settings (defaults when None)
        skip_columns: Extra columns left untouched, such as the group-by column

    Raises:
        MergeError: If a column's values cannot be combined
    """
    if settings is None:
        settings = AggregationSettings()
    untouched = skip_columns.union(settings.unsummable_columns)

    def merge_tables(current: DataTable, incoming: DataTable) -> DataTable:
        merge_tables_into(current, incoming, operations, settings)
        return current

    for column, incoming in victim.get_columns().items():
        if column in untouched:
            continue

        operation = operations.get(column, settings.default_operation)
        current = representative.get_column(column)
        try:
            merged = merge_values(
                operation, current, incoming, merge_tables=merge_tables
            )
        except MergeError as e:
            if e.column is not None:
                raise
            raise MergeError(str(e), column=column, operation=e.operation) from e

        if merged is MISSING:
            merged = copy.deepcopy(incoming)
        representative.set_column(column, merged)

    merge_metadata(representative, victim)


def merge_metadata(representative: Row, victim: Row) -> None:
    """Fold the victim's metadata into the representative.

    Keys the representative lacks are copied; keys it already has keep the
    representative's value.
    """
    metadata = representative.get_all_metadata()
    for key, value in victim.get_all_metadata().items():
        if key not in metadata:
            metadata[key] = copy.deepcopy(value)


def merge_tables_into(
    target: DataTable,
    source: DataTable,
    operations: Mapping[str, AggregationOp],
    settings: AggregationSettings,
) -> None:
    """Merge every row of `source` into the matching row of `target`.

    Rows are matched on settings.label_column. Unmatched rows are appended
    as copies; the summary rows are merged with each other. `source` is
    not modified.

    `target`'s own aggregation metadata takes precedence over the
    operators inherited from the parent table.
    """
    own = target.get_metadata(target.COLUMN_AGGREGATION_OPS_METADATA_NAME)
    if own is not None:
        operations = resolve_operations(own)

    label_column = settings.label_column
    skip_columns = frozenset({label_column})
    labelled = {
        row.get_column(label_column): row
        for row in reversed(target.get_rows())
        if row.get_column(label_column) is not MISSING
    }

    for row in source.get_rows():
        label = row.get_column(label_column)
        existing = labelled.get(label) if label is not MISSING else None
        if existing is None:
            added = row.copy()
            target.add_row(added)
            if label is not MISSING:
                labelled[label] = added
        else:
            merge_rows(existing, row, operations, settings, skip_columns=skip_columns)

    source_summary = source.get_summary_row()
    if source_summary is not None:
        target_summary = target.get_summary_row()
        if target_summary is None:
            target.set_summary_row(source_summary.copy())
        else:
            merge_rows(
                target_summary,
                source_summary,
                operations,
                settings,
                skip_columns=skip_columns,
            )
