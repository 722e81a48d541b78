"""In-memory table container.

A DataTable owns an ordered arena of Rows keyed by stable integer ids plus
an optional summary row stored under ID_SUMMARY_ROW. Filters read and mutate
rows in place and request deletions through delete_rows(), which is the
only operation that removes rows from the arena.

Example:
    table = DataTable()
    table.add_rows_from_dicts([
        {"label": "a.com/x", "count": 1},
        {"label": "a.com/y", "count": 2},
    ])
    table.filter("group_by", {
        "column": "label",
        "reduce_function": lambda url: url.split("/")[0],
    })
"""

import copy
import logging
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any

from tablefilter.contracts import MISSING, FilterQueueError, UnknownFilterError

if TYPE_CHECKING:
    from tablefilter.plugins.protocols import FilterProtocol

logger = logging.getLogger(__name__)


class Row:
    """A single table row: named column values plus row-level metadata.

    Row identity is the object itself. Filters mutate columns and metadata
    in place rather than replacing the row.
    """

    def __init__(
        self,
        columns: dict[str, Any] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        self._columns: dict[str, Any] = dict(columns) if columns else {}
        self._metadata: dict[str, Any] = dict(metadata) if metadata else {}

    def __repr__(self) -> str:
        return f"Row(columns={self._columns!r}, metadata={self._metadata!r})"

    # === Columns ===

    def get_column(self, name: str) -> Any:
        """Return the column value, or MISSING if the row has no such column."""
        if name not in self._columns:
            return MISSING
        return self._columns[name]

    def has_column(self, name: str) -> bool:
        return name in self._columns

    def set_column(self, name: str, value: Any) -> None:
        self._columns[name] = value

    def delete_column(self, name: str) -> None:
        del self._columns[name]

    def get_columns(self) -> dict[str, Any]:
        """Live column mapping (mutations are visible to the row)."""
        return self._columns

    # === Metadata ===

    def get_metadata(self, name: str) -> Any:
        if name not in self._metadata:
            return MISSING
        return self._metadata[name]

    def set_metadata(self, name: str, value: Any) -> None:
        self._metadata[name] = value

    def get_all_metadata(self) -> dict[str, Any]:
        """Live metadata mapping (mutations are visible to the row)."""
        return self._metadata

    def copy(self) -> "Row":
        """Deep copy, nested sub-tables included.

        Copies are independent: a row copied into another table never shares
        state with its origin.
        """
        return Row(
            columns=copy.deepcopy(self._columns),
            metadata=copy.deepcopy(self._metadata),
        )


class DataTable:
    """Ordered collection of rows with table-level metadata.

    Row ids are assigned incrementally and never reused, so a row id stays
    valid until that row is deleted.
    """

    ID_SUMMARY_ROW = -1
    COLUMN_AGGREGATION_OPS_METADATA_NAME = "column_aggregation_ops"

    def __init__(self, metadata: dict[str, Any] | None = None) -> None:
        self._rows: dict[int, Row] = {}
        self._summary_row: Row | None = None
        self._next_row_id = 0
        self._metadata: dict[str, Any] = dict(metadata) if metadata else {}
        self._queued_filters: list["FilterProtocol"] = []

    def __repr__(self) -> str:
        return (
            f"DataTable(rows={len(self._rows)}, "
            f"summary_row={self._summary_row is not None})"
        )

    def __len__(self) -> int:
        return len(self._rows)

    # === Rows ===

    def add_row(self, row: Row) -> int:
        """Append a row and return its id."""
        row_id = self._next_row_id
        self._next_row_id += 1
        self._rows[row_id] = row
        return row_id

    def add_rows_from_dicts(self, rows: Iterable[dict[str, Any]]) -> list[int]:
        """Append one row per column dict and return the new ids."""
        return [self.add_row(Row(columns=columns)) for columns in rows]

    def set_summary_row(self, row: Row | None) -> None:
        self._summary_row = row

    def get_summary_row(self) -> Row | None:
        return self._summary_row

    def get_row(self, row_id: int) -> Row:
        """Return the row with the given id.

        Raises:
            KeyError: If no row has that id
        """
        if row_id == self.ID_SUMMARY_ROW:
            if self._summary_row is None:
                raise KeyError(row_id)
            return self._summary_row
        return self._rows[row_id]

    def get_row_from_label(self, label: Any, column: str = "label") -> Row | None:
        """Return the first data row whose `column` equals `label`."""
        for row in self._rows.values():
            if row.get_column(column) == label:
                return row
        return None

    def get_rows(self) -> list[Row]:
        """Data rows in table order (summary row excluded)."""
        return list(self._rows.values())

    def items(self) -> Iterator[tuple[int, Row]]:
        """Yield (row_id, row) pairs in table order, summary row last."""
        yield from self._rows.items()
        if self._summary_row is not None:
            yield self.ID_SUMMARY_ROW, self._summary_row

    def row_count(self) -> int:
        """Number of data rows (summary row excluded)."""
        return len(self._rows)

    def get_column(self, name: str) -> list[Any]:
        """Values of one column across data rows, MISSING where absent."""
        return [row.get_column(name) for row in self._rows.values()]

    def delete_rows(self, row_ids: Iterable[int]) -> None:
        """Delete several rows in one operation.

        The summary row is deleted only when ID_SUMMARY_ROW is named
        explicitly. Remaining rows keep their ids and relative order.

        Raises:
            KeyError: If an id does not belong to this table. Nothing is
                deleted in that case.
        """
        ids = list(row_ids)
        for row_id in ids:
            if row_id == self.ID_SUMMARY_ROW:
                if self._summary_row is None:
                    raise KeyError(row_id)
            elif row_id not in self._rows:
                raise KeyError(row_id)

        for row_id in ids:
            if row_id == self.ID_SUMMARY_ROW:
                self._summary_row = None
            else:
                del self._rows[row_id]

        if ids:
            logger.debug("Deleted %d rows, %d remaining", len(ids), len(self._rows))

    # === Metadata ===

    def get_metadata(self, name: str, default: Any = None) -> Any:
        if name not in self._metadata:
            return default
        return self._metadata[name]

    def set_metadata(self, name: str, value: Any) -> None:
        self._metadata[name] = value

    def get_all_metadata(self) -> dict[str, Any]:
        return self._metadata

    def copy(self) -> "DataTable":
        """Deep copy of rows, summary row and metadata. Queued filters are not copied."""
        table = DataTable(metadata=copy.deepcopy(self._metadata))
        for row_id, row in self._rows.items():
            table._rows[row_id] = row.copy()
        table._next_row_id = self._next_row_id
        if self._summary_row is not None:
            table._summary_row = self._summary_row.copy()
        return table

    def __deepcopy__(self, memo: dict[int, Any]) -> "DataTable":
        return self.copy()

    # === Filters ===

    def filter(
        self,
        filter_: "str | type[FilterProtocol] | FilterProtocol",
        config: dict[str, Any] | None = None,
    ) -> None:
        """Apply a filter to this table immediately.

        Args:
            filter_: Registered filter name, filter class, or filter instance
            config: Filter configuration (ignored for instances)

        Raises:
            UnknownFilterError: If a filter name is not registered
        """
        self._build_filter(filter_, config).filter(self)

    def queue_filter(
        self,
        filter_: "str | type[FilterProtocol] | FilterProtocol",
        config: dict[str, Any] | None = None,
    ) -> None:
        """Defer a filter until apply_queued_filters() is called.

        Raises:
            FilterQueueError: If the filter must be applied immediately
        """
        instance = self._build_filter(filter_, config)
        if not instance.queueable:
            raise FilterQueueError(
                f"Filter '{instance.name}' cannot be queued; "
                "apply it directly with DataTable.filter()"
            )
        self._queued_filters.append(instance)

    def apply_queued_filters(self) -> None:
        """Apply and clear queued filters in the order they were queued."""
        queued, self._queued_filters = self._queued_filters, []
        for instance in queued:
            instance.filter(self)

    def _build_filter(
        self,
        filter_: "str | type[FilterProtocol] | FilterProtocol",
        config: dict[str, Any] | None,
    ) -> "FilterProtocol":
        if isinstance(filter_, str):
            from tablefilter.plugins.manager import get_default_manager

            filter_cls = get_default_manager().get_filter_by_name(filter_)
            if filter_cls is None:
                raise UnknownFilterError(f"No filter registered as '{filter_}'")
            return filter_cls(config or {})
        if isinstance(filter_, type):
            return filter_(config or {})
        return filter_
