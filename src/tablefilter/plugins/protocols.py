"""Protocols at the boundary between filters and the table container.

These define what a filter consumes from a table and what the table
expects from a filter. They're used for type checking and isinstance()
checks at registration, not for dispatch.
"""

from collections.abc import Iterable, Iterator
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RowProtocol(Protocol):
    """A row with named columns and row-level metadata."""

    def get_column(self, name: str) -> Any:
        """Return the value or MISSING."""
        ...

    def set_column(self, name: str, value: Any) -> None: ...

    def get_columns(self) -> dict[str, Any]: ...

    def get_all_metadata(self) -> dict[str, Any]: ...


@runtime_checkable
class TableProtocol(Protocol):
    """Everything a filter needs from a table.

    - Ordered iteration over (row_id, row), summary row included
    - A reserved summary-row id to skip
    - Table metadata lookup
    - Bulk deletion by row id
    """

    ID_SUMMARY_ROW: int
    COLUMN_AGGREGATION_OPS_METADATA_NAME: str

    def items(self) -> Iterator[tuple[int, Any]]: ...

    def get_metadata(self, name: str, default: Any = None) -> Any: ...

    def delete_rows(self, row_ids: Iterable[int]) -> None: ...


@runtime_checkable
class FilterProtocol(Protocol):
    """Protocol for table filters.

    Lifecycle:
    1. __init__(config) - Plugin instantiation, config validated here
    2. filter(table) - Mutates the table in place

    Example:
        class DropSummary:
            name = "drop_summary"
            queueable = True

            def filter(self, table: TableProtocol) -> None:
                table.delete_rows([table.ID_SUMMARY_ROW])
    """

    name: str
    queueable: bool

    def __init__(self, config: dict[str, Any]) -> None:
        """Initialize with configuration."""
        ...

    def filter(self, table: Any) -> None:
        """Apply the filter to `table` in place."""
        ...
