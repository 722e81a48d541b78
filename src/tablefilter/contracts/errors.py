"""Error taxonomy for table filters.

Filters never catch these internally: every failure aborts the pass and
surfaces synchronously to the caller. There is no rollback, so a table may
be left partially filtered.
"""

from typing import Any


class TableFilterError(Exception):
    """Base class for all filter failures."""


class ColumnNotFoundError(TableFilterError, KeyError):
    """Raised when a row lacks the column a filter was configured with."""

    def __init__(self, column: str, row_id: int | None = None) -> None:
        self.column = column
        self.row_id = row_id
        where = f" (row {row_id})" if row_id is not None else ""
        super().__init__(f"Column '{column}' not found{where}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class GroupKeyError(TableFilterError, TypeError):
    """Raised when a key reducer returns a value that cannot be a group key."""

    def __init__(self, key: Any, row_id: int | None = None) -> None:
        self.key = key
        self.row_id = row_id
        super().__init__(
            f"Group key {key!r} for row {row_id} is not hashable. "
            "Key reducers must return hashable values."
        )


class MergeError(TableFilterError):
    """Raised when two values cannot be combined under an aggregation operator."""

    def __init__(
        self,
        message: str,
        *,
        column: str | None = None,
        operation: str | None = None,
    ) -> None:
        self.column = column
        self.operation = operation
        if column is not None:
            message = f"Cannot merge column '{column}': {message}"
        super().__init__(message)


class UnknownAggregationError(MergeError, ValueError):
    """Raised when table metadata names an aggregation operator that does not exist."""

    def __init__(self, name: Any, *, column: str | None = None) -> None:
        self.name = name
        super().__init__(
            f"Unknown aggregation operation {name!r}",
            column=column,
            operation=str(name),
        )


class FilterQueueError(TableFilterError):
    """Raised when a filter that must run immediately is queued."""


class UnknownFilterError(TableFilterError, LookupError):
    """Raised when a filter name is not registered with the plugin manager."""
