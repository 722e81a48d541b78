# src/tablefilter/plugins/base.py
"""Base classes for filter implementations.

These provide common functionality and ensure proper interface compliance.
Filters can subclass these for convenience, or implement FilterProtocol
directly.
"""

from abc import ABC, abstractmethod
from typing import Any

from tablefilter.contracts import Determinism
from tablefilter.core.table import DataTable


class BaseFilter(ABC):
    """Base class for table filters.

    A filter receives a whole table and mutates it in place. Subclass and
    implement filter() to create one.

    Example:
        class DropEmpty(BaseFilter):
            name = "drop_empty"

            def filter(self, table: DataTable) -> None:
                empty = [
                    row_id
                    for row_id, row in table.items()
                    if row_id != table.ID_SUMMARY_ROW and not row.get_columns()
                ]
                table.delete_rows(empty)
    """

    name: str

    # Filters that must see the table as it is right now set this to False;
    # DataTable.queue_filter() refuses them.
    queueable: bool = True

    determinism: Determinism = Determinism.DETERMINISTIC
    plugin_version: str = "0.0.0"

    def __init__(self, config: dict[str, Any]) -> None:
        """Initialize with configuration."""
        self.config = config

    @abstractmethod
    def filter(self, table: DataTable) -> None:
        """Apply the filter to `table` in place.

        Args:
            table: Table to mutate
        """
        ...
