"""GroupBy filter plugin.

Collapses rows whose group-by column reduces to the same key into a single
row. The first row seen for a key survives; later rows are summed into it
using the table's column aggregation operations and then deleted.

IMPORTANT: GroupBy must be applied directly to a table. It cannot be
queued, because the result depends on seeing the complete row set in one
pass.

Example:
    # group URLs by host
    table.filter("group_by", {
        "column": "label",
        "reduce_function": lambda url: urlsplit(url).hostname,
    })
"""

from collections.abc import Callable, Hashable
from typing import Any

from pydantic import Field

from tablefilter.contracts import MISSING, ColumnNotFoundError, GroupKeyError
from tablefilter.core.aggregation import resolve_operations
from tablefilter.core.config import AggregationSettings
from tablefilter.core.logging import get_logger
from tablefilter.core.merge import merge_rows
from tablefilter.core.table import DataTable, Row
from tablefilter.plugins.base import BaseFilter
from tablefilter.plugins.config_base import FilterConfig

logger = get_logger(__name__)


class GroupByConfig(FilterConfig):
    """Configuration for the group-by filter.

    The key reducer is called as reduce_function(value, *parameters).
    """

    reduce_function: Callable[..., Any]
    parameters: tuple[Any, ...] = Field(default_factory=tuple)
    aggregation: AggregationSettings = Field(default_factory=AggregationSettings)


class GroupBy(BaseFilter):
    """Group rows by the reduced value of one column.

    Config options:
        column: Required. Column whose value is reduced to a group key
        reduce_function: Required. Callable returning a hashable group key
        parameters: Extra positional arguments passed after the column value
        aggregation: AggregationSettings (default operator, unsummable columns)
    """

    name = "group_by"
    plugin_version = "1.0.0"
    queueable = False
    config_model = GroupByConfig

    def __init__(self, config: dict[str, Any]) -> None:
        super().__init__(config)
        cfg = GroupByConfig.from_dict(config)
        self._column: str = cfg.column
        self._reduce_function: Callable[..., Any] = cfg.reduce_function
        self._parameters: tuple[Any, ...] = cfg.parameters
        self._aggregation: AggregationSettings = cfg.aggregation

    def filter(self, table: DataTable) -> None:
        """Group the rows of `table` in place.

        Raises:
            ColumnNotFoundError: If a row lacks the group-by column
            GroupKeyError: If the reducer returns an unhashable key
            UnknownAggregationError: If the table names an unknown operator
            MergeError: If two rows cannot be merged
            Exception: Anything the reducer raises, unmodified
        """
        # Resolve operator names before touching any row
        operations = resolve_operations(
            table.get_metadata(table.COLUMN_AGGREGATION_OPS_METADATA_NAME)
        )
        skip_columns = frozenset({self._column})

        group_rows: dict[Hashable, Row] = {}
        merged_row_ids: list[int] = []
        rows_seen = 0

        for row_id, row in table.items():
            if row_id == table.ID_SUMMARY_ROW:
                continue
            rows_seen += 1

            group_key = self._reduce(row_id, row)

            try:
                representative = group_rows.get(group_key)
            except TypeError as e:
                raise GroupKeyError(group_key, row_id) from e

            if representative is None:
                group_rows[group_key] = row
                row.set_column(self._column, group_key)
            else:
                merge_rows(
                    representative,
                    row,
                    operations,
                    self._aggregation,
                    skip_columns=skip_columns,
                )
                merged_row_ids.append(row_id)

        table.delete_rows(merged_row_ids)

        logger.debug(
            "Grouped table rows",
            column=self._column,
            rows_seen=rows_seen,
            groups=len(group_rows),
            rows_merged=len(merged_row_ids),
        )

    def _reduce(self, row_id: int, row: Row) -> Any:
        value = row.get_column(self._column)
        if value is MISSING:
            raise ColumnNotFoundError(self._column, row_id)
        return self._reduce_function(value, *self._parameters)


def group_by(
    table: DataTable,
    column: str,
    reduce_function: Callable[..., Any],
    *parameters: Any,
    aggregation: AggregationSettings | None = None,
) -> None:
    """Group `table` in place by the reduced value of `column`.

    Args:
        table: Table to mutate
        column: Group-by column
        reduce_function: Key reducer, called as reduce_function(value, *parameters)
        *parameters: Fixed extra arguments for the reducer
        aggregation: Merge settings (defaults when None)
    """
    config: dict[str, Any] = {
        "column": column,
        "reduce_function": reduce_function,
        "parameters": parameters,
    }
    if aggregation is not None:
        config["aggregation"] = aggregation
    table.filter(GroupBy(config))
