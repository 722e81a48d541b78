"""Tests for aggregation operator translation and pairwise value merging."""

import numpy as np
import pytest

from tablefilter.contracts import (
    MISSING,
    AggregationOp,
    MergeError,
    UnknownAggregationError,
)
from tablefilter.core.aggregation import (
    is_numeric,
    merge_values,
    resolve_operations,
)


class TestResolveOperations:
    def test_none_is_empty(self) -> None:
        assert resolve_operations(None) == {}

    def test_translates_names(self) -> None:
        resolved = resolve_operations({"peak": "MAX", "low": "min", "id": AggregationOp.FIRST})

        assert resolved == {
            "peak": AggregationOp.MAX,
            "low": AggregationOp.MIN,
            "id": AggregationOp.FIRST,
        }

    def test_unknown_name_reports_column(self) -> None:
        with pytest.raises(UnknownAggregationError) as exc_info:
            resolve_operations({"peak": "max", "time": "average"})

        assert exc_info.value.column == "time"
        assert "time" in str(exc_info.value)

    def test_rejects_non_mapping(self) -> None:
        with pytest.raises(MergeError, match="mapping"):
            resolve_operations(["max"])  # type: ignore[arg-type]


class TestIsNumeric:
    @pytest.mark.parametrize("value", [1, 2.5, np.int64(3), np.float32(1.5)])
    def test_numbers(self, value: object) -> None:
        assert is_numeric(value)

    @pytest.mark.parametrize("value", [True, np.bool_(False), "1", None, MISSING])
    def test_non_numbers(self, value: object) -> None:
        assert not is_numeric(value)


class TestSum:
    def test_adds_numbers(self) -> None:
        assert merge_values(AggregationOp.SUM, 5, 9) == 14

    def test_adds_numpy_scalars(self) -> None:
        assert merge_values(AggregationOp.SUM, np.int64(2), 3) == 5

    @pytest.mark.parametrize("absent", [MISSING, None])
    def test_absent_side_yields_other(self, absent: object) -> None:
        assert merge_values(AggregationOp.SUM, absent, 4) == 4
        assert merge_values(AggregationOp.SUM, 4, absent) == 4

    def test_sums_mappings_recursively(self) -> None:
        merged = merge_values(
            AggregationOp.SUM,
            {"a": 1, "nested": {"x": 1}},
            {"a": 2, "b": 3, "nested": {"x": 4, "y": 1}},
        )

        assert merged == {"a": 3, "b": 3, "nested": {"x": 5, "y": 1}}

    def test_mapping_key_only_in_incoming_keeps_none(self) -> None:
        merged = merge_values(AggregationOp.SUM, {"x": 1}, {"y": None, "z": {"w": None}})

        assert merged == {"x": 1, "y": None, "z": {"w": None}}
        assert merged["y"] is not MISSING

    def test_incoming_value_is_copied(self) -> None:
        incoming = {"a": [1]}

        merged = merge_values(AggregationOp.SUM, MISSING, incoming)
        merged["a"].append(2)

        assert incoming == {"a": [1]}

    def test_two_strings_raise(self) -> None:
        with pytest.raises(MergeError, match="'sum' cannot add"):
            merge_values(AggregationOp.SUM, "a", "b")

    def test_number_and_string_raise(self) -> None:
        with pytest.raises(MergeError):
            merge_values(AggregationOp.SUM, 1, "b")

    def test_tables_without_hook_raise(self) -> None:
        from tablefilter.core.table import DataTable

        with pytest.raises(MergeError):
            merge_values(AggregationOp.SUM, DataTable(), DataTable())

    def test_tables_use_hook(self) -> None:
        from tablefilter.core.table import DataTable

        left, right = DataTable(), DataTable()
        calls = []

        def hook(current: DataTable, incoming: DataTable) -> DataTable:
            calls.append((current, incoming))
            return current

        assert merge_values(AggregationOp.SUM, left, right, merge_tables=hook) is left
        assert calls == [(left, right)]


class TestMaxMin:
    def test_max(self) -> None:
        assert merge_values(AggregationOp.MAX, 5, 9) == 9
        assert merge_values(AggregationOp.MAX, 9, 5) == 9

    def test_min(self) -> None:
        assert merge_values(AggregationOp.MIN, 5, 9) == 5
        assert merge_values(AggregationOp.MIN, 9, 5) == 5

    def test_min_keeps_zero(self) -> None:
        """Zero is a value, not an absence."""
        assert merge_values(AggregationOp.MIN, 0, 7) == 0

    @pytest.mark.parametrize("op", [AggregationOp.MAX, AggregationOp.MIN])
    def test_absent_side_yields_other(self, op: AggregationOp) -> None:
        assert merge_values(op, MISSING, 3) == 3
        assert merge_values(op, 3, None) == 3

    def test_strings_compare(self) -> None:
        assert merge_values(AggregationOp.MAX, "2024-01-01", "2024-03-01") == "2024-03-01"

    def test_incomparable_raise(self) -> None:
        with pytest.raises(MergeError, match="'max' cannot compare"):
            merge_values(AggregationOp.MAX, 1, "x")


class TestFirstAndSkip:
    def test_first_keeps_current(self) -> None:
        assert merge_values(AggregationOp.FIRST, "kept", "ignored") == "kept"

    def test_first_takes_incoming_when_absent(self) -> None:
        assert merge_values(AggregationOp.FIRST, MISSING, "taken") == "taken"

    def test_first_keeps_stored_none(self) -> None:
        assert merge_values(AggregationOp.FIRST, None, "ignored") is None

    def test_skip_drops_value(self) -> None:
        assert merge_values(AggregationOp.SKIP, 1, 2) is None
