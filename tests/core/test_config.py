# tests/core/test_config.py
"""Tests for configuration schema and loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError


class TestAggregationSettings:
    """Row merge configuration validation."""

    def test_defaults(self) -> None:
        from tablefilter.contracts import AggregationOp
        from tablefilter.core.config import AggregationSettings

        settings = AggregationSettings()
        assert settings.default_operation is AggregationOp.SUM
        assert settings.unsummable_columns == ("label",)
        assert settings.label_column == "label"

    def test_operation_name_case_insensitive(self) -> None:
        from tablefilter.contracts import AggregationOp
        from tablefilter.core.config import AggregationSettings

        settings = AggregationSettings(default_operation="MAX")
        assert settings.default_operation is AggregationOp.MAX

    def test_unknown_operation_rejected(self) -> None:
        from tablefilter.core.config import AggregationSettings

        with pytest.raises(ValidationError):
            AggregationSettings(default_operation="median")

    def test_list_becomes_tuple(self) -> None:
        from tablefilter.core.config import AggregationSettings

        settings = AggregationSettings(unsummable_columns=["label", "url"])
        assert settings.unsummable_columns == ("label", "url")

    def test_empty_label_column_rejected(self) -> None:
        from tablefilter.core.config import AggregationSettings

        with pytest.raises(ValidationError):
            AggregationSettings(label_column="")

    def test_settings_are_frozen(self) -> None:
        from tablefilter.core.config import AggregationSettings

        settings = AggregationSettings()
        with pytest.raises(ValidationError):
            settings.label_column = "name"  # type: ignore[misc]


class TestLoggingSettings:
    def test_level_normalized(self) -> None:
        from tablefilter.core.config import LoggingSettings

        assert LoggingSettings(level="debug").level == "DEBUG"

    def test_unknown_level_rejected(self) -> None:
        from tablefilter.core.config import LoggingSettings

        with pytest.raises(ValidationError):
            LoggingSettings(level="LOUD")


class TestTableFilterSettings:
    def test_defaults(self) -> None:
        from tablefilter.core.config import TableFilterSettings

        settings = TableFilterSettings()
        assert settings.logging.level == "INFO"
        assert settings.logging.json_output is False

    def test_nested_from_dict(self) -> None:
        from tablefilter.core.config import TableFilterSettings

        settings = TableFilterSettings(aggregation={"default_operation": "min"})
        assert settings.aggregation.default_operation.value == "min"


class TestLoadSettings:
    """YAML + environment loading through Dynaconf."""

    def test_load_from_yaml(self, tmp_path: Path) -> None:
        from tablefilter.contracts import AggregationOp
        from tablefilter.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text(
            """
aggregation:
  default_operation: max
  unsummable_columns: [label, url]
logging:
  level: debug
"""
        )

        settings = load_settings(config_file)

        assert settings.aggregation.default_operation is AggregationOp.MAX
        assert settings.aggregation.unsummable_columns == ("label", "url")
        assert settings.logging.level == "DEBUG"

    def test_environment_overrides_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        from tablefilter.contracts import AggregationOp
        from tablefilter.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("aggregation:\n  default_operation: max\n")
        monkeypatch.setenv("TABLEFILTER_AGGREGATION__DEFAULT_OPERATION", "min")

        settings = load_settings(config_file)

        assert settings.aggregation.default_operation is AggregationOp.MIN

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        from tablefilter.core.config import load_settings

        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "nope.yaml")

    def test_invalid_values_raise(self, tmp_path: Path) -> None:
        from tablefilter.core.config import load_settings

        config_file = tmp_path / "settings.yaml"
        config_file.write_text("aggregation:\n  default_operation: median\n")

        with pytest.raises(ValidationError):
            load_settings(config_file)


class TestLoadedSettingsApplied:
    """Loaded settings drive logging setup and row merges."""

    def test_file_settings_configure_logging_and_grouping(self, tmp_path: Path) -> None:
        import logging

        import structlog

        from tablefilter.core.config import load_settings
        from tablefilter.core.logging import configure_logging
        from tablefilter.core.table import DataTable
        from tablefilter.plugins.filters.group_by import group_by

        config_file = tmp_path / "settings.yaml"
        config_file.write_text(
            """
aggregation:
  default_operation: max
logging:
  level: warning
"""
        )
        settings = load_settings(config_file)

        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging(settings.logging)
            assert root.level == logging.WARNING
        finally:
            root.setLevel(previous)
            structlog.reset_defaults()

        table = DataTable()
        table.add_rows_from_dicts([{"label": "a/1", "n": 4}, {"label": "a/2", "n": 9}])
        group_by(table, "label", lambda v: v.split("/")[0], aggregation=settings.aggregation)

        assert table.get_column("n") == [9]
