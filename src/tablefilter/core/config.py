"""
Configuration schema and loading for tablefilter.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from tablefilter.contracts import AggregationOp


class AggregationSettings(BaseModel):
    """How rows are merged when a filter collapses them.

    Example YAML:
        aggregation:
          default_operation: sum
          unsummable_columns: [label, url]
          label_column: label
    """

    model_config = {"frozen": True}

    default_operation: AggregationOp = Field(
        default=AggregationOp.SUM,
        description="Operator for columns absent from the table's operation map",
    )
    unsummable_columns: tuple[str, ...] = Field(
        default=("label",),
        description="Columns never merged; the representative keeps its value",
    )
    label_column: str = Field(
        default="label",
        min_length=1,
        description="Column used to match rows of nested sub-tables",
    )

    @field_validator("default_operation", mode="before")
    @classmethod
    def normalize_operation(cls, v: Any) -> Any:
        """Accept operator names in any case, as table metadata does."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


class LoggingSettings(BaseModel):
    """structlog output configuration."""

    model_config = {"frozen": True}

    level: str = Field(default="INFO", description="Minimum log level name")
    json_output: bool = Field(
        default=False,
        description="Render JSON lines instead of console output",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v!r}")
        return level


class TableFilterSettings(BaseModel):
    """Top-level tablefilter configuration."""

    model_config = {"frozen": True}

    aggregation: AggregationSettings = Field(
        default_factory=AggregationSettings,
        description="Row merge behaviour",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Log output configuration",
    )


def load_settings(config_path: Path) -> TableFilterSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (TABLEFILTER_*) - highest priority
    2. Config file (settings.yaml)
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: TABLEFILTER_AGGREGATION__DEFAULT_OPERATION
    for nested keys.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated TableFilterSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="TABLEFILTER",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; Pydantic fields are lowercase
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {
        k.lower(): _lower_keys(v)
        for k, v in dynaconf_settings.as_dict().items()
        if k not in internal_keys
    }
    return TableFilterSettings(**raw_config)


def _lower_keys(value: Any) -> Any:
    """Lowercase nested mapping keys (environment overrides arrive uppercase)."""
    if isinstance(value, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in value.items()}
    return value
