# src/tablefilter/plugins/config_base.py
"""Typed configuration for table filters.

A filter receives its options as a plain dict, either from
DataTable.filter(name, config) or from its own constructor. Each filter
declares a pydantic model for those options and validates them once, at
construction, so a misconfigured filter fails before it touches a table.

Example:
    class TruncateConfig(FilterConfig):
        limit: int = Field(gt=0)

    cfg = TruncateConfig.from_dict({"column": "label", "limit": 10})
    cfg.column  # "label"
"""

from collections.abc import Mapping
from typing import Any, Self

from pydantic import BaseModel, ValidationError, field_validator


class PluginConfigError(Exception):
    """Raised when a filter's options fail validation.

    Attributes:
        config_name: Name of the config model that rejected the options
        fields: Dotted names of the offending options, in error order
    """

    def __init__(
        self, message: str, *, config_name: str = "", fields: tuple[str, ...] = ()
    ) -> None:
        super().__init__(message)
        self.config_name = config_name
        self.fields = fields


class PluginConfig(BaseModel):
    """Base class for filter option models.

    Unknown options are rejected so a misspelt key is never silently
    ignored. Arbitrary types are allowed because options may hold callables
    and settings objects.
    """

    model_config = {"extra": "forbid", "arbitrary_types_allowed": True}

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> Self:
        """Validate filter options.

        Args:
            config: Option name -> value mapping

        Returns:
            Validated configuration instance.

        Raises:
            PluginConfigError: If config is not a mapping or an option is invalid
        """
        if not isinstance(config, Mapping):
            raise PluginConfigError(
                f"{cls.__name__} options must be a mapping, got {type(config).__name__}",
                config_name=cls.__name__,
            )
        try:
            return cls(**config)
        except ValidationError as e:
            fields = tuple(
                ".".join(str(part) for part in error["loc"]) for error in e.errors()
            )
            raise PluginConfigError(
                f"Invalid options for {cls.__name__} ({', '.join(fields)}): {e}",
                config_name=cls.__name__,
                fields=fields,
            ) from e


class FilterConfig(PluginConfig):
    """Options shared by filters that read one named column."""

    column: str

    @field_validator("column")
    @classmethod
    def validate_column_name(cls, v: str) -> str:
        """Strip surrounding whitespace; reject an empty column name."""
        name = v.strip()
        if not name:
            raise ValueError("column cannot be empty")
        return name
