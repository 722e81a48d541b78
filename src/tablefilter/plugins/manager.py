# src/tablefilter/plugins/manager.py
"""Plugin manager for filter discovery, registration, and lookup.

Uses pluggy for hook-based plugin registration.
"""

from dataclasses import dataclass
from typing import Any

import pluggy

from tablefilter.contracts import Determinism
from tablefilter.core.canonical import stable_hash
from tablefilter.plugins.hookspecs import PROJECT_NAME, TableFilterSpec
from tablefilter.plugins.protocols import FilterProtocol


def _schema_hash(config_cls: Any) -> str | None:
    """Compute stable hash for a filter's config model.

    Hashes field names and types to detect compatibility changes.

    Args:
        config_cls: A PluginConfig subclass, or None

    Returns:
        SHA-256 hex digest of field names/types, or None if no config model
    """
    if config_cls is None:
        return None

    if not hasattr(config_cls, "model_fields"):
        return None

    fields_repr = {
        name: str(field.annotation) for name, field in config_cls.model_fields.items()
    }
    return stable_hash(fields_repr)


@dataclass(frozen=True)
class PluginSpec:
    """Registration record for a filter plugin.

    Frozen for immutability - plugin specs shouldn't change after creation.
    """

    name: str
    version: str
    determinism: Determinism
    queueable: bool
    config_schema_hash: str | None = None

    @classmethod
    def from_plugin(cls, plugin_cls: type) -> "PluginSpec":
        """Create spec from plugin class.

        Required attributes (will raise if missing):
        - name: str
        - plugin_version: str

        Optional attributes (have legitimate defaults):
        - determinism: defaults to DETERMINISTIC
        - queueable: defaults to True
        - config_model: defaults to None

        Raises:
            ValueError: If plugin is missing required 'name' or 'plugin_version' attributes
        """
        try:
            name = plugin_cls.name  # type: ignore[attr-defined]
        except AttributeError:
            raise ValueError(
                f"Plugin {plugin_cls.__name__} must define 'name' attribute. "
                f"Add: name = 'your_filter_name' to the class."
            ) from None

        try:
            version = plugin_cls.plugin_version  # type: ignore[attr-defined]
        except AttributeError:
            raise ValueError(
                f"Plugin {plugin_cls.__name__} must define 'plugin_version' attribute. "
                f"Add: plugin_version = '1.0.0' to the class."
            ) from None

        return cls(
            name=name,
            version=version,
            determinism=getattr(plugin_cls, "determinism", Determinism.DETERMINISTIC),
            queueable=getattr(plugin_cls, "queueable", True),
            config_schema_hash=_schema_hash(getattr(plugin_cls, "config_model", None)),
        )


class PluginManager:
    """Manages filter discovery, registration, and lookup.

    Usage:
        manager = PluginManager()
        manager.register(MyPlugin())

        filters = manager.get_filters()
        group_by = manager.get_filter_by_name("group_by")
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(TableFilterSpec)

        # Cache - map name to plugin class for duplicate detection
        self._filters: dict[str, type[FilterProtocol]] = {}

    def register_builtin_plugins(self) -> None:
        """Register all built-in plugin hook implementers.

        Call this once at startup to make built-in filters discoverable.
        """
        from tablefilter.plugins.filters.hookimpl import builtin_filters

        self.register(builtin_filters)

    def register(self, plugin: Any) -> None:
        """Register a plugin.

        Args:
            plugin: Plugin instance implementing hook methods

        Raises:
            ValueError: If a filter with the same name is already registered.
                The plugin is unregistered again in that case.
        """
        self._pm.register(plugin)
        try:
            self._refresh_caches()
        except ValueError:
            self._pm.unregister(plugin)
            raise

    def _refresh_caches(self) -> None:
        """Refresh plugin caches from hooks.

        Raises:
            ValueError: If two filters share a name
        """
        new_filters: dict[str, type[FilterProtocol]] = {}

        for filters in self._pm.hook.tablefilter_get_filters():
            for cls in filters:
                name = cls.name
                if name in new_filters:
                    raise ValueError(
                        f"Duplicate filter plugin name: '{name}'. "
                        f"Already registered by {new_filters[name].__name__}"
                    )
                new_filters[name] = cls

        self._filters = new_filters

    def get_filters(self) -> list[type[FilterProtocol]]:
        """Get all registered filter plugins."""
        return list(self._filters.values())

    def get_filter_by_name(self, name: str) -> type[FilterProtocol] | None:
        """Get filter plugin by name."""
        return self._filters.get(name)

    def get_specs(self) -> list[PluginSpec]:
        """Registration records for all registered filters."""
        return [PluginSpec.from_plugin(cls) for cls in self._filters.values()]


_default_manager: PluginManager | None = None


def get_default_manager() -> PluginManager:
    """Process-wide manager with built-in filters registered.

    Used by DataTable.filter() to resolve filters given by name. Register
    extra plugins on it to make them available by name.
    """
    global _default_manager
    if _default_manager is None:
        manager = PluginManager()
        manager.register_builtin_plugins()
        _default_manager = manager
    return _default_manager
