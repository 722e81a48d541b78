"""Plugin system: table filters via pluggy.

- Protocols: Type contracts for filters and the tables they consume
- Base classes: Convenient base classes for filters
- Config: Pydantic-based filter configuration
- Manager: Plugin discovery and registration
- Hookspecs: pluggy hook definitions
"""

from tablefilter.contracts import Determinism
from tablefilter.plugins.base import BaseFilter
from tablefilter.plugins.config_base import (
    FilterConfig,
    PluginConfig,
    PluginConfigError,
)
from tablefilter.plugins.hookspecs import hookimpl, hookspec
from tablefilter.plugins.manager import PluginManager, PluginSpec, get_default_manager
from tablefilter.plugins.protocols import FilterProtocol, RowProtocol, TableProtocol

__all__ = [  # Grouped by category for readability
    # Protocols
    "FilterProtocol",
    "RowProtocol",
    "TableProtocol",
    # Base classes
    "BaseFilter",
    # Config base classes
    "FilterConfig",
    "PluginConfig",
    "PluginConfigError",
    # Manager
    "PluginManager",
    "PluginSpec",
    "get_default_manager",
    # Hookspecs
    "hookimpl",
    "hookspec",
    # Enums
    "Determinism",
]
