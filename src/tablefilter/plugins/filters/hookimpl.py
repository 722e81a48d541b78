"""Hook implementation for built-in filter plugins."""

from typing import Any

from tablefilter.plugins.hookspecs import hookimpl


class TableFilterBuiltinFilters:
    """Hook implementer for built-in filter plugins."""

    @hookimpl
    def tablefilter_get_filters(self) -> list[type[Any]]:
        """Return built-in filter plugin classes."""
        from tablefilter.plugins.filters.group_by import GroupBy

        return [GroupBy]


# Singleton instance for registration
builtin_filters = TableFilterBuiltinFilters()
