# src/tablefilter/plugins/hookspecs.py
"""pluggy hook specifications for tablefilter plugins.

Plugins implement these hooks to register themselves with the framework.
The plugin manager calls these hooks during discovery.

Usage (implementing a plugin):
    from tablefilter.plugins.hookspecs import hookimpl

    class MyPlugin:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def tablefilter_get_filters(self):
            return [MyFilter]
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from tablefilter.plugins.protocols import FilterProtocol

# Project name for pluggy
PROJECT_NAME = "tablefilter"

# Hook specification marker
hookspec = pluggy.HookspecMarker(PROJECT_NAME)

# Hook implementation marker (for plugins to use)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class TableFilterSpec:
    """Hook specifications for filter plugins."""

    @hookspec
    def tablefilter_get_filters(self) -> list[type["FilterProtocol"]]:  # type: ignore[empty-body]
        """Return filter plugin classes.

        Returns:
            List of filter plugin classes (not instances)
        """
