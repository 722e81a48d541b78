"""Built-in filter plugins.

Filters receive a whole table and mutate it in place.
"""

from tablefilter.plugins.filters.group_by import GroupBy, GroupByConfig, group_by

__all__ = ["GroupBy", "GroupByConfig", "group_by"]
