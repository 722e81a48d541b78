"""Status codes, operators and kinds shared across subsystem boundaries.

Every filter MUST declare a Determinism value; the plugin manager reads it
at registration.
"""

from enum import Enum

from tablefilter.contracts.errors import UnknownAggregationError


class AggregationOp(str, Enum):
    """Per-column rule used to combine two values during a row merge.

    Uses (str, Enum) because operator names are stored in table metadata
    and in YAML settings.

    Values:
        SUM: Numeric addition (mappings and sub-tables merge recursively)
        MAX: Keep the larger value
        MIN: Keep the smaller value
        FIRST: Keep the representative's value, ignore the merged row's
        SKIP: Drop the value (merged column becomes None)
    """

    SUM = "sum"
    MAX = "max"
    MIN = "min"
    FIRST = "first"
    SKIP = "skip"

    @classmethod
    def from_name(cls, name: "str | AggregationOp") -> "AggregationOp":
        """Translate an operator name from table metadata.

        Names are case-insensitive and surrounding whitespace is ignored.

        Raises:
            UnknownAggregationError: If the name is not a known operator
        """
        if isinstance(name, cls):
            return name

        if not isinstance(name, str):
            raise UnknownAggregationError(name)
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise UnknownAggregationError(name) from None


class Determinism(str, Enum):
    """Filter determinism classification.

    - DETERMINISTIC: Same table in, same table out
    - SEEDED: Reproducible with seed (e.g., random sampling)
    - NON_DETERMINISTIC: May vary between runs

    A filter that calls user code (such as a key reducer) is only as
    deterministic as that code.
    """

    DETERMINISTIC = "deterministic"
    SEEDED = "seeded"
    NON_DETERMINISTIC = "non_deterministic"
