# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

from tablefilter.core.table import DataTable, Row

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


def make_table(
    rows: list[dict[str, Any]],
    *,
    summary: dict[str, Any] | None = None,
    operations: dict[str, Any] | None = None,
) -> DataTable:
    """Build a table from column dicts, with optional summary row and operator map."""
    table = DataTable()
    table.add_rows_from_dicts(rows)
    if summary is not None:
        table.set_summary_row(Row(columns=summary))
    if operations is not None:
        table.set_metadata(DataTable.COLUMN_AGGREGATION_OPS_METADATA_NAME, operations)
    return table


def host(url: str) -> str:
    """Key reducer used across tests: 'a.com/x' -> 'a.com'."""
    return url.split("/", 1)[0]


@pytest.fixture
def url_table() -> DataTable:
    """Three URL rows, two sharing a host, plus a summary row."""
    return make_table(
        [
            {"label": "a.com/x", "count": 1},
            {"label": "a.com/y", "count": 2},
            {"label": "b.com/z", "count": 3},
        ],
        summary={"label": "Others", "count": 100},
    )


@pytest.fixture
def table_factory() -> Any:
    """Return make_table() for tests that build their own tables."""
    return make_table


@pytest.fixture
def host_reducer() -> Any:
    """Return the host-extraction key reducer."""
    return host
