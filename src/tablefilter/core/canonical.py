"""
Canonical JSON serialization for deterministic hashing.

Two-phase approach:
1. Normalize: Convert numpy types, rows and tables to JSON-safe primitives
2. Serialize: Produce deterministic JSON per RFC 8785/JCS (rfc8785 package)

IMPORTANT: NaN and Infinity are strictly REJECTED, not silently converted.
"""

import hashlib
import math
from enum import Enum
from typing import Any

import numpy as np
import rfc8785

from tablefilter.contracts import MISSING
from tablefilter.core.table import DataTable, Row

# Version string stored alongside hashes for verification
CANONICAL_VERSION = "sha256-rfc8785-v1"


def _normalize_value(obj: Any) -> Any:
    """Convert a single value to JSON-safe primitive.

    NaN Policy: STRICT REJECTION
    - NaN and Infinity are invalid input states, not "missing"
    - Use None for intentional missing values

    Args:
        obj: Any Python value

    Returns:
        JSON-serializable primitive

    Raises:
        ValueError: If value contains NaN or Infinity
    """
    # Check for NaN/Infinity FIRST (before type coercion)
    if isinstance(obj, (float, np.floating)):
        if math.isnan(obj) or math.isinf(obj):
            raise ValueError(
                f"Cannot canonicalize non-finite float: {obj}. "
                "Use None for missing values, not NaN."
            )
        if isinstance(obj, np.floating):
            return float(obj)
        return obj

    if obj is MISSING:
        return None

    # Enums before primitives: AggregationOp is also a str
    if isinstance(obj, Enum):
        return _normalize_value(obj.value)

    if obj is None or isinstance(obj, (str, int, bool)):
        return obj

    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.ndarray):
        return [_normalize_value(x) for x in obj.tolist()]

    if isinstance(obj, Row):
        return {
            "columns": _normalize_value(obj.get_columns()),
            "metadata": _normalize_value(obj.get_all_metadata()),
        }
    if isinstance(obj, DataTable):
        summary = obj.get_summary_row()
        return {
            "rows": [_normalize_value(row) for row in obj.get_rows()],
            "summary_row": _normalize_value(summary) if summary else None,
            "metadata": _normalize_value(obj.get_all_metadata()),
        }

    if isinstance(obj, dict):
        return {str(k): _normalize_value(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_normalize_value(v) for v in obj]

    return obj


def canonical_json(obj: Any) -> str:
    """Serialize a value to canonical (RFC 8785) JSON.

    Raises:
        ValueError: If the value contains NaN or Infinity
        TypeError: If the value contains a type with no JSON form
    """
    return rfc8785.dumps(_normalize_value(obj)).decode("utf-8")


def stable_hash(obj: Any) -> str:
    """SHA-256 hex digest of the canonical JSON form of a value."""
    return hashlib.sha256(canonical_json(obj).encode("utf-8")).hexdigest()
