"""Coercion of loosely typed raw values.

Map items and host payloads carry numbers as strings, placeholders such as
``"--"`` and occasionally booleans; everything unusable becomes ``None``.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

# Placeholder strings domain feeds use for "not available".
_SENTINELS = frozenset({"", "--", "NaN", "nan", "null"})


def safe_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and value.strip() in _SENTINELS:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def lookup(record: Any, key: str) -> Any:
    """Read *key* from a mapping or an attribute-style record."""
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)
