"""Helpers for safe debug logging.

Geocoding and icon requests carry API keys in query parameters and URLs.
This module masks them before they reach DEBUG logs.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {"key", "api_key", "apikey", "access_token", "token", "signature", "client", "authorization"}
)

_QUERY_SECRET = re.compile(r"(?i)([?&](?:" + "|".join(sorted(_SENSITIVE_KEYS)) + r")=)[^&#]*")

_MASK = "<redacted>"


def redact_url(url: str) -> str:
    """Mask sensitive query string values in *url*."""
    return _QUERY_SECRET.sub(lambda m: m.group(1) + _MASK, url)


def redact_for_log(value: Any) -> Any:
    """Return a copy of *value* with sensitive mapping keys and URL params masked."""
    if isinstance(value, str):
        return redact_url(value)
    if isinstance(value, Mapping):
        return {
            str(k): _MASK if str(k).lower() in _SENSITIVE_KEYS else redact_for_log(v)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [redact_for_log(v) for v in value]
    return value
