"""Normalization helpers.

Centralizes defensive parsing of loosely-typed telemetry payloads.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def first_present(data: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first key in *keys* that is present and not ``None``."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def normalize_timestamp_seconds(value: Any) -> float | None:
    """Normalize epoch timestamps to seconds.

    - Empty/missing -> None
    - <= 0 -> None
    - Milliseconds (> 1e11) -> seconds
    """

    parsed = safe_float(value)
    if parsed is None or parsed <= 0:
        return None
    if parsed > 1e11:
        parsed /= 1000.0
    return parsed
