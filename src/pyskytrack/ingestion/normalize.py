"""Normalization helpers.

Centralizes lenient parsing and placeholder handling for feed payloads.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(round(parsed))


def safe_str(value: Any) -> str | None:
    """Return a stripped string, or ``None`` for missing/blank values."""
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None


def normalize_registration(value: Any) -> str | None:
    """Canonical form of a tail registration (``"g-abcd "`` -> ``"G-ABCD"``)."""
    text = safe_str(value)
    return text.upper() if text else None


def distinct_registrations(values: Iterable[Any]) -> list[str]:
    """Normalized, de-duplicated registrations in first-seen order."""
    seen: dict[str, None] = {}
    for value in values:
        registration = normalize_registration(value)
        if registration is not None:
            seen.setdefault(registration, None)
    return list(seen)
