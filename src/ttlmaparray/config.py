"""Configuration and environment helpers for the collections.

Provides small helpers to read typed environment variables and exposes
the defaults applied when a store is built without explicit options
(DEFAULT_TTL_SECONDS, LOG_EXPIRATIONS).
"""

from __future__ import annotations

import os
from typing import Optional


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def _positive_or_none(value: Optional[float]) -> Optional[float]:
    if value is None or value <= 0:
        return None
    return value


# Lifetime applied by stores built without an explicit ttl (None = never expire)
DEFAULT_TTL_SECONDS = _positive_or_none(_env_float("TTLMAPARRAY_DEFAULT_TTL", None))

# Log timer-driven evictions at INFO instead of DEBUG
LOG_EXPIRATIONS = _env_bool("TTLMAPARRAY_LOG_EXPIRATIONS", False)
