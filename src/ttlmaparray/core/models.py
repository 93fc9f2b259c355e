"""Dataclasses and callback aliases shared by the collections.

Entry is the unit stored by TTLMapArray: key, value, the lifetime it was
armed with, an optional per-entry observer and the live timer handle.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Hashable, Optional, Union

from .interfaces import TimerHandle

Duration = Union[int, float, timedelta]

# Called with (value, key) when an entry expires or is flushed.
ExpireCallback = Callable[[Any, Hashable], Any]


@dataclass(slots=True)
class Entry:
    key: Hashable
    value: Any
    ttl: Optional[Duration] = None
    on_expire: Optional[ExpireCallback] = None
    handle: Optional[TimerHandle] = None  # present iff a lifetime is armed
