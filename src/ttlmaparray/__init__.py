"""Self-expiring collections: insertion-ordered, key-addressable, per-entry TTL."""

from .cancellation import CancellationScope
from .core.errors import SchedulerUnavailableError, SignalBindingError, TTLMapArrayError
from .core.ids import new_key
from .store import TTLMapArray
from .variants import TTLArray, TTLMap
from .view import IndexedView, create_ttl_map_array

__all__ = [
    "CancellationScope",
    "IndexedView",
    "SchedulerUnavailableError",
    "SignalBindingError",
    "TTLArray",
    "TTLMap",
    "TTLMapArray",
    "TTLMapArrayError",
    "create_ttl_map_array",
    "new_key",
]
