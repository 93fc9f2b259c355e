"""Insertion-ordered, key-addressable collection with per-entry lifetimes.

TTLMapArray behaves as a list (push/shift/pop/at, positional iteration
helpers) and as a mapping (set/get/has/delete) at once. Entries may carry a
lifetime; when it elapses the entry is removed and its observer is called
with (value, key).

Internally the store keeps an ordered list of entries and a key index.
Both are private and only ever changed together through _append,
_replace_at and _remove_at, so the index always holds exactly the keys
present in the list.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Hashable, Iterable, Iterator, List, Mapping, Optional, Tuple

from . import config
from .cancellation import CancellationScope, flush
from .core.ids import new_key
from .core.interfaces import CancellationSignal, Scheduler
from .core.models import Duration, Entry, ExpireCallback
from .core.timers import TimerService

logger = logging.getLogger(__name__)

_OMITTED = object()


class TTLMapArray:
    """Self-expiring collection addressable by key and by position.

    Construction options:
      - ttl: default lifetime in seconds (or timedelta) for entries that do
        not specify their own. None means entries never expire.
      - on_expire: default observer, called with (value, key).
      - signal: one-shot cancellation signal (e.g. an asyncio.Future); when
        it completes every entry is flushed through its observer.
      - loop: event loop used for timers; defaults to the running loop.
      - key_factory: generator for keys minted by push().

    Absent keys and out-of-range positions never raise: reads return None
    (or the supplied default) and writes with a falsy key are ignored.
    """

    def __init__(
        self,
        *,
        ttl: Optional[Duration] = None,
        on_expire: Optional[ExpireCallback] = None,
        signal: Optional[CancellationSignal] = None,
        loop: Optional[Scheduler] = None,
        key_factory: Callable[[], Hashable] = new_key,
    ) -> None:
        self.ttl = ttl if ttl is not None else config.DEFAULT_TTL_SECONDS
        self.on_expire = on_expire

        self._queue: List[Entry] = []
        self._index: Dict[Hashable, Entry] = {}

        self._timers = TimerService(loop=loop)
        self._key_factory = key_factory

        self._scope = CancellationScope(signal, self) if signal is not None else None

    @property
    def loop(self) -> Optional[Scheduler]:
        return self._timers.loop

    # ------------------------------------------------------------------
    # Paired mutation of the ordered list and the key index
    # ------------------------------------------------------------------

    def _append(self, entry: Entry) -> None:
        self._queue.append(entry)
        self._index[entry.key] = entry

    def _replace_at(self, position: int, entry: Entry) -> None:
        old = self._queue[position]
        self._timers.cancel(old.handle)
        old.handle = None
        self._queue[position] = entry
        self._index[entry.key] = entry

    def _remove_at(self, position: int) -> Entry:
        entry = self._queue[position]
        self._timers.cancel(entry.handle)
        entry.handle = None
        del self._queue[position]
        del self._index[entry.key]
        return entry

    def _drain(self) -> List[Entry]:
        # Cancel every timer and empty both structures; returns the entries in order.
        drained = list(self._queue)
        for entry in drained:
            self._timers.cancel(entry.handle)
            entry.handle = None
        self._queue.clear()
        self._index.clear()
        return drained

    def _position(self, entry: Entry) -> int:
        # Identity scan: values may not support == and keys are unique anyway
        for i, candidate in enumerate(self._queue):
            if candidate is entry:
                return i
        return -1

    def _in_range(self, index: Any) -> bool:
        return isinstance(index, int) and 0 <= index < len(self._queue)

    def _expire(self, entry: Entry) -> None:
        entry.handle = None
        # A replaced or removed entry is no longer the one indexed under its key
        if self._index.get(entry.key) is not entry:
            return

        self._remove_at(self._position(entry))

        level = logging.INFO if config.LOG_EXPIRATIONS else logging.DEBUG
        logger.log(level, "Entry %r expired", entry.key)

        observer = entry.on_expire or self.on_expire
        if observer is not None:
            observer(entry.value, entry.key)

    def _derive(self) -> "TTLMapArray":
        # Same defaults and scheduler, no signal; timers restart on insert
        return type(self)(
            ttl=self.ttl,
            on_expire=self.on_expire,
            loop=self.loop,
            key_factory=self._key_factory,
        )

    # ------------------------------------------------------------------
    # Key-addressed operations
    # ------------------------------------------------------------------

    def set(
        self,
        key: Hashable,
        value: Any,
        *,
        ttl: Optional[Duration] = None,
        on_expire: Optional[ExpireCallback] = None,
    ) -> "TTLMapArray":
        """Insert value under key, or replace it in place if key exists.

        A falsy key is ignored. Any timer armed for the previous value is
        cancelled before the new one is armed.
        """
        if not key:
            return self
        return self._put(key, value, ttl=ttl, on_expire=on_expire)

    def _put(
        self,
        key: Hashable,
        value: Any,
        *,
        ttl: Optional[Duration] = None,
        on_expire: Optional[ExpireCallback] = None,
    ) -> "TTLMapArray":
        # No key guard here; TTLMap stores any hashable key through this path
        entry = Entry(
            key=key,
            value=value,
            ttl=ttl if ttl is not None else self.ttl,
            on_expire=on_expire,
        )
        entry.handle = self._timers.arm(entry.ttl, lambda: self._expire(entry))

        existing = self._index.get(key)
        if existing is not None:
            self._replace_at(self._position(existing), entry)
        else:
            self._append(entry)
        return self

    def get(self, key: Hashable, default: Any = None) -> Any:
        entry = self._index.get(key)
        return entry.value if entry is not None else default

    def has(self, key: Hashable) -> bool:
        return key in self._index

    def delete(self, key: Hashable) -> bool:
        entry = self._index.get(key)
        if entry is None:
            return False
        self._remove_at(self._position(entry))
        return True

    def extract_key(self, key: Hashable) -> Any:
        """Remove the entry stored under key and return its value (None if absent)."""
        entry = self._index.get(key)
        if entry is None:
            return None
        return self._remove_at(self._position(entry)).value

    # ------------------------------------------------------------------
    # Position-addressed operations
    # ------------------------------------------------------------------

    def push(
        self,
        value: Any,
        *,
        ttl: Optional[Duration] = None,
        on_expire: Optional[ExpireCallback] = None,
    ) -> Hashable:
        """Append value under a freshly generated key and return the key."""
        key = self._key_factory()
        self.set(key, value, ttl=ttl, on_expire=on_expire)
        return key

    def shift(self) -> Any:
        if not self._queue:
            return None
        return self._remove_at(0).value

    def pop(self) -> Any:
        if not self._queue:
            return None
        return self._remove_at(len(self._queue) - 1).value

    def at(self, index: int) -> Any:
        if not self._in_range(index):
            return None
        return self._queue[index].value

    def key_at(self, index: int) -> Optional[Hashable]:
        if not self._in_range(index):
            return None
        return self._queue[index].key

    def replace_at(self, index: int, value: Any) -> bool:
        """Swap the value at index in place, keeping its key.

        The old timer is cancelled and no new one is armed; the replaced
        value stays until removed explicitly.
        """
        if not self._in_range(index):
            return False
        key = self._queue[index].key
        self._replace_at(index, Entry(key=key, value=value))
        return True

    def extract(self, index: int) -> Any:
        """Remove the entry at index and return its value (None if out of range)."""
        if not self._in_range(index):
            return None
        return self._remove_at(index).value

    def first(self) -> Any:
        return self._queue[0].value if self._queue else None

    def last(self) -> Any:
        return self._queue[-1].value if self._queue else None

    def next(self) -> Any:
        return self.first()

    # ------------------------------------------------------------------
    # Bulk operations
    # ------------------------------------------------------------------

    def clear(self) -> None:
        self._drain()

    def abort(self) -> None:
        """Flush every entry through its observer, as a cancellation signal would."""
        flush(self)

    def is_empty(self) -> bool:
        return not self._queue

    def size(self) -> int:
        return len(self._queue)

    @property
    def length(self) -> int:
        return len(self._queue)

    def __len__(self) -> int:
        return len(self._queue)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def keys(self) -> List[Hashable]:
        return [e.key for e in self._queue]

    def values(self) -> List[Any]:
        return [e.value for e in self._queue]

    def entries(self) -> List[Tuple[Hashable, Any]]:
        return [(e.key, e.value) for e in self._queue]

    def __iter__(self) -> Iterator[Tuple[Hashable, Any]]:
        # Each call walks its own snapshot
        return iter(self.entries())

    # ------------------------------------------------------------------
    # Iteration helpers (insertion order, over a snapshot)
    # ------------------------------------------------------------------

    def for_each(self, fn: Callable[[Any, Hashable], Any]) -> None:
        for entry in list(self._queue):
            fn(entry.value, entry.key)

    def map(self, fn: Callable[[Any, Hashable], Any]) -> List[Any]:
        return [fn(entry.value, entry.key) for entry in list(self._queue)]

    def filter(self, predicate: Callable[[Any, int], Any]) -> "TTLMapArray":
        result = self._derive()
        for i, entry in enumerate(list(self._queue)):
            if predicate(entry.value, i):
                result.set(entry.key, entry.value)
        return result

    def find(self, predicate: Callable[[Any, int], Any]) -> Any:
        for i, entry in enumerate(list(self._queue)):
            if predicate(entry.value, i):
                return entry.value
        return None

    def find_index(self, predicate: Callable[[Any, int], Any]) -> int:
        for i, entry in enumerate(list(self._queue)):
            if predicate(entry.value, i):
                return i
        return -1

    def some(self, predicate: Callable[[Any, int], Any]) -> bool:
        return any(predicate(entry.value, i) for i, entry in enumerate(list(self._queue)))

    def every(self, predicate: Callable[[Any, int], Any]) -> bool:
        return all(predicate(entry.value, i) for i, entry in enumerate(list(self._queue)))

    def reduce(self, fn: Callable[[Any, Any], Any], initial: Any = _OMITTED) -> Any:
        values = self.values()
        if initial is _OMITTED:
            if not values:
                return None
            acc, rest = values[0], values[1:]
        else:
            acc, rest = initial, values
        for value in rest:
            acc = fn(acc, value)
        return acc

    def index_of(self, value: Any) -> int:
        for i, entry in enumerate(self._queue):
            if entry.value is value or entry.value == value:
                return i
        return -1

    def includes(self, value: Any) -> bool:
        return self.index_of(value) != -1

    def slice(self, start: int = 0, end: Optional[int] = None) -> "TTLMapArray":
        result = self._derive()
        for entry in self._queue[start:end]:
            result.set(entry.key, entry.value)
        return result

    def concat(self, *others: Any) -> "TTLMapArray":
        """Return a new store holding this store's entries followed by others'.

        Others may be stores, indexed views, mappings or iterables of
        (key, value) pairs. A key seen again replaces the earlier value in place.
        """
        result = self._derive()
        for key, value in self:
            result.set(key, value)
        for other in others:
            for key, value in _pairs(other):
                result.set(key, value)
        return result

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def to_json(self) -> str:
        return json.dumps([[key, value] for key, value in self.entries()], default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={len(self._queue)}, ttl={self.ttl!r})"


def _pairs(other: Any) -> Iterable[Tuple[Hashable, Any]]:
    if isinstance(other, Mapping):
        return other.items()
    return other
