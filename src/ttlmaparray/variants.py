"""Narrowed variants of TTLMapArray.

TTLMap exposes only the mapping half and TTLArray only the list half. Both
delegate storage and timers to a private TTLMapArray.
"""

from __future__ import annotations

from typing import Any, Callable, Hashable, Iterator, List, Optional, Tuple

from .core.interfaces import Scheduler
from .core.models import Duration, ExpireCallback
from .store import TTLMapArray
from .view import IndexedView


class TTLMap:
    # Map with per-key lifetimes; accepts any hashable key, including falsy ones
    def __init__(
        self,
        *,
        ttl: Optional[Duration] = None,
        on_expire: Optional[ExpireCallback] = None,
        loop: Optional[Scheduler] = None,
    ) -> None:
        self._store = TTLMapArray(ttl=ttl, on_expire=on_expire, loop=loop)

    def set(
        self,
        key: Hashable,
        value: Any,
        *,
        ttl: Optional[Duration] = None,
        on_expire: Optional[ExpireCallback] = None,
    ) -> "TTLMap":
        # Re-setting a key moves it to the end of iteration order
        self._store.delete(key)
        self._store._put(key, value, ttl=ttl, on_expire=on_expire)
        return self

    def get(self, key: Hashable, default: Any = None) -> Any:
        return self._store.get(key, default)

    def has(self, key: Hashable) -> bool:
        return self._store.has(key)

    def delete(self, key: Hashable) -> bool:
        return self._store.delete(key)

    def extract(self, key: Hashable) -> Any:
        return self._store.extract_key(key)

    def clear(self) -> None:
        self._store.clear()

    @property
    def size(self) -> int:
        return self._store.size()

    def keys(self) -> List[Hashable]:
        return self._store.keys()

    def values(self) -> List[Any]:
        return self._store.values()

    def entries(self) -> List[Tuple[Hashable, Any]]:
        return self._store.entries()

    def for_each(self, fn: Callable[[Any, Hashable], Any]) -> None:
        self._store.for_each(fn)

    def __iter__(self) -> Iterator[Tuple[Hashable, Any]]:
        return iter(self._store)

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __repr__(self) -> str:
        return f"TTLMap(size={self.size}, ttl={self._store.ttl!r})"


class TTLArray:
    """List with per-item lifetimes.

    push() returns the new length, at() accepts negative indices and
    iteration yields values. arr[i] = value follows IndexedView semantics.
    """

    def __init__(
        self,
        *,
        ttl: Optional[Duration] = None,
        on_expire: Optional[ExpireCallback] = None,
        loop: Optional[Scheduler] = None,
    ) -> None:
        self._store = TTLMapArray(ttl=ttl, on_expire=on_expire, loop=loop)
        self._view = IndexedView(self._store)

    def push(
        self,
        value: Any,
        *,
        ttl: Optional[Duration] = None,
        on_expire: Optional[ExpireCallback] = None,
    ) -> int:
        self._store.push(value, ttl=ttl, on_expire=on_expire)
        return self._store.size()

    def pop(self) -> Any:
        return self._store.pop()

    def shift(self) -> Any:
        return self._store.shift()

    def at(self, index: int) -> Any:
        if isinstance(index, int) and index < 0:
            index += self._store.size()
        return self._store.at(index)

    @property
    def length(self) -> int:
        return self._store.size()

    def __len__(self) -> int:
        return self._store.size()

    def __getitem__(self, index: int) -> Any:
        if not isinstance(index, int):
            raise TypeError(f"indices must be integers, not {type(index).__name__}")
        return self.at(index)

    def __setitem__(self, index: int, value: Any) -> None:
        self._view[index] = value

    def for_each(self, fn: Callable[[Any, int], Any]) -> None:
        for i, value in enumerate(self._store.values()):
            fn(value, i)

    def map(self, fn: Callable[[Any, int], Any]) -> List[Any]:
        return [fn(value, i) for i, value in enumerate(self._store.values())]

    def filter(self, predicate: Callable[[Any, int], Any]) -> "TTLArray":
        # Values are pushed again: fresh keys and fresh timers
        result = TTLArray(ttl=self._store.ttl, on_expire=self._store.on_expire, loop=self._store.loop)
        for i, value in enumerate(self._store.values()):
            if predicate(value, i):
                result.push(value)
        return result

    def find(self, predicate: Callable[[Any, int], Any]) -> Any:
        return self._store.find(predicate)

    def find_index(self, predicate: Callable[[Any, int], Any]) -> int:
        return self._store.find_index(predicate)

    def includes(self, value: Any) -> bool:
        return self._store.includes(value)

    def index_of(self, value: Any) -> int:
        return self._store.index_of(value)

    def some(self, predicate: Callable[[Any, int], Any]) -> bool:
        return self._store.some(predicate)

    def every(self, predicate: Callable[[Any, int], Any]) -> bool:
        return self._store.every(predicate)

    def clear(self) -> None:
        self._store.clear()

    def to_list(self) -> List[Any]:
        return self._store.values()

    def delete_by_key(self, key: Hashable) -> bool:
        return self._store.delete(key)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._store.values())

    def __repr__(self) -> str:
        return f"TTLArray(length={self.length}, ttl={self._store.ttl!r})"
