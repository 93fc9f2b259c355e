"""List-style index access over a TTLMapArray.

IndexedView adds view[i] reads and writes on top of a store without keeping
any state of its own. Every other attribute is looked up on the store.
"""

from __future__ import annotations

from typing import Any, Hashable, Iterator, Tuple

from .store import TTLMapArray


class IndexedView:
    """Translate ordinal positions into store operations.

    view[i] reads store.at(i). view[i] = value overwrites an existing
    position in place (same key, old timer cancelled, none re-armed) or,
    past the end, pads with None entries until the store holds i entries
    and then appends.
    """

    __slots__ = ("_store",)

    def __init__(self, store: TTLMapArray) -> None:
        object.__setattr__(self, "_store", store)

    @property
    def store(self) -> TTLMapArray:
        return self._store

    def __getitem__(self, index: int) -> Any:
        if not isinstance(index, int):
            raise TypeError(f"indices must be integers, not {type(index).__name__}")
        return self._store.at(index)

    def __setitem__(self, index: int, value: Any) -> None:
        if not isinstance(index, int):
            raise TypeError(f"indices must be integers, not {type(index).__name__}")
        if index < 0:
            return

        store = self._store
        while store.size() < index:
            store.push(None)

        if not store.replace_at(index, value):
            store.push(value)

    def __getattr__(self, name: str) -> Any:
        # Only reached when the slot is unset (copy/pickle); avoid recursing
        if name == "_store":
            raise AttributeError(name)
        return getattr(self._store, name)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(self._store, name, value)

    def __len__(self) -> int:
        return len(self._store)

    def __iter__(self) -> Iterator[Tuple[Hashable, Any]]:
        return iter(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store

    def __repr__(self) -> str:
        return f"IndexedView({self._store!r})"


def create_ttl_map_array(**options: Any) -> IndexedView:
    """Build a TTLMapArray (same keyword options) wrapped in an IndexedView."""
    return IndexedView(TTLMapArray(**options))
