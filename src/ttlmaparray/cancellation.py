"""Cancellation scope: binds a one-shot signal to a store's lifetime.

When the signal completes, every entry still stored is flushed: all timers
are cancelled and both internal structures emptied first, then each entry's
observer (its own, else the store default) is called with (value, key) in
insertion order.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .core.errors import SignalBindingError
from .core.interfaces import CancellationSignal

if TYPE_CHECKING:
    from .store import TTLMapArray

logger = logging.getLogger(__name__)


def flush(store: "TTLMapArray") -> int:
    """Empty store, notifying each flushed entry's observer. Returns the count."""
    # Drain before notifying so no timer armed earlier can fire afterwards
    drained = store._drain()
    logger.debug("Flushing %d entries", len(drained))

    for entry in drained:
        observer = entry.on_expire or store.on_expire
        if observer is not None:
            observer(entry.value, entry.key)
    return len(drained)


class CancellationScope:
    # The done callback must run on the store's loop: asyncio futures/tasks only
    def __init__(self, signal: CancellationSignal, store: "TTLMapArray") -> None:
        subscribe = getattr(signal, "add_done_callback", None)
        if not callable(subscribe):
            raise SignalBindingError(
                f"Cancellation signal must provide add_done_callback(), got {type(signal).__name__}"
            )

        self._store = store
        self._activations = 0
        subscribe(self._on_signal)

    @property
    def activations(self) -> int:
        return self._activations

    def _on_signal(self, _signal: Any) -> None:
        self._activations += 1
        flush(self._store)
