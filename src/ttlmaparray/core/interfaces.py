"""Core protocol definitions.

Defines the collaborator contracts the store depends on: the one-shot
cancellation signal and the event-loop slice used by the timer service.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol


class CancellationSignal(Protocol):
    """Contract for a one-shot "activated" notification.

    asyncio.Future and asyncio.Task qualify. The callback must run on the
    loop that owns the store, so wrap a concurrent.futures.Future with
    asyncio.wrap_future() first.
    """
    def add_done_callback(self, fn: Callable[[Any], Any], /) -> Any:
        ...


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """The part of an asyncio event loop the timer service uses."""
    def call_later(self, delay: float, callback: Callable[..., Any], /, *args: Any) -> TimerHandle:
        ...
