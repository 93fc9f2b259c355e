"""
Timer service.

Arms one-shot watchdogs on an asyncio event loop. A watchdog is a
best-effort background cleanup: asyncio timer handles never keep the
process alive on their own, so nothing extra is needed to let the host exit.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import timedelta
from typing import Any, Callable, Optional

from .errors import SchedulerUnavailableError
from .interfaces import Scheduler, TimerHandle
from .models import Duration

logger = logging.getLogger(__name__)


def to_seconds(ttl: Optional[Duration]) -> Optional[float]:
    """Normalize a lifetime to positive seconds, or None for "never expires"."""
    if ttl is None:
        return None
    seconds = ttl.total_seconds() if isinstance(ttl, timedelta) else float(ttl)
    return seconds if seconds > 0 else None


class TimerService:
    def __init__(self, *, loop: Optional[Scheduler] = None) -> None:
        # When no loop is given, the running loop is looked up at arm time.
        self._loop = loop

    @property
    def loop(self) -> Optional[Scheduler]:
        return self._loop

    def arm(self, ttl: Optional[Duration], on_fire: Callable[[], Any]) -> Optional[TimerHandle]:
        seconds = to_seconds(ttl)
        if seconds is None:
            return None

        handle = self._resolve_loop().call_later(seconds, on_fire)
        logger.debug("Armed watchdog for %.3fs", seconds)
        return handle

    def cancel(self, handle: Optional[TimerHandle]) -> None:
        # asyncio handles tolerate repeated cancel() and cancel() after firing
        if handle is None:
            return
        handle.cancel()

    def _resolve_loop(self) -> Scheduler:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError as e:
            raise SchedulerUnavailableError(
                "A lifetime needs a running event loop; pass loop= or create the store inside a coroutine"
            ) from e
