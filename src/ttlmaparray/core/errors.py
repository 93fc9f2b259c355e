from __future__ import annotations


class TTLMapArrayError(Exception):
    """Base error for the expiring collections."""


class SchedulerUnavailableError(TTLMapArrayError, RuntimeError):
    """Raised when a lifetime is requested but no event loop can run the timer."""


class SignalBindingError(TTLMapArrayError, TypeError):
    """Raised when a cancellation signal cannot be subscribed to."""
