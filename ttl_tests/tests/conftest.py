import pytest


class FakeHandle:
    def __init__(self, delay: float, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeLoop:
    """Minimal event-loop stand-in capturing call_later() requests."""

    def __init__(self) -> None:
        self.handles = []

    def call_later(self, delay, callback, *args):
        h = FakeHandle(delay, callback)
        self.handles.append(h)
        return h

    def pending(self):
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def fire(self, handle: FakeHandle) -> None:
        handle.fired = True
        handle.callback()

    def fire_all(self) -> None:
        for h in sorted(self.pending(), key=lambda h: h.delay):
            if not h.cancelled:
                self.fire(h)


def _check_invariants(store) -> None:
    assert len(store._queue) == len(store._index)
    for entry in store._queue:
        assert store._index[entry.key] is entry
    n = store.size()
    assert n == store.length == len(store)
    assert len(store.keys()) == len(store.values()) == len(store.entries()) == n


@pytest.fixture
def fake_loop():
    return FakeLoop()


@pytest.fixture
def check_invariants():
    return _check_invariants
