import asyncio
from datetime import timedelta

import pytest

from ttlmaparray.core.errors import SchedulerUnavailableError
from ttlmaparray.core.timers import TimerService, to_seconds


@pytest.mark.parametrize("ttl", [None, 0, 0.0, -1, timedelta(0)])
def test_arm_without_lifetime_returns_none(fake_loop, ttl):
    timers = TimerService(loop=fake_loop)

    assert timers.arm(ttl, lambda: None) is None
    assert fake_loop.handles == []


def test_arm_schedules_on_given_loop(fake_loop):
    timers = TimerService(loop=fake_loop)
    fired = []

    handle = timers.arm(0.25, lambda: fired.append(True))

    assert handle is fake_loop.handles[0]
    assert handle.delay == 0.25

    fake_loop.fire(handle)
    assert fired == [True]


def test_arm_accepts_timedelta(fake_loop):
    timers = TimerService(loop=fake_loop)

    handle = timers.arm(timedelta(milliseconds=1500), lambda: None)

    assert handle.delay == pytest.approx(1.5)


def test_to_seconds():
    assert to_seconds(None) is None
    assert to_seconds(-0.5) is None
    assert to_seconds(2) == 2.0
    assert to_seconds(timedelta(seconds=3)) == 3.0


def test_cancel_is_idempotent(fake_loop):
    timers = TimerService(loop=fake_loop)
    handle = timers.arm(1.0, lambda: None)

    timers.cancel(handle)
    timers.cancel(handle)
    timers.cancel(None)

    assert handle.cancelled is True


def test_arm_without_running_loop_raises():
    timers = TimerService()

    with pytest.raises(SchedulerUnavailableError):
        timers.arm(1.0, lambda: None)


@pytest.mark.asyncio
async def test_arm_uses_running_loop_and_fires_once():
    timers = TimerService()
    fired = []

    timers.arm(0.01, lambda: fired.append(1))
    await asyncio.sleep(0.05)

    assert fired == [1]


@pytest.mark.asyncio
async def test_cancelled_timer_never_fires():
    timers = TimerService()
    fired = []

    handle = timers.arm(0.01, lambda: fired.append(1))
    timers.cancel(handle)
    await asyncio.sleep(0.03)
    timers.cancel(handle)

    assert fired == []
