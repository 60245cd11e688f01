"""Shared fixtures for typingpause tests."""

import pytest

from typingpause.config import PauseConfig
from typingpause.element import TextInput
from typingpause.registry import PauseRegistry


class ManualClock:
    """Millisecond clock advanced by hand."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class _ManualTimer:
    def __init__(self, due: float, callback) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler that only fires timers when :meth:`advance` is called."""

    def __init__(self, clock: ManualClock) -> None:
        self.clock = clock
        self.timers: list[_ManualTimer] = []
        self.delays: list[float] = []

    def schedule(self, delay_ms, callback):
        self.delays.append(delay_ms)
        timer = _ManualTimer(self.clock.now + delay_ms, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[_ManualTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, ms: float) -> None:
        target = self.clock.now + ms
        while True:
            due = sorted(
                (t for t in self.pending if t.due <= target),
                key=lambda t: t.due,
            )
            if not due:
                break
            timer = due[0]
            self.timers.remove(timer)
            self.clock.now = timer.due
            timer.callback()
        self.clock.now = target


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def scheduler(clock):
    return ManualScheduler(clock)


@pytest.fixture
def default_config():
    return PauseConfig()


@pytest.fixture
def field():
    return TextInput(name="search")


@pytest.fixture
def registry(scheduler, clock):
    with PauseRegistry(scheduler=scheduler, clock=clock) as r:
        yield r
