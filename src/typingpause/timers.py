"""Timer primitives used to arm the pause signal."""

import time
from asyncio import AbstractEventLoop, get_running_loop
from collections.abc import Callable
from typing import Protocol


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Schedules a callback after a delay given in milliseconds."""

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> Cancellable: ...


Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Default clock: monotonic time in milliseconds."""
    return time.monotonic() * 1000.0


class LoopScheduler:
    """Scheduler backed by an asyncio event loop's ``call_later``.

    The returned ``asyncio.TimerHandle`` is the cancellable handle. Without an
    explicit *loop* the running loop is picked up on first use, so the
    scheduler must first be used from inside a coroutine or loop callback.
    """

    __slots__ = ("_loop",)

    def __init__(self, loop: AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def _get_loop(self) -> AbstractEventLoop:
        if self._loop is None:
            self._loop = get_running_loop()
        return self._loop

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> Cancellable:
        return self._get_loop().call_later(delay_ms / 1000.0, callback)
