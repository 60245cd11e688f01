"""Per-input debounce state machine that derives the typing-pause signal."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from typingpause import keys
from typingpause.config import ArmDelay, PauseConfig
from typingpause.estimator import estimate
from typingpause.events import KeyEvent, TypingPause
from typingpause.timers import Cancellable, Clock, LoopScheduler, Scheduler, monotonic_ms

logger = logging.getLogger(__name__)


class PauseState(StrEnum):
    IDLE = "idle"
    ACCUMULATING = "accumulating"


@dataclass(slots=True)
class BurstState:
    """Mutable state of the current typing burst.

    ``stroke_count`` and ``burst_start`` only change together on reset;
    ``pending_timer`` is the single outstanding fire, if any.
    """

    stroke_count: int = 0
    burst_start: float | None = None
    pending_timer: Cancellable | None = None

    def cancel_timer(self) -> bool:
        """Cancel the pending timer. Return True if one was pending."""
        if self.pending_timer is None:
            return False
        self.pending_timer.cancel()
        self.pending_timer = None
        return True

    def clear(self) -> None:
        self.stroke_count = 0
        self.burst_start = None
        self.cancel_timer()


class PauseDebouncer:
    """Debounce keyups on one input element into a single pause signal.

    How it works:
        - Keyups for navigation and modifier keys are ignored.
        - Any other keyup cancels the pending timer. If the filtered value is
          longer than ``min_length`` a new timer is armed; otherwise nothing
          is armed.
        - In adaptive mode each armed keystroke is counted and a delay is
          estimated from the average interval since the burst began.
        - When the timer expires, *emit* is called with a :class:`TypingPause`.
        - :meth:`reset` (wired to blur) starts a new burst.

    Example::

        adaptive, min_wait=400, max_wait=3000, wait_multiplier=4

        t=0ms    "ab"   -> stroke 1, estimate 3000, arm
        t=100ms  "abc"  -> cancel, stroke 2, estimate round(100/2)*4=200 -> 400, arm
        t=500ms  timer expires -> emit(value="abc")

    Args:
        target: The element whose ``value`` is read on each keyup.
        emit: Called with the payload when the timer expires.
        config: Subscription configuration.
        scheduler: Timer primitive; defaults to :class:`LoopScheduler`.
        clock: Millisecond clock; defaults to :func:`monotonic_ms`.

    Complexity:
        Time:   O(1) per keyup (plus the filter)
        Memory: O(1)
    """

    __slots__ = (
        "_armed_delay",
        "_burst",
        "_clock",
        "_config",
        "_disposed",
        "_emit",
        "_generation",
        "_last_delay",
        "_scheduler",
        "_target",
    )

    def __init__(
        self,
        target: Any,
        emit: Callable[[TypingPause], None],
        *,
        config: PauseConfig | None = None,
        scheduler: Scheduler | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._target = target
        self._emit = emit
        self._config = config or PauseConfig()
        self._scheduler: Scheduler = scheduler or LoopScheduler()
        self._clock = clock or monotonic_ms
        self._burst = BurstState()
        self._generation = 0
        self._last_delay: float | None = None
        self._armed_delay: float | None = None
        self._disposed = False

    @property
    def config(self) -> PauseConfig:
        return self._config

    @property
    def target(self) -> Any:
        return self._target

    @property
    def state(self) -> PauseState:
        return PauseState.IDLE if self._burst.pending_timer is None else PauseState.ACCUMULATING

    @property
    def pending(self) -> bool:
        return self._burst.pending_timer is not None

    @property
    def stroke_count(self) -> int:
        return self._burst.stroke_count

    @property
    def burst_start(self) -> float | None:
        return self._burst.burst_start

    @property
    def last_delay(self) -> float | None:
        """Delay computed for the most recent armed keystroke."""
        return self._last_delay

    @property
    def armed_delay(self) -> float | None:
        """Duration the most recent timer was actually armed with."""
        return self._armed_delay

    @property
    def disposed(self) -> bool:
        return self._disposed

    def on_keyup(self, event: KeyEvent) -> bool:
        """Handle a keyup on the target. Return True if a timer was armed."""
        self._ensure_active()

        if not keys.accepts(event.key_code):
            return False

        raw = self._target.value
        value = self._config.transform(raw)

        if self._burst.cancel_timer():
            logger.debug("typing-pause timer canceled by keyup on %r", self._target)

        if not value or len(value) <= self._config.min_length:
            return False

        delay = self._next_delay()
        self._last_delay = delay
        self._arm(
            delay if self._config.arm_delay is ArmDelay.ESTIMATED else self._config.min_wait,
            TypingPause(
                input_value=raw,
                value=value,
                last_key_event=event,
                target=self._target,
                current_target=self._target,
            ),
        )
        return True

    def reset(self) -> None:
        """Forget the current burst and cancel any pending timer."""
        if self._burst.stroke_count or self._burst.pending_timer is not None:
            logger.debug("typing-pause burst reset on %r", self._target)
        self._burst.clear()

    def dispose(self) -> None:
        """Cancel any pending timer and refuse further keyups."""
        if self._disposed:
            return
        self._disposed = True
        self._burst.clear()

    def _next_delay(self) -> float:
        if not self._config.adaptive:
            return self._config.min_wait

        now = self._clock()
        self._burst.stroke_count += 1
        if self._burst.stroke_count == 1:
            self._burst.burst_start = now

        assert self._burst.burst_start is not None
        return estimate(self._burst.stroke_count, now - self._burst.burst_start, self._config)

    def _arm(self, delay: float, payload: TypingPause) -> None:
        self._generation += 1
        generation = self._generation
        self._armed_delay = delay
        self._burst.pending_timer = self._scheduler.schedule(delay, lambda: self._fire(generation, payload))
        logger.debug(
            "typing-pause armed for %sms on %r (stroke %d)", delay, self._target, self._burst.stroke_count
        )

    def _fire(self, generation: int, payload: TypingPause) -> None:
        # A handle replaced or canceled after its callback was queued must not fire.
        if generation != self._generation or self._burst.pending_timer is None:
            return
        self._burst.pending_timer = None
        logger.debug("typing-pause fired on %r", self._target)
        self._emit(payload)

    def _ensure_active(self) -> None:
        if self._disposed:
            raise RuntimeError("PauseDebouncer is disposed")

    def __repr__(self) -> str:
        return (
            f"PauseDebouncer(adaptive={self._config.adaptive}, "
            f"min_wait={self._config.min_wait}, "
            f"max_wait={self._config.max_wait}, "
            f"state={self.state.value}, "
            f"strokes={self._burst.stroke_count})"
        )
