"""Typing-rate based delay estimation."""

import math

from typingpause.config import PauseConfig


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def estimate(stroke_count: int, elapsed_ms: float, config: PauseConfig) -> float:
    """Estimate how long to wait for a pause after the latest keystroke.

    On the first stroke of a burst there is no cadence to measure yet, so the
    longest wait (``max_wait``) is used. Afterwards the average interval
    between strokes, scaled by ``wait_multiplier``, is used. The result always
    lies in ``[min_wait, max_wait]``.

    Args:
        stroke_count: Accepted keystrokes in the current burst, including
                      the one being handled.
        elapsed_ms: Milliseconds since the first stroke of the burst.
        config: Supplies the bounds and the multiplier.

    Complexity:
        Time:   O(1)
        Memory: O(1)
    """
    if stroke_count == 1:
        delay = config.max_wait
    else:
        delay = min(_round_half_up(elapsed_ms / stroke_count) * config.wait_multiplier, config.max_wait)

    return max(delay, config.min_wait)
