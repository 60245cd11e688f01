"""Configuration types for the typing-pause debouncer."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class ArmDelay(StrEnum):
    """Which delay the pause timer is armed with.

    MIN_WAIT:  Always arm ``min_wait``. The adaptive estimate is still
               computed (and exposed as ``last_delay``) but does not change
               when the signal fires.
    ESTIMATED: Arm the computed delay. In non-adaptive mode this is
               ``min_wait`` anyway.
    """

    MIN_WAIT = "min_wait"
    ESTIMATED = "estimated"


# camelCase option names accepted by :meth:`PauseConfig.from_mapping`
_ALIASES = {
    "minLength": "min_length",
    "minWait": "min_wait",
    "maxWait": "max_wait",
    "waitMultiplier": "wait_multiplier",
    "armDelay": "arm_delay",
}


@dataclass(frozen=True, slots=True)
class PauseConfig:
    """Configuration for one typing-pause subscription.

    Attributes:
        adaptive: Adapt the delay to the user's typing rate.
        min_length: The (filtered) input value must be longer than this
                    for the pause to fire.
        min_wait: Minimum delay in milliseconds before firing.
        max_wait: Maximum estimated delay in milliseconds.
        wait_multiplier: Applied to the average interval between keystrokes
                         to get the estimated delay.
        filter: Optional callable translating the raw input value into the
                value checked against ``min_length`` and delivered in the
                payload. Anything that isn't callable is treated as absent.
        arm_delay: Which delay the timer is armed with.
    """

    adaptive: bool = True
    min_length: int = 1
    min_wait: float = 400
    max_wait: float = 3000
    wait_multiplier: float = 4
    filter: Callable[[str], Any] | None = None
    arm_delay: ArmDelay = ArmDelay.MIN_WAIT

    def __post_init__(self) -> None:
        if self.filter is not None and not callable(self.filter):
            object.__setattr__(self, "filter", None)

        if self.min_length < 0:
            raise ValueError(f"min_length must be >= 0, got {self.min_length}")

        if self.min_wait <= 0:
            raise ValueError(f"min_wait must be positive, got {self.min_wait}")

        if self.max_wait < self.min_wait:
            raise ValueError(f"max_wait ({self.max_wait}) must be >= min_wait ({self.min_wait})")

        if self.wait_multiplier <= 0:
            raise ValueError(f"wait_multiplier must be positive, got {self.wait_multiplier}")

        object.__setattr__(self, "arm_delay", ArmDelay(self.arm_delay))

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "PauseConfig":
        """Build a config from a plain mapping.

        Both field names and the camelCase spellings (``minWait``,
        ``waitMultiplier``, ...) are understood. Missing keys and ``None``
        values fall back to the defaults; unknown keys are logged and ignored.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in options.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                logger.debug("ignoring unknown typing-pause option %r", key)
                continue
            if value is not None:
                kwargs[name] = value
        return cls(**kwargs)

    def transform(self, raw: str) -> Any:
        """Apply ``filter`` to *raw*, or return it unchanged."""
        return self.filter(raw) if self.filter is not None else raw
