"""typingpause — debounced "typing paused" notifications for text inputs.

Turns a burst of keyups into a single signal fired once the user appears
to have stopped typing. In adaptive mode the wait is estimated from the
user's own typing cadence.

Basic usage:

    from typingpause import PauseRegistry, TextInput

    registry = PauseRegistry()
    field = TextInput()

    registry.subscribe(field, lambda pause: print(pause.value))
    field.type("hello")   # ~400ms later: prints "hello"

Decorator usage:

    from typingpause import typing_pause

    @typing_pause(registry, field, min_wait=250)
    def suggest(pause):
        ...
"""

from typingpause.config import ArmDelay, PauseConfig
from typingpause.core import BurstState, PauseDebouncer, PauseState
from typingpause.decorator import typing_pause
from typingpause.element import InputElement, TextInput
from typingpause.estimator import estimate
from typingpause.events import EVENT_NAME, KeyEvent, TypingPause
from typingpause.keys import accepts
from typingpause.registry import PauseRegistry, Subscription
from typingpause.timers import LoopScheduler, Scheduler

__all__ = [
    "EVENT_NAME",
    "ArmDelay",
    "BurstState",
    "InputElement",
    "KeyEvent",
    "LoopScheduler",
    "PauseConfig",
    "PauseDebouncer",
    "PauseRegistry",
    "PauseState",
    "Scheduler",
    "Subscription",
    "TextInput",
    "TypingPause",
    "accepts",
    "estimate",
    "typing_pause",
]

__version__ = "0.1.0"
