"""Event and payload types exchanged with input elements and listeners."""

from dataclasses import dataclass
from typing import Any, NamedTuple

EVENT_NAME = "typing-pause"
KEYUP = "keyup"
BLUR = "blur"


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """A raw keyup as delivered by an input element."""

    key_code: int
    target: Any = None


class TypingPause(NamedTuple):
    """Payload delivered to listeners once typing has paused.

    ``input_value`` is the raw element value at the last accepted keystroke,
    ``value`` the same after the configured filter. ``target`` and
    ``current_target`` are both the bound element.
    """

    input_value: str
    value: Any
    last_key_event: KeyEvent
    target: Any
    current_target: Any
    type: str = EVENT_NAME
