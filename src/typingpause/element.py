"""Input element interface and an in-memory implementation of it."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from typingpause import keys
from typingpause.events import BLUR, KEYUP, KeyEvent

Handler = Callable[[Any], None]

# First OEM punctuation key code (";" on US layouts)
_PUNCTUATION = 186


def _key_code(char: str) -> int:
    if char == " ":
        return keys.SPACE
    if char.isascii() and char.isalnum():
        return ord(char.upper())
    return _PUNCTUATION


class Listener(Protocol):
    def detach(self) -> None: ...


@runtime_checkable
class InputElement(Protocol):
    """What the registry needs from an element: its value and event listeners."""

    @property
    def value(self) -> str: ...

    def on(self, event_name: str, handler: Handler) -> Listener: ...


class _TextInputListener:
    __slots__ = ("_element", "_event_name", "_handler")

    def __init__(self, element: TextInput, event_name: str, handler: Handler) -> None:
        self._element = element
        self._event_name = event_name
        self._handler = handler

    def detach(self) -> None:
        handlers = self._element._handlers[self._event_name]
        if self._handler in handlers:
            handlers.remove(self._handler)


class TextInput:
    """Headless text input that dispatches keyup and blur events.

    Suitable for hosts that feed keystrokes from a terminal, a socket, or a
    GUI toolkit without a native element to bind to.

    Example::

        field = TextInput()
        field.type("hello")   # five keyups, value == "hello"
        field.backspace()     # value == "hell"
        field.blur()
    """

    __slots__ = ("_handlers", "name", "value")

    def __init__(self, value: str = "", *, name: str | None = None) -> None:
        self.value = value
        self.name = name
        self._handlers: defaultdict[str, list[Handler]] = defaultdict(list)

    def on(self, event_name: str, handler: Handler) -> Listener:
        self._handlers[event_name].append(handler)
        return _TextInputListener(self, event_name, handler)

    def listener_count(self, event_name: str) -> int:
        return len(self._handlers.get(event_name, ()))

    def keyup(self, key_code: int, value: str | None = None) -> KeyEvent:
        """Dispatch a keyup, first replacing the value if *value* is given."""
        if value is not None:
            self.value = value
        event = KeyEvent(key_code=key_code, target=self)
        self._dispatch(KEYUP, event)
        return event

    def type(self, text: str) -> None:
        """Append *text* one character at a time, one keyup per character."""
        for char in text:
            self.value += char
            self.keyup(_key_code(char))

    def backspace(self) -> None:
        self.value = self.value[:-1]
        self.keyup(keys.BACKSPACE)

    def blur(self) -> None:
        self._dispatch(BLUR, None)

    def _dispatch(self, event_name: str, event: Any) -> None:
        for handler in list(self._handlers.get(event_name, ())):
            handler(event)

    def __repr__(self) -> str:
        if self.name is not None:
            return f"TextInput(name={self.name!r})"
        return f"TextInput(value={self.value!r})"
