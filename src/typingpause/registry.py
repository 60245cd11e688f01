"""Bind typing-pause debouncers to input elements, one per element."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from typingpause.config import PauseConfig
from typingpause.core import PauseDebouncer
from typingpause.element import InputElement, Listener
from typingpause.events import BLUR, KEYUP, TypingPause
from typingpause.timers import Clock, Scheduler

logger = logging.getLogger(__name__)

PauseCallback = Callable[[TypingPause], None]
Resolver = Callable[[str], Iterable[Any]]


@dataclass
class _Binding:
    element: Any
    debouncer: PauseDebouncer
    listeners: list[Listener]
    callbacks: list[PauseCallback] = field(default_factory=list)


class Subscription:
    """Detach handle returned by :meth:`PauseRegistry.subscribe`."""

    __slots__ = ("_callback", "_element", "_registry")

    def __init__(self, registry: PauseRegistry, element: Any, callback: PauseCallback) -> None:
        self._registry = registry
        self._element = element
        self._callback = callback

    @property
    def element(self) -> Any:
        return self._element

    @property
    def active(self) -> bool:
        return self._registry._has_callback(self._element, self._callback)

    def detach(self) -> None:
        """Stop delivering pauses to this subscription's callback (idempotent)."""
        self._registry._detach(self._element, self._callback)

    def __repr__(self) -> str:
        return f"Subscription(element={self._element!r}, active={self.active})"


def _coerce_config(config: PauseConfig | Mapping[str, Any] | None) -> PauseConfig:
    if config is None:
        return PauseConfig()
    if isinstance(config, PauseConfig):
        return config
    if isinstance(config, Mapping):
        return PauseConfig.from_mapping(config)
    raise TypeError(f"config must be a PauseConfig or a mapping, got {type(config).__name__}")


class PauseRegistry:
    """Owns the typing-pause binding of every subscribed element.

    The host creates one registry at startup and subscribes through it. The
    first subscription on an element installs a ``keyup`` listener (and a
    ``blur`` listener in adaptive mode) driving a :class:`PauseDebouncer`;
    later subscriptions on the same element share that debouncer and its
    configuration. Detaching the last subscription of an element disposes
    its debouncer and removes the listeners.

    Args:
        scheduler: Timer primitive handed to every debouncer.
        clock: Millisecond clock handed to every debouncer.
        resolver: Maps a selector string to matching elements. Without one,
                  selector strings are rejected.

    Example::

        registry = PauseRegistry()
        field = TextInput()

        sub = registry.subscribe(field, lambda pause: print(pause.value), {"minWait": 300})
        field.type("hello")
        ...
        sub.detach()
    """

    __slots__ = ("_bindings", "_clock", "_closed", "_resolver", "_scheduler", "_waiters")

    def __init__(
        self,
        *,
        scheduler: Scheduler | None = None,
        clock: Clock | None = None,
        resolver: Resolver | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._clock = clock
        self._resolver = resolver
        self._bindings: dict[int, _Binding] = {}
        self._waiters: set[asyncio.Future[TypingPause]] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._bindings)

    def bound(self, element: Any) -> bool:
        return id(element) in self._bindings

    def debouncer_for(self, element: Any) -> PauseDebouncer | None:
        binding = self._bindings.get(id(element))
        return binding.debouncer if binding is not None else None

    def subscribe(
        self,
        target: Any,
        callback: Callable[..., Any],
        config: PauseConfig | Mapping[str, Any] | None = None,
        context: Any = None,
        *args: Any,
    ) -> Subscription | list[Subscription] | None:
        """Call *callback* with a :class:`TypingPause` whenever typing pauses.

        Args:
            target: An element, an iterable of elements, or a selector string
                    handed to the registry's resolver.
            callback: Invoked as ``callback(pause, *args)``. A plain function
                      is bound to *context* first, so it receives it as
                      ``self``; methods and other callables are called as is.
            config: A :class:`PauseConfig`, a mapping of options, or None.
            context: Optional object a plain-function *callback* is bound to.
            *args: Extra positional arguments appended after the payload.

        Returns:
            None when *target* matches no element, a :class:`Subscription`
            for a single element, or one subscription per element otherwise.
        """
        self._ensure_open()
        cfg = _coerce_config(config)
        elements = self._resolve(target)

        if not elements:
            logger.debug("typing-pause target %r matched no elements", target)
            return None

        bound = callback
        if context is not None and inspect.isfunction(callback):
            bound = callback.__get__(context)

        subscriptions = []
        for element in elements:

            def listener(pause: TypingPause, _bound: Callable[..., Any] = bound) -> None:
                _bound(pause, *args)

            subscriptions.append(self._subscribe_one(element, listener, cfg))

        return subscriptions if len(subscriptions) > 1 else subscriptions[0]

    async def wait_for_pause(
        self,
        target: Any,
        config: PauseConfig | Mapping[str, Any] | None = None,
    ) -> TypingPause:
        """Wait for the next typing pause on a single element."""
        self._ensure_open()
        elements = self._resolve(target)
        if len(elements) != 1:
            raise ValueError(f"wait_for_pause needs exactly one element, got {len(elements)}")

        future: asyncio.Future[TypingPause] = asyncio.get_running_loop().create_future()

        def on_pause(pause: TypingPause) -> None:
            if not future.done():
                future.set_result(pause)

        subscription = self._subscribe_one(elements[0], on_pause, _coerce_config(config))
        self._waiters.add(future)
        try:
            return await future
        finally:
            self._waiters.discard(future)
            subscription.detach()

    def close(self) -> None:
        """Dispose every binding and refuse new subscriptions."""
        if self._closed:
            return
        self._closed = True
        for key in list(self._bindings):
            self._unbind(key)
        for future in self._waiters:
            if not future.done():
                future.set_exception(RuntimeError("PauseRegistry is closed"))
        self._waiters.clear()

    def __enter__(self) -> PauseRegistry:
        return self

    def __exit__(self, *_: Any) -> None:
        self.close()

    async def __aenter__(self) -> PauseRegistry:
        return self

    async def __aexit__(self, *_: Any) -> None:
        self.close()

    def _resolve(self, target: Any) -> list[Any]:
        if isinstance(target, str):
            if self._resolver is None:
                raise TypeError("Selector targets need a PauseRegistry(resolver=...)")
            return list(self._resolver(target))
        if isinstance(target, InputElement):
            return [target]
        if isinstance(target, Iterable):
            return list(target)
        raise TypeError(f"Cannot bind typing-pause to {type(target).__name__}")

    def _subscribe_one(self, element: Any, listener: PauseCallback, config: PauseConfig) -> Subscription:
        binding = self._bindings.get(id(element))
        if binding is None:
            binding = self._bind(element, config)
        elif config != binding.debouncer.config:
            logger.debug(
                "typing-pause already bound to %r; keeping its config %r over %r",
                element,
                binding.debouncer.config,
                config,
            )
        binding.callbacks.append(listener)
        return Subscription(self, element, listener)

    def _bind(self, element: Any, config: PauseConfig) -> _Binding:
        key = id(element)
        debouncer = PauseDebouncer(
            element,
            lambda pause: self._deliver(key, pause),
            config=config,
            scheduler=self._scheduler,
            clock=self._clock,
        )
        listeners = [element.on(KEYUP, debouncer.on_keyup)]
        if config.adaptive:
            listeners.append(element.on(BLUR, lambda _event: debouncer.reset()))

        binding = _Binding(element=element, debouncer=debouncer, listeners=listeners)
        self._bindings[key] = binding
        logger.debug("typing-pause bound to %r", element)
        return binding

    def _unbind(self, key: int) -> None:
        binding = self._bindings.pop(key)
        binding.debouncer.dispose()
        for listener in binding.listeners:
            listener.detach()
        logger.debug("typing-pause unbound from %r", binding.element)

    def _deliver(self, key: int, pause: TypingPause) -> None:
        binding = self._bindings.get(key)
        if binding is None:
            return
        for callback in list(binding.callbacks):
            try:
                callback(pause)
            except Exception:
                logger.exception("typing-pause listener failed on %r", binding.element)

    def _has_callback(self, element: Any, callback: PauseCallback) -> bool:
        binding = self._bindings.get(id(element))
        return binding is not None and any(cb is callback for cb in binding.callbacks)

    def _detach(self, element: Any, callback: PauseCallback) -> None:
        key = id(element)
        binding = self._bindings.get(key)
        if binding is None:
            return
        for index, cb in enumerate(binding.callbacks):
            if cb is callback:
                del binding.callbacks[index]
                break
        if not binding.callbacks:
            self._unbind(key)

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("PauseRegistry is closed")

    def __repr__(self) -> str:
        return f"PauseRegistry(bound={len(self._bindings)}, closed={self._closed})"
