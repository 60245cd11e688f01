"""Decorator API for subscribing functions to typing pauses."""

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from typingpause.config import PauseConfig
from typingpause.registry import PauseRegistry

F = TypeVar("F", bound=Callable[..., Any])


def typing_pause(
    registry: PauseRegistry,
    target: Any,
    config: PauseConfig | Mapping[str, Any] | None = None,
    **options: Any,
) -> Callable[[F], F]:
    """Decorator that subscribes a function to typing pauses on *target*.

    The function is returned unchanged apart from two attributes:
    ``subscription`` (whatever :meth:`PauseRegistry.subscribe` returned)
    and ``detach()``, which detaches every subscription it made.

    Args:
        registry: The registry that owns the element bindings.
        target: An element, an iterable of elements, or a selector string.
        config: A :class:`PauseConfig` or mapping of options.
        **options: :class:`PauseConfig` fields, as an alternative to *config*.

    Examples:
    ```python
        registry = PauseRegistry()
        search = TextInput()

        @typing_pause(registry, search, min_wait=250, adaptive=False)
        def suggest(pause: TypingPause) -> None:
            print("search for", pause.value)

        suggest.detach()
    ```
    """
    if config is not None and options:
        raise TypeError("Pass either config or keyword options, not both")
    if options:
        config = PauseConfig(**options)

    def decorator(fn: F) -> F:
        subscription = registry.subscribe(target, fn, config)

        def detach() -> None:
            if subscription is None:
                return
            handles = subscription if isinstance(subscription, list) else [subscription]
            for handle in handles:
                handle.detach()

        fn.subscription = subscription  # type: ignore[attr-defined]
        fn.detach = detach  # type: ignore[attr-defined]
        return fn

    return decorator
