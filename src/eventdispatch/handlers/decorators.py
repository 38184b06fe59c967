"""
Event handler marker decorator.

This module contains the @event_handler decorator used to declare methods as
event handlers. Descriptor factories that scan classes or modules only pick
up methods carrying this marker.

Example:
    >>> from eventdispatch.handlers import event_handler
    >>>
    >>> class OrderNotifications:
    ...     @event_handler
    ...     def on_created(self, event: OrderCreated) -> None:
    ...         ...
    ...
    ...     @event_handler(yield_synchronous_execution=True)
    ...     def on_shipped(self, event: OrderShipped) -> None:
    ...         ...
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar, overload

# Type variable for handler functions - preserves the exact type of the decorated function
F = TypeVar("F", bound=Callable[..., Any])

_MARKER_ATTRIBUTE = "_event_handler_marker"


@dataclass(frozen=True)
class EventHandlerMarker:
    """
    Options attached to a method by @event_handler.

    Attributes:
        yield_synchronous_execution: For synchronous handlers, yield control to
            the event loop once before running. Ignored for async handlers.
    """

    yield_synchronous_execution: bool = False


@overload
def event_handler(func: F, /) -> F: ...


@overload
def event_handler(*, yield_synchronous_execution: bool = False) -> Callable[[F], F]: ...


def event_handler(
    func: F | None = None,
    /,
    *,
    yield_synchronous_execution: bool = False,
) -> F | Callable[[F], F]:
    """
    Mark a method as an event handler.

    Supported signatures (methods can be named freely):

        def handle(self, event: EventType) -> None
        async def handle(self, event: EventType) -> None
        async def handle(self, event: EventType, cancellation_token: CancellationToken) -> None

    Signatures are validated when a descriptor is built, not here.

    Args:
        func: The function being decorated (when used without parentheses)
        yield_synchronous_execution: Yield to the event loop before running a
            synchronous handler so it interleaves with other pending work

    Returns:
        The original function, marked, or a decorator doing so
    """

    def decorator(f: F) -> F:
        marker = EventHandlerMarker(yield_synchronous_execution=yield_synchronous_execution)
        setattr(f, _MARKER_ATTRIBUTE, marker)
        return f

    if func is not None:
        return decorator(func)
    return decorator


def get_event_handler_marker(func: Callable[..., Any]) -> EventHandlerMarker | None:
    """
    Get the marker attached by @event_handler.

    Bound methods expose the marker of their underlying function.

    Args:
        func: A function potentially decorated with @event_handler

    Returns:
        The marker if decorated, None otherwise
    """
    marker = getattr(func, _MARKER_ATTRIBUTE, None)
    return marker if isinstance(marker, EventHandlerMarker) else None


def is_event_handler(func: Callable[..., Any]) -> bool:
    """
    Check if a function is decorated as an event handler.

    Example:
        >>> @event_handler
        ... def my_handler(self, event: OrderCreated): pass
        >>> is_event_handler(my_handler)
        True
        >>> def regular_function(): pass
        >>> is_event_handler(regular_function)
        False
    """
    return get_event_handler_marker(func) is not None


__all__ = [
    "EventHandlerMarker",
    "event_handler",
    "get_event_handler_marker",
    "is_event_handler",
]
