"""
Protocols for the collaborators eventdispatch hands dispatch functions to.

The routing table that stores dispatch functions per event type and fans
events out to them lives outside this library. It only needs to accept
registrations of the shape below.

Example:
    >>> class RoutingTable:
    ...     def __init__(self) -> None:
    ...         self._handlers: dict[type, list[DispatchFunction]] = defaultdict(list)
    ...
    ...     def register(self, event_type: type, handler: DispatchFunction) -> None:
    ...         self._handlers[event_type].append(handler)
"""

from typing import Protocol, runtime_checkable

from eventdispatch.types import DispatchFunction


@runtime_checkable
class MessageHandlerRegistration(Protocol):
    """Protocol for routing tables that accept several handlers per event type."""

    def register(self, event_type: type, handler: DispatchFunction) -> None:
        """
        Register a dispatch function for an event type.

        Args:
            event_type: Class of events routed to the handler
            handler: Dispatch function produced by compile_dispatch_function
        """
        ...


__all__ = [
    "MessageHandlerRegistration",
]
