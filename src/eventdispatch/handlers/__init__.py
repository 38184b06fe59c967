"""
Handler discovery and compilation.

This module provides the two-stage pipeline that turns event handler methods
into uniform dispatch functions:

- event_handler: Decorator marking methods as event handlers
- classify_handler: Validates a method signature and picks its HandlerVariant
- HandlerDescriptor: Immutable description of a validated handler
- compile_dispatch_function: Builds the (event, cancellation_token) dispatch
  function for a descriptor

Example:
    >>> from eventdispatch.handlers import HandlerDescriptor, event_handler
    >>>
    >>> class OrderNotifications:
    ...     @event_handler
    ...     def on_created(self, event: OrderCreated) -> None:
    ...         ...
    >>>
    >>> [descriptor] = HandlerDescriptor.from_type(OrderNotifications, OrderNotifications)
    >>> dispatch = descriptor.create_dispatch_function()
    >>> await dispatch(OrderCreated(...), None)
"""

from eventdispatch.handlers.builder import compile_dispatch_function
from eventdispatch.handlers.classifier import (
    HandlerSignature,
    HandlerVariant,
    classify_handler,
)
from eventdispatch.handlers.decorators import (
    EventHandlerMarker,
    event_handler,
    get_event_handler_marker,
    is_event_handler,
)
from eventdispatch.handlers.descriptor import HandlerDescriptor, declaring_type_of
from eventdispatch.handlers.instance import ensure_event_type, resolve_instance

__all__ = [
    "EventHandlerMarker",
    "HandlerDescriptor",
    "HandlerSignature",
    "HandlerVariant",
    "classify_handler",
    "compile_dispatch_function",
    "declaring_type_of",
    "ensure_event_type",
    "event_handler",
    "get_event_handler_marker",
    "is_event_handler",
    "resolve_instance",
]
