"""
eventdispatch - Event handler discovery and dispatch compilation for Python.

This library provides:
- @event_handler marker for declaring handler methods
- Signature classification of sync, async and cancellable async handlers
- Immutable HandlerDescriptor built once per handler method
- Dispatch functions with one (event, cancellation_token) calling convention
  that carry every failure through the returned awaitable
- Registration helpers for routing tables holding several handlers per event
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("eventdispatch")
except PackageNotFoundError:
    # Package not installed (running from source without install)
    __version__ = "0.0.0.dev0"

from eventdispatch.cancellation import CancellationToken, OperationCancelledError
from eventdispatch.config import DispatchConfig
from eventdispatch.exceptions import (
    CancellationNotSupportedForSyncHandlersError,
    EventDispatchError,
    HandlerCompilationError,
    HandlerDeclarationError,
    HandlerValidationError,
    InstanceResolutionError,
    InvalidInstanceTypeError,
    MissingEventParameterError,
    UnexpectedEventTypeError,
    UnsupportedEventTypeError,
    UnsupportedHandlerSignatureError,
    UnsupportedReturnTypeError,
)
from eventdispatch.handlers import (
    EventHandlerMarker,
    HandlerDescriptor,
    HandlerSignature,
    HandlerVariant,
    classify_handler,
    compile_dispatch_function,
    event_handler,
    get_event_handler_marker,
    is_event_handler,
)
from eventdispatch.protocols import MessageHandlerRegistration
from eventdispatch.registration import (
    register_event_handlers,
    register_event_handlers_from_module,
    register_event_handlers_from_modules,
    register_event_handlers_from_type,
    register_event_handlers_from_types,
)
from eventdispatch.types import DispatchFunction, InstanceFactory, TypeInstanceFactory

__all__ = [
    "__version__",
    # Cancellation
    "CancellationToken",
    "OperationCancelledError",
    # Configuration
    "DispatchConfig",
    # Exceptions
    "EventDispatchError",
    "HandlerDeclarationError",
    "HandlerValidationError",
    "MissingEventParameterError",
    "UnsupportedEventTypeError",
    "UnsupportedReturnTypeError",
    "CancellationNotSupportedForSyncHandlersError",
    "UnsupportedHandlerSignatureError",
    "InstanceResolutionError",
    "InvalidInstanceTypeError",
    "UnexpectedEventTypeError",
    "HandlerCompilationError",
    # Handlers
    "EventHandlerMarker",
    "HandlerDescriptor",
    "HandlerSignature",
    "HandlerVariant",
    "classify_handler",
    "compile_dispatch_function",
    "event_handler",
    "get_event_handler_marker",
    "is_event_handler",
    # Registration
    "MessageHandlerRegistration",
    "register_event_handlers",
    "register_event_handlers_from_type",
    "register_event_handlers_from_types",
    "register_event_handlers_from_module",
    "register_event_handlers_from_modules",
    # Types
    "DispatchFunction",
    "InstanceFactory",
    "TypeInstanceFactory",
]
