"""Library exceptions for the eventdispatch package.

Two families live here:

- Build-time errors (``HandlerValidationError`` and ``HandlerDeclarationError``)
  are raised synchronously while descriptors are created. They point at a
  programming mistake in how a handler method is declared.
- Call-time errors (``InstanceResolutionError``, ``InvalidInstanceTypeError``,
  ``UnexpectedEventTypeError``, ``HandlerCompilationError``) are never raised
  out of a dispatch function call. They are carried by the awaitable it returns.
"""

from __future__ import annotations


def _type_name(value: type | None) -> str:
    if value is None:
        return "<unknown>"
    return getattr(value, "__qualname__", None) or getattr(value, "__name__", repr(value))


class EventDispatchError(Exception):
    """Base exception for eventdispatch library."""

    pass


# =============================================================================
# Build-time errors
# =============================================================================


class HandlerDeclarationError(EventDispatchError):
    """Raised when a handler cannot be registered the way it was declared."""

    pass


class HandlerValidationError(EventDispatchError, ValueError):
    """
    Raised when an event handler method has an unsupported signature.

    Attributes:
        declaring_type: Class owning the handler method
        method_name: Name of the handler method
        reason: Description of the violated rule
    """

    def __init__(self, declaring_type: type | None, method_name: str, reason: str) -> None:
        self.declaring_type = declaring_type
        self.method_name = method_name
        self.reason = reason
        super().__init__(f"{reason} Check {_type_name(declaring_type)}'s {method_name}() method.")


class MissingEventParameterError(HandlerValidationError):
    """Raised when a handler method does not accept an event parameter."""

    def __init__(self, declaring_type: type | None, method_name: str) -> None:
        super().__init__(
            declaring_type,
            method_name,
            "Method must accept an event object as its first parameter after 'self'.",
        )


class UnsupportedEventTypeError(HandlerValidationError):
    """
    Raised when the event parameter is not annotated with a reference type.

    Attributes:
        annotation: The annotation found on the event parameter (None if missing)
    """

    def __init__(
        self,
        declaring_type: type | None,
        method_name: str,
        annotation: object = None,
    ) -> None:
        self.annotation = annotation
        if annotation is None:
            reason = (
                "Method's event parameter has no type annotation, "
                "annotate it with the event class."
            )
        else:
            reason = (
                f"Method's event parameter is annotated with {annotation!r}, "
                "only class-based (non-value) event types are supported."
            )
        super().__init__(declaring_type, method_name, reason)


class UnsupportedReturnTypeError(HandlerValidationError):
    """
    Raised when a handler returns something other than None or an awaitable of None.

    Attributes:
        return_annotation: The offending return annotation
    """

    def __init__(
        self,
        declaring_type: type | None,
        method_name: str,
        return_annotation: object,
    ) -> None:
        self.return_annotation = return_annotation
        super().__init__(
            declaring_type,
            method_name,
            f"Event handler methods can only return None or an awaitable of None, "
            f"got {return_annotation!r}.",
        )


class CancellationNotSupportedForSyncHandlersError(HandlerValidationError):
    """Raised when a synchronous handler declares a cancellation token parameter."""

    def __init__(self, declaring_type: type | None, method_name: str) -> None:
        super().__init__(
            declaring_type,
            method_name,
            "Cancellation token support is only available for async methods "
            "(coroutine functions or methods returning an awaitable).",
        )


class UnsupportedHandlerSignatureError(HandlerValidationError):
    """
    Raised when a handler declares parameters that dispatch cannot supply.

    Attributes:
        parameter_name: Name of the unsupported parameter
    """

    def __init__(self, declaring_type: type | None, method_name: str, parameter_name: str) -> None:
        self.parameter_name = parameter_name
        super().__init__(
            declaring_type,
            method_name,
            f"Parameter '{parameter_name}' cannot be supplied by dispatch. "
            "Supported signatures are (self, event) and (self, event, cancellation_token); "
            "give extra parameters a default value.",
        )


# =============================================================================
# Call-time errors
# =============================================================================


class InstanceResolutionError(EventDispatchError):
    """
    Raised when the instance factory of a handler fails or returns None.

    When the factory raised, the original exception is chained as ``__cause__``.

    Attributes:
        expected_type: The handler's declaring type
    """

    def __init__(self, expected_type: type) -> None:
        self.expected_type = expected_type
        super().__init__(
            f"Failed to retrieve an instance of {_type_name(expected_type)} "
            "from the instance factory. Please check registration configuration."
        )


class InvalidInstanceTypeError(EventDispatchError):
    """
    Raised when the instance factory returns an object of the wrong type.

    Attributes:
        expected_type: The handler's declaring type
        actual_type: Type of the object returned by the factory
    """

    def __init__(self, expected_type: type, actual_type: type) -> None:
        self.expected_type = expected_type
        self.actual_type = actual_type
        super().__init__(
            f"Invalid instance provided by the instance factory. "
            f"Expected an instance of {_type_name(expected_type)} "
            f"but was given {_type_name(actual_type)}."
        )


class UnexpectedEventTypeError(EventDispatchError, TypeError):
    """
    Raised when a dispatch function receives an event of the wrong type.

    Attributes:
        expected_type: Event type accepted by the handler
        actual_type: Runtime type of the event that was dispatched
    """

    def __init__(self, expected_type: type, actual_type: type) -> None:
        self.expected_type = expected_type
        self.actual_type = actual_type
        super().__init__(
            f"Invalid event. Expected event of type {_type_name(expected_type)} "
            f"but {_type_name(actual_type)} was found."
        )


class HandlerCompilationError(EventDispatchError):
    """
    Carried by a dispatch function that could not be built.

    The underlying failure is chained as ``__cause__``.

    Attributes:
        declaring_type: Class owning the handler method
        method_name: Name of the handler method
    """

    def __init__(self, declaring_type: type, method_name: str) -> None:
        self.declaring_type = declaring_type
        self.method_name = method_name
        super().__init__(
            f"Failed to create event handler delegate for "
            f"{_type_name(declaring_type)}'s {method_name}() method."
        )


__all__ = [
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
]
