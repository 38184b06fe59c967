"""Instance and event checks performed by dispatch functions before invoking a handler."""

from typing import Any

from eventdispatch.exceptions import (
    InstanceResolutionError,
    InvalidInstanceTypeError,
    UnexpectedEventTypeError,
)
from eventdispatch.types import InstanceFactory


def resolve_instance(instance_factory: InstanceFactory, expected_type: type) -> Any:
    """
    Get the object a handler is invoked on from its instance factory.

    Args:
        instance_factory: Zero-argument producer of the handler instance
        expected_type: The handler's declaring type

    Returns:
        The instance, guaranteed to be an instance of expected_type

    Raises:
        InstanceResolutionError: The factory raised (chained as __cause__)
            or returned None
        InvalidInstanceTypeError: The factory returned an object of another type
    """
    try:
        instance = instance_factory()
    except Exception as e:
        raise InstanceResolutionError(expected_type) from e

    if instance is None:
        raise InstanceResolutionError(expected_type)

    if not isinstance(instance, expected_type):
        raise InvalidInstanceTypeError(expected_type, type(instance))

    return instance


def ensure_event_type(event: Any, expected_type: type) -> None:
    """
    Check an event against the type a handler accepts.

    Raises:
        UnexpectedEventTypeError: If event is not an instance of expected_type
    """
    if not isinstance(event, expected_type):
        raise UnexpectedEventTypeError(expected_type, type(event))


__all__ = [
    "resolve_instance",
    "ensure_event_type",
]
