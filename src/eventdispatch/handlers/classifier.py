"""
Signature classification for event handler methods.

Inspects a handler method's parameters and return annotation and decides
which calling convention it follows:

- SYNC: ``def handle(self, event: E) -> None``
- ASYNC: ``async def handle(self, event: E) -> None``
  (or a plain ``def`` annotated to return ``Awaitable[None]``)
- CANCELLABLE_ASYNC: ``async def handle(self, event: E, token: CancellationToken) -> None``

Classification is a pure function of the signature. Unsupported shapes raise
a HandlerValidationError subclass naming the method and the violated rule.

Example:
    >>> class Notifier:
    ...     async def on_created(self, event: OrderCreated) -> None: ...
    >>> classify_handler(Notifier.on_created, declaring_type=Notifier)
    HandlerSignature(event_type=<class 'OrderCreated'>, variant=<HandlerVariant.ASYNC: 'async'>)
"""

import asyncio
import inspect
import logging
import types
import typing
from collections.abc import Awaitable, Callable, Coroutine
from dataclasses import dataclass
from enum import Enum
from typing import Any

from eventdispatch.cancellation import CancellationToken
from eventdispatch.exceptions import (
    CancellationNotSupportedForSyncHandlersError,
    HandlerDeclarationError,
    MissingEventParameterError,
    UnsupportedEventTypeError,
    UnsupportedHandlerSignatureError,
    UnsupportedReturnTypeError,
)

logger = logging.getLogger(__name__)

# Builtin value types are not accepted as events.
VALUE_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    memoryview,
    type(None),
    Enum,
)

_AWAITABLE_ORIGINS: tuple[type, ...] = (Awaitable, Coroutine, asyncio.Future, asyncio.Task)

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)

_MISSING: Any = object()


class HandlerVariant(Enum):
    """
    Calling convention of a handler method.

    Values:
        SYNC: Returns nothing; runs to completion when invoked
        ASYNC: Returns an awaitable with no payload
        CANCELLABLE_ASYNC: Like ASYNC, and accepts a CancellationToken
    """

    SYNC = "sync"
    ASYNC = "async"
    CANCELLABLE_ASYNC = "cancellable_async"


@dataclass(frozen=True)
class HandlerSignature:
    """
    Result of classifying a handler method.

    Attributes:
        event_type: Class of events the handler accepts
        variant: Calling convention of the handler
    """

    event_type: type
    variant: HandlerVariant


def classify_handler(
    method: Callable[..., Any],
    *,
    declaring_type: type | None = None,
) -> HandlerSignature:
    """
    Classify an event handler method.

    The method is expected to be the function defined in the class body (or a
    bound method), so its first parameter is ``self``. The parameter right
    after ``self`` is the event.

    Args:
        method: Handler function or bound method
        declaring_type: Owning class, used in error messages

    Returns:
        The event type and the handler variant

    Raises:
        MissingEventParameterError: No event parameter after self
        UnsupportedEventTypeError: Event parameter not annotated with a class,
            or annotated with a value type
        UnsupportedReturnTypeError: Return shape is neither None nor an
            awaitable of None
        CancellationNotSupportedForSyncHandlersError: Synchronous handler
            declares a CancellationToken parameter
        UnsupportedHandlerSignatureError: Further parameters without defaults
        HandlerDeclarationError: The object is not an inspectable function
    """
    func = method.__func__ if inspect.ismethod(method) else method
    if not inspect.isfunction(func):
        raise HandlerDeclarationError(
            f"Event handlers must be functions defined on a class, got {method!r}."
        )

    method_name = func.__name__
    signature = inspect.signature(func)
    hints = _resolve_annotations(func, signature)

    # Rule 1: (self, event, ...) with a class-typed event
    params = list(signature.parameters.values())
    if len(params) < 2 or params[0].kind not in _POSITIONAL or params[1].kind not in _POSITIONAL:
        raise MissingEventParameterError(declaring_type, method_name)

    event_param = params[1]
    event_annotation = hints.get(event_param.name, _MISSING)
    if not is_reference_type(event_annotation):
        raise UnsupportedEventTypeError(
            declaring_type,
            method_name,
            None if event_annotation is _MISSING else event_annotation,
        )

    # Rule 2: no result, or an awaitable with no payload
    return_annotation = hints.get("return", _MISSING)
    is_async = _classify_return(func, return_annotation, declaring_type)

    # Rule 3: trailing cancellation token
    remaining = params[2:]
    supports_cancellation = bool(remaining) and (
        remaining[0].kind in _POSITIONAL
        and is_cancellation_annotation(hints.get(remaining[0].name, _MISSING))
    )
    if supports_cancellation:
        if not is_async:
            raise CancellationNotSupportedForSyncHandlersError(declaring_type, method_name)
        remaining = remaining[1:]

    for param in remaining:
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        if param.default is inspect.Parameter.empty:
            raise UnsupportedHandlerSignatureError(declaring_type, method_name, param.name)

    # Rule 4
    if supports_cancellation:
        variant = HandlerVariant.CANCELLABLE_ASYNC
    elif is_async:
        variant = HandlerVariant.ASYNC
    else:
        variant = HandlerVariant.SYNC

    return HandlerSignature(event_type=event_annotation, variant=variant)


def is_reference_type(annotation: Any) -> bool:
    """
    Check if an annotation names a class usable as an event type.

    Builtin value types, enums, the cancellation token and typing constructs
    (unions, generics, Any, unresolved string annotations) are rejected.
    Protocols are accepted only when decorated with @runtime_checkable, since
    dispatch checks events with isinstance().
    """
    # typing.Any is a class since Python 3.11
    if annotation is Any or not isinstance(annotation, type):
        return False
    if typing.get_origin(annotation) is not None:
        return False
    if getattr(annotation, "_is_protocol", False) and not getattr(
        annotation, "_is_runtime_protocol", False
    ):
        return False
    return not issubclass(annotation, VALUE_TYPES + (CancellationToken,))


def is_cancellation_annotation(annotation: Any) -> bool:
    """Check if an annotation is CancellationToken or an optional CancellationToken."""
    if isinstance(annotation, type):
        return issubclass(annotation, CancellationToken)
    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        return len(members) == 1 and is_cancellation_annotation(members[0])
    return False


def is_completion_handle(annotation: Any) -> bool:
    """
    Check if a return annotation is an awaitable with no payload.

    Accepts Awaitable, Coroutine, asyncio.Future and asyncio.Task, either bare
    or parametrized with None as the result type.
    """
    origin = typing.get_origin(annotation) or annotation
    if not isinstance(origin, type) or not issubclass(origin, _AWAITABLE_ORIGINS):
        return False
    args = typing.get_args(annotation)
    return not args or _is_no_result(args[-1])


def _is_no_result(annotation: Any) -> bool:
    return annotation is _MISSING or annotation is None or annotation is type(None)


def _classify_return(
    func: Callable[..., Any],
    return_annotation: Any,
    declaring_type: type | None,
) -> bool:
    """Return True for async handlers, False for sync ones."""
    if inspect.isasyncgenfunction(func) or inspect.isgeneratorfunction(func):
        raise UnsupportedReturnTypeError(
            declaring_type,
            func.__name__,
            "generator" if return_annotation is _MISSING else return_annotation,
        )

    if inspect.iscoroutinefunction(func):
        if _is_no_result(return_annotation):
            return True
    elif _is_no_result(return_annotation):
        return False
    elif is_completion_handle(return_annotation):
        return True

    raise UnsupportedReturnTypeError(declaring_type, func.__name__, return_annotation)


def _resolve_annotations(
    func: Callable[..., Any],
    signature: inspect.Signature,
) -> dict[str, Any]:
    """
    Resolve annotations, evaluating string annotations where possible.

    When the annotations cannot all be evaluated together (e.g. a name only
    imported under TYPE_CHECKING), each one is evaluated on its own. Those that
    still fail are kept as strings with any surrounding quotes removed.
    """
    try:
        return typing.get_type_hints(func)
    except (NameError, TypeError, AttributeError, SyntaxError) as e:
        logger.debug(
            "Could not evaluate all annotations of %s: %s",
            func.__qualname__,
            e,
            extra={"handler": func.__qualname__},
        )

    globalns = getattr(func, "__globals__", {})
    hints: dict[str, Any] = {
        param.name: _evaluate_annotation(param.annotation, globalns)
        for param in signature.parameters.values()
        if param.annotation is not inspect.Parameter.empty
    }
    if signature.return_annotation is not inspect.Signature.empty:
        hints["return"] = _evaluate_annotation(signature.return_annotation, globalns)
    return hints


def _evaluate_annotation(annotation: Any, globalns: dict[str, Any]) -> Any:
    """Evaluate one annotation, returning the innermost string if it cannot be resolved."""
    # Quoted annotations under postponed evaluation are strings of strings
    while isinstance(annotation, str):
        try:
            annotation = eval(annotation, globalns)  # noqa: S307
        except (NameError, TypeError, AttributeError, SyntaxError):
            return annotation
    return annotation


__all__ = [
    "HandlerVariant",
    "HandlerSignature",
    "VALUE_TYPES",
    "classify_handler",
    "is_reference_type",
    "is_cancellation_annotation",
    "is_completion_handle",
]
