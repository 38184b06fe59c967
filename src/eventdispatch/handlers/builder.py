"""
Dispatch function builder.

Compiles a HandlerDescriptor into a DispatchFunction: an async callable of
fixed shape ``(event, cancellation_token) -> None`` regardless of whether the
underlying method is sync, async or cancellable async.

Every dispatch function performs the same steps:

1. (sync handlers flagged to yield) ``await asyncio.sleep(0)`` once
2. Resolve the handler instance from the descriptor's instance factory
3. Check the event against the descriptor's event type
4. Invoke the method in the shape it was declared with

Calling a dispatch function never raises. Every failure, including the
checks above and exceptions from the handler itself, is raised when the
returned awaitable is awaited, so a routing table can treat all handlers
identically.

Example:
    >>> dispatch = compile_dispatch_function(descriptor)
    >>> await dispatch(OrderCreated(...), CancellationToken())
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from eventdispatch.cancellation import CancellationToken
from eventdispatch.config import DEFAULT_CONFIG, DispatchConfig
from eventdispatch.exceptions import HandlerCompilationError
from eventdispatch.handlers.classifier import HandlerVariant
from eventdispatch.handlers.instance import ensure_event_type, resolve_instance
from eventdispatch.observability import (
    ATTR_ERROR_TYPE,
    ATTR_EVENT_TYPE,
    ATTR_HANDLER_DECLARING_TYPE,
    ATTR_HANDLER_NAME,
    ATTR_HANDLER_SUCCESS,
    ATTR_HANDLER_VARIANT,
    SPAN_HANDLER_DISPATCH,
    Tracer,
    create_tracer,
)
from eventdispatch.types import DispatchFunction

if TYPE_CHECKING:
    from eventdispatch.handlers.descriptor import HandlerDescriptor

logger = logging.getLogger(__name__)

# Invokes the handler method on an already resolved instance and checked event
HandlerInvoker = Callable[[Any, Any, CancellationToken | None], Awaitable[None]]


def compile_dispatch_function(
    descriptor: HandlerDescriptor,
    config: DispatchConfig | None = None,
) -> DispatchFunction:
    """
    Build the dispatch function for a handler descriptor.

    Never raises. If the dispatch function cannot be built, the returned
    function carries a HandlerCompilationError (with the cause chained) on
    every call.

    Args:
        descriptor: Descriptor produced by a HandlerDescriptor factory
        config: Tracing and logging configuration (defaults to DispatchConfig())

    Returns:
        Dispatch function bound to the descriptor
    """
    config = config or DEFAULT_CONFIG
    try:
        tracer = config.tracer or create_tracer(__name__, config.enable_tracing)
        invoker = _create_invoker(descriptor)
        dispatch = _create_dispatch_function(
            descriptor,
            invoker,
            tracer,
            config.failure_log_level,
        )
    except Exception as e:
        logger.error(
            "Failed to create dispatch function for %s: %s",
            descriptor.handler_name,
            e,
            exc_info=True,
            extra={"handler": descriptor.handler_name},
        )
        return _create_failing_dispatch_function(descriptor, e)

    logger.debug(
        "Compiled %s dispatch function for %s",
        descriptor.variant.value,
        descriptor.handler_name,
        extra={
            "handler": descriptor.handler_name,
            "event_type": descriptor.event_type.__name__,
            "variant": descriptor.variant.value,
            "yield_synchronous_execution": descriptor.yield_synchronous_execution,
        },
    )
    return dispatch


def _create_invoker(descriptor: HandlerDescriptor) -> HandlerInvoker:
    """Adapt the handler method to the uniform invoker shape."""
    method = descriptor.method

    if descriptor.variant is HandlerVariant.CANCELLABLE_ASYNC:

        async def invoke_cancellable(
            instance: Any,
            event: Any,
            cancellation_token: CancellationToken | None,
        ) -> None:
            token = cancellation_token if cancellation_token is not None else CancellationToken.none()
            await method(instance, event, token)

        return invoke_cancellable

    if descriptor.variant is HandlerVariant.ASYNC:

        async def invoke_async(
            instance: Any,
            event: Any,
            cancellation_token: CancellationToken | None,
        ) -> None:
            await method(instance, event)

        return invoke_async

    if descriptor.variant is HandlerVariant.SYNC:

        async def invoke_sync(
            instance: Any,
            event: Any,
            cancellation_token: CancellationToken | None,
        ) -> None:
            result = method(instance, event)
            if asyncio.iscoroutine(result):
                logger.warning(
                    "Handler %s is registered as sync but returned a coroutine; "
                    "declare it with async def",
                    descriptor.handler_name,
                    extra={
                        "handler": descriptor.handler_name,
                        "event_type": type(event).__name__,
                        "variant": descriptor.variant.value,
                    },
                )
                await result

        return invoke_sync

    raise ValueError(f"Unknown handler variant: {descriptor.variant!r}")


def _create_dispatch_function(
    descriptor: HandlerDescriptor,
    invoke: HandlerInvoker,
    tracer: Tracer,
    failure_log_level: int,
) -> DispatchFunction:
    # Copy everything the closure needs so calls never touch the descriptor.
    declaring_type = descriptor.declaring_type
    event_type = descriptor.event_type
    instance_factory = descriptor.instance_factory
    yield_first = descriptor.yield_synchronous_execution
    handler_name = descriptor.handler_name
    span_attributes = {
        ATTR_EVENT_TYPE: event_type.__name__,
        ATTR_HANDLER_NAME: handler_name,
        ATTR_HANDLER_DECLARING_TYPE: declaring_type.__name__,
        ATTR_HANDLER_VARIANT: descriptor.variant.value,
    }

    async def dispatch(event: Any, cancellation_token: CancellationToken | None = None) -> None:
        if yield_first:
            # Let pending tasks run before this synchronous handler does.
            await asyncio.sleep(0)

        with tracer.span(SPAN_HANDLER_DISPATCH, dict(span_attributes)) as span:
            try:
                instance = resolve_instance(instance_factory, declaring_type)
                ensure_event_type(event, event_type)
                await invoke(instance, event, cancellation_token)
            except Exception as e:
                if span:
                    span.set_attribute(ATTR_HANDLER_SUCCESS, False)
                    span.set_attribute(ATTR_ERROR_TYPE, type(e).__name__)
                logger.log(
                    failure_log_level,
                    f"Handler {handler_name} failed processing {type(event).__name__}: {e}",
                    exc_info=True,
                    extra={
                        "handler": handler_name,
                        "event_type": type(event).__name__,
                        "error": str(e),
                    },
                )
                raise

            if span:
                span.set_attribute(ATTR_HANDLER_SUCCESS, True)

    dispatch.__name__ = f"dispatch_{descriptor.method_name}"
    dispatch.__qualname__ = f"dispatch[{handler_name}]"
    return dispatch


def _create_failing_dispatch_function(
    descriptor: HandlerDescriptor,
    cause: Exception,
) -> DispatchFunction:
    declaring_type = descriptor.declaring_type
    method_name = descriptor.method_name

    async def dispatch(event: Any, cancellation_token: CancellationToken | None = None) -> None:
        raise HandlerCompilationError(declaring_type, method_name) from cause

    return dispatch


__all__ = [
    "HandlerInvoker",
    "compile_dispatch_function",
]
