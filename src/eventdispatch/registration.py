"""
Registration of event handler methods into a routing table.

Each function builds the descriptors first and only then compiles and
registers them, so a declaration mistake in any handler stops registration
before the routing table is touched.

Example:
    >>> registration = RoutingTable()
    >>> register_event_handlers_from_type(
    ...     registration,
    ...     OrderNotifications,
    ...     lambda: notifications,
    ... )
    2
"""

import logging
from collections.abc import Iterable
from types import ModuleType

from eventdispatch.config import DispatchConfig
from eventdispatch.handlers.descriptor import HandlerDescriptor
from eventdispatch.protocols import MessageHandlerRegistration
from eventdispatch.types import InstanceFactory, TypeInstanceFactory

logger = logging.getLogger(__name__)


def register_event_handlers(
    registration: MessageHandlerRegistration,
    descriptors: Iterable[HandlerDescriptor],
    config: DispatchConfig | None = None,
) -> int:
    """
    Compile descriptors and register their dispatch functions.

    Args:
        registration: Routing table accepting (event_type, dispatch_function)
        descriptors: Handler descriptors to register
        config: Configuration passed to compile_dispatch_function

    Returns:
        Number of dispatch functions registered
    """
    if registration is None:
        raise TypeError("registration must not be None")
    if descriptors is None:
        raise TypeError("descriptors must not be None")

    count = 0
    for descriptor in descriptors:
        registration.register(descriptor.event_type, descriptor.create_dispatch_function(config))
        count += 1
        logger.info(
            f"Registered handler {descriptor.handler_name} for {descriptor.event_type.__name__}",
            extra={
                "handler": descriptor.handler_name,
                "event_type": descriptor.event_type.__name__,
                "variant": descriptor.variant.value,
            },
        )
    return count


def register_event_handlers_from_type(
    registration: MessageHandlerRegistration,
    handler_type: type,
    instance_factory: InstanceFactory,
    config: DispatchConfig | None = None,
) -> int:
    """Register the @event_handler methods declared on a class."""
    descriptors = HandlerDescriptor.from_type(handler_type, instance_factory, config=config)
    return register_event_handlers(registration, descriptors, config)


def register_event_handlers_from_types(
    registration: MessageHandlerRegistration,
    handler_types: Iterable[type],
    instance_factory: TypeInstanceFactory,
    config: DispatchConfig | None = None,
) -> int:
    """Register the @event_handler methods of several classes."""
    descriptors = HandlerDescriptor.from_types(handler_types, instance_factory, config=config)
    return register_event_handlers(registration, descriptors, config)


def register_event_handlers_from_module(
    registration: MessageHandlerRegistration,
    module: ModuleType,
    instance_factory: TypeInstanceFactory,
    config: DispatchConfig | None = None,
) -> int:
    """Register the @event_handler methods of every class defined in a module."""
    descriptors = HandlerDescriptor.from_module(module, instance_factory, config=config)
    return register_event_handlers(registration, descriptors, config)


def register_event_handlers_from_modules(
    registration: MessageHandlerRegistration,
    modules: Iterable[ModuleType],
    instance_factory: TypeInstanceFactory,
    config: DispatchConfig | None = None,
) -> int:
    """Register the @event_handler methods of every class defined in several modules."""
    descriptors = HandlerDescriptor.from_modules(modules, instance_factory, config=config)
    return register_event_handlers(registration, descriptors, config)


__all__ = [
    "register_event_handlers",
    "register_event_handlers_from_type",
    "register_event_handlers_from_types",
    "register_event_handlers_from_module",
    "register_event_handlers_from_modules",
]
