"""
Handler descriptors.

A HandlerDescriptor captures everything needed to invoke one event handler
method later: its declaring type, the event type it accepts, the instance
factory, the method itself and its calling convention. Descriptors are built
once at registration time and never change afterwards.

Factories:
- HandlerDescriptor.from_method: one method, explicit registration
- HandlerDescriptor.from_methods: many methods, per-declaring-type factory
- HandlerDescriptor.from_type / from_types: methods marked with @event_handler
- HandlerDescriptor.from_module / from_modules: marked methods of every class
  defined in a module

Example:
    >>> class OrderNotifications:
    ...     @event_handler
    ...     async def on_created(self, event: OrderCreated) -> None:
    ...         ...
    >>>
    >>> notifications = OrderNotifications()
    >>> descriptors = HandlerDescriptor.from_type(OrderNotifications, lambda: notifications)
    >>> dispatch = descriptors[0].create_dispatch_function()
"""

from __future__ import annotations

import functools
import inspect
import logging
import sys
from collections.abc import Callable, Iterable
from types import ModuleType
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from eventdispatch.config import DEFAULT_CONFIG, DispatchConfig
from eventdispatch.exceptions import HandlerDeclarationError
from eventdispatch.handlers.builder import compile_dispatch_function
from eventdispatch.handlers.classifier import HandlerVariant, classify_handler, is_reference_type
from eventdispatch.handlers.decorators import get_event_handler_marker, is_event_handler
from eventdispatch.types import DispatchFunction, InstanceFactory, TypeInstanceFactory

logger = logging.getLogger(__name__)


class HandlerDescriptor(BaseModel):
    """
    Immutable description of a validated event handler method.

    Supported signatures (methods can be named freely):

        def handle(self, event: EventType) -> None
        async def handle(self, event: EventType) -> None
        async def handle(self, event: EventType, cancellation_token: CancellationToken) -> None

    Attributes:
        declaring_type: Class owning the handler method
        event_type: Class of events the handler accepts (the routing key)
        instance_factory: Zero-argument callable providing the object the
            method is invoked on. Called on every dispatch; whether it returns
            a shared or a fresh instance is up to the caller.
        method: The unbound handler function
        variant: Calling convention of the method
        yield_synchronous_execution: Yield to the event loop before running a
            SYNC handler. Always False for async variants.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    declaring_type: type
    event_type: type
    instance_factory: Callable[[], Any]
    method: Callable[..., Any]
    variant: HandlerVariant
    yield_synchronous_execution: bool = False

    @model_validator(mode="before")
    @classmethod
    def _async_handlers_never_yield(cls, data: Any) -> Any:
        """Yielding is meaningless once execution is already asynchronous."""
        if isinstance(data, dict) and data.get("variant") not in (
            HandlerVariant.SYNC,
            HandlerVariant.SYNC.value,
        ):
            return {**data, "yield_synchronous_execution": False}
        return data

    @model_validator(mode="after")
    def _matches_method_signature(self) -> HandlerDescriptor:
        """Event type and variant must agree with the method's signature."""
        if not is_reference_type(self.event_type):
            raise ValueError(
                f"event_type must be a class-based (non-value) type, got {self.event_type!r}"
            )

        signature = classify_handler(self.method, declaring_type=self.declaring_type)
        if signature.variant is not self.variant:
            raise ValueError(
                f"variant {self.variant.value!r} does not match the signature of "
                f"{self.declaring_type.__name__}.{self.method.__name__}(), "
                f"which is {signature.variant.value!r}"
            )
        if self.event_type is not signature.event_type and not issubclass(
            self.event_type, signature.event_type
        ):
            raise ValueError(
                f"event_type {self.event_type.__name__} is not accepted by "
                f"{self.declaring_type.__name__}.{self.method.__name__}(), "
                f"which handles {signature.event_type.__name__}"
            )
        return self

    @property
    def method_name(self) -> str:
        """Name of the handler method."""
        return str(self.method.__name__)

    @property
    def handler_name(self) -> str:
        """Descriptive name for logging: DeclaringType.method."""
        return f"{self.declaring_type.__name__}.{self.method_name}"

    @property
    def is_async(self) -> bool:
        """True for ASYNC and CANCELLABLE_ASYNC handlers."""
        return self.variant is not HandlerVariant.SYNC

    @property
    def supports_cancellation(self) -> bool:
        """True if the handler accepts a CancellationToken."""
        return self.variant is HandlerVariant.CANCELLABLE_ASYNC

    def create_dispatch_function(self, config: DispatchConfig | None = None) -> DispatchFunction:
        """
        Compile this descriptor into a dispatch function.

        See eventdispatch.handlers.builder.compile_dispatch_function.
        """
        return compile_dispatch_function(self, config)

    # =========================================================================
    # Factories
    # =========================================================================

    @classmethod
    def from_method(
        cls,
        method: Callable[..., Any],
        instance_factory: InstanceFactory | None = None,
        *,
        declaring_type: type | None = None,
        yield_synchronous_execution: bool | None = None,
        config: DispatchConfig | None = None,
    ) -> HandlerDescriptor:
        """
        Validate a handler method and build its descriptor.

        The method does not need the @event_handler marker; when present, the
        marker provides the default yield_synchronous_execution flag.

        Args:
            method: Function defined on the declaring class, or a bound method.
                For a bound method the declaring type defaults to the type of
                its instance and the instance factory to returning it.
            instance_factory: Zero-argument producer of handler instances
            declaring_type: Owning class. Resolved from the function's
                qualified name when omitted.
            yield_synchronous_execution: Overrides the marker's flag
            config: Supplies default_yield_synchronous_execution

        Returns:
            The handler descriptor

        Raises:
            HandlerValidationError: The method signature is unsupported
            HandlerDeclarationError: The declaring type or instance factory
                cannot be determined
        """
        config = config or DEFAULT_CONFIG

        func = method
        if inspect.ismethod(method):
            owner = method.__self__
            if isinstance(owner, type):
                raise HandlerDeclarationError(
                    f"Class methods cannot be event handlers. Check {method.__qualname__}."
                )
            func = method.__func__
            if instance_factory is None:
                instance_factory = functools.partial(_return_instance, owner)

        if declaring_type is None:
            declaring_type = declaring_type_of(method)

        if instance_factory is None:
            raise HandlerDeclarationError(
                f"An instance factory is required to register {declaring_type.__name__}'s "
                f"{func.__name__}() method."
            )

        signature = classify_handler(func, declaring_type=declaring_type)

        if yield_synchronous_execution is None:
            marker = get_event_handler_marker(func)
            yield_synchronous_execution = (
                marker.yield_synchronous_execution
                if marker is not None
                else config.default_yield_synchronous_execution
            )

        descriptor = cls(
            declaring_type=declaring_type,
            event_type=signature.event_type,
            instance_factory=instance_factory,
            method=func,
            variant=signature.variant,
            yield_synchronous_execution=yield_synchronous_execution,
        )

        logger.debug(
            "Created %s handler descriptor %s for %s",
            descriptor.variant.value,
            descriptor.handler_name,
            descriptor.event_type.__name__,
            extra={
                "handler": descriptor.handler_name,
                "event_type": descriptor.event_type.__name__,
                "variant": descriptor.variant.value,
                "yield_synchronous_execution": descriptor.yield_synchronous_execution,
            },
        )
        return descriptor

    @classmethod
    def from_methods(
        cls,
        methods: Iterable[Callable[..., Any]],
        instance_factory: TypeInstanceFactory,
        *,
        config: DispatchConfig | None = None,
    ) -> list[HandlerDescriptor]:
        """
        Build descriptors for several methods.

        Args:
            methods: Handler functions or bound methods
            instance_factory: Called with a method's declaring type to
                produce the instance to invoke it on

        Returns:
            One descriptor per method, in order

        Raises:
            HandlerValidationError: On the first unsupported method
        """
        descriptors = []
        for method in methods:
            declaring_type = declaring_type_of(method)
            descriptors.append(
                cls.from_method(
                    method,
                    functools.partial(instance_factory, declaring_type),
                    declaring_type=declaring_type,
                    config=config,
                )
            )
        return descriptors

    @classmethod
    def from_type(
        cls,
        handler_type: type,
        instance_factory: InstanceFactory,
        *,
        config: DispatchConfig | None = None,
    ) -> list[HandlerDescriptor]:
        """
        Build descriptors for the @event_handler methods declared on a class.

        Only methods defined directly in the class body are scanned, in
        definition order. Inherited handlers belong to their own class.

        Args:
            handler_type: Class to scan
            instance_factory: Zero-argument producer of handler_type instances

        Returns:
            One descriptor per marked method

        Raises:
            HandlerValidationError: On the first unsupported method
        """
        if not isinstance(handler_type, type):
            raise TypeError(f"handler_type must be a class, got {handler_type!r}")

        return [
            cls.from_method(
                func,
                instance_factory,
                declaring_type=handler_type,
                config=config,
            )
            for func in _declared_handler_functions(handler_type)
        ]

    @classmethod
    def from_types(
        cls,
        handler_types: Iterable[type],
        instance_factory: TypeInstanceFactory,
        *,
        config: DispatchConfig | None = None,
    ) -> list[HandlerDescriptor]:
        """
        Build descriptors for the @event_handler methods of several classes.

        Args:
            handler_types: Classes to scan
            instance_factory: Called with a class to produce its instance
        """
        descriptors = []
        for handler_type in handler_types:
            descriptors.extend(
                cls.from_type(
                    handler_type,
                    functools.partial(instance_factory, handler_type),
                    config=config,
                )
            )
        return descriptors

    @classmethod
    def from_module(
        cls,
        module: ModuleType,
        instance_factory: TypeInstanceFactory,
        *,
        config: DispatchConfig | None = None,
    ) -> list[HandlerDescriptor]:
        """
        Build descriptors for every class defined in a module that declares
        @event_handler methods. Classes imported into the module are skipped.

        Args:
            module: Module to scan
            instance_factory: Called with a class to produce its instance
        """
        if not isinstance(module, ModuleType):
            raise TypeError(f"module must be a module, got {module!r}")

        handler_types = [
            value
            for value in vars(module).values()
            if isinstance(value, type)
            and value.__module__ == module.__name__
            and cls.is_found_in_type(value)
        ]
        return cls.from_types(handler_types, instance_factory, config=config)

    @classmethod
    def from_modules(
        cls,
        modules: Iterable[ModuleType],
        instance_factory: TypeInstanceFactory,
        *,
        config: DispatchConfig | None = None,
    ) -> list[HandlerDescriptor]:
        """Build descriptors for the handler classes of several modules."""
        descriptors = []
        for module in modules:
            descriptors.extend(cls.from_module(module, instance_factory, config=config))
        return descriptors

    @staticmethod
    def is_found_in_type(handler_type: type) -> bool:
        """
        Check if a class declares at least one @event_handler method.

        Args:
            handler_type: Class to search
        """
        if not isinstance(handler_type, type):
            raise TypeError(f"handler_type must be a class, got {handler_type!r}")
        return any(True for _ in _declared_handler_functions(handler_type))


def declaring_type_of(method: Callable[..., Any]) -> type:
    """
    Find the class owning a handler method.

    Bound methods report the type of their instance. Plain functions are
    looked up through their module and qualified name, which fails for
    classes defined inside a function body.

    Raises:
        HandlerDeclarationError: If the owning class cannot be found
    """
    if inspect.ismethod(method) and not isinstance(method.__self__, type):
        return type(method.__self__)

    qualname = getattr(method, "__qualname__", "")
    path = qualname.split(".")[:-1]
    if path and "<locals>" not in path:
        owner: Any = sys.modules.get(getattr(method, "__module__", ""))
        for part in path:
            owner = getattr(owner, part, None)
        if isinstance(owner, type):
            return owner

    raise HandlerDeclarationError(
        f"Cannot determine the declaring type of {qualname or method!r}. "
        "Pass declaring_type= explicitly."
    )


def _declared_handler_functions(handler_type: type) -> Iterable[Callable[..., Any]]:
    for value in vars(handler_type).values():
        if inspect.isfunction(value) and is_event_handler(value):
            yield value


def _return_instance(instance: Any) -> Any:
    return instance


__all__ = [
    "HandlerDescriptor",
    "declaring_type_of",
]
