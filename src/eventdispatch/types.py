"""Common type definitions for the eventdispatch library."""

from collections.abc import Awaitable, Callable
from typing import Any

from eventdispatch.cancellation import CancellationToken

# Uniform calling convention produced for every handler:
# (event, cancellation_token) -> awaitable that completes or carries the failure
DispatchFunction = Callable[[Any, CancellationToken | None], Awaitable[None]]

# Zero-argument producer of the object a handler method is invoked on
InstanceFactory = Callable[[], Any]

# Producer of handler instances given the declaring type, used by bulk factories
TypeInstanceFactory = Callable[[type], Any]
