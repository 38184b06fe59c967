"""
Shared test fixtures for the eventdispatch library.

This module provides reusable test fixtures including:
- Test event types (OrderCreated, OrderShipped, OrderCancelled, ...)
- Handler classes recording the events they receive
- A routing table implementing MessageHandlerRegistration

Usage:
    from tests.fixtures import (
        OrderCreated,
        RecordingEventHandler,
        RoutingTable,
    )
"""

from tests.fixtures.events import (
    Event,
    ExceptionTriggeringEvent,
    LongRunningEvent,
    OrderCancelled,
    OrderCreated,
    OrderShipped,
    PlainEvent,
    PriorityOrderCreated,
)
from tests.fixtures.handlers import (
    AsyncRecordingEventHandler,
    HandlerFailure,
    InvalidEventHandler,
    PlainEventHandler,
    RecordingEventHandler,
    SyncFailingEventHandler,
    YieldingEventHandler,
)
from tests.fixtures.routing import RoutingTable

__all__ = [
    # Events
    "Event",
    "ExceptionTriggeringEvent",
    "LongRunningEvent",
    "OrderCancelled",
    "OrderCreated",
    "OrderShipped",
    "PlainEvent",
    "PriorityOrderCreated",
    # Handlers
    "AsyncRecordingEventHandler",
    "HandlerFailure",
    "InvalidEventHandler",
    "PlainEventHandler",
    "RecordingEventHandler",
    "SyncFailingEventHandler",
    "YieldingEventHandler",
    # Routing
    "RoutingTable",
]
