"""
Handler classes used across the eventdispatch test suite.

Each class records what it handled so tests can assert on invocation order
and on the exact event objects received.
"""

import asyncio
from typing import Any

from eventdispatch import CancellationToken, event_handler
from tests.fixtures.events import (
    ExceptionTriggeringEvent,
    LongRunningEvent,
    OrderCancelled,
    OrderCreated,
    OrderShipped,
    PlainEvent,
)


class HandlerFailure(Exception):
    """Exception raised by failing test handlers."""

    pass


class RecordingEventHandler:
    """Synchronous handlers for the three order events."""

    def __init__(self) -> None:
        self.handled_events: list[Any] = []

    @event_handler
    def on_order_created(self, event: OrderCreated) -> None:
        self.handled_events.append(event)

    @event_handler
    def on_order_shipped(self, event: OrderShipped) -> None:
        self.handled_events.append(event)

    @event_handler
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        self.handled_events.append(event)

    def not_a_handler(self, event: OrderCreated) -> None:
        """Unmarked, so never picked up by from_type."""
        self.handled_events.append(("unmarked", event))


class AsyncRecordingEventHandler:
    """Async and cancellable async handlers."""

    def __init__(self) -> None:
        self.handled_events: list[Any] = []
        self.observed_tokens: list[CancellationToken] = []

    @event_handler
    async def on_order_created(self, event: OrderCreated) -> None:
        await asyncio.sleep(0)
        self.handled_events.append(event)

    @event_handler
    async def on_long_running(
        self,
        event: LongRunningEvent,
        cancellation_token: CancellationToken,
    ) -> None:
        self.observed_tokens.append(cancellation_token)
        try:
            await asyncio.wait_for(cancellation_token.wait(), event.duration_seconds)
        except TimeoutError:
            pass
        cancellation_token.raise_if_cancelled()
        self.handled_events.append(event)

    @event_handler
    async def on_exception_triggering(self, event: ExceptionTriggeringEvent) -> None:
        raise HandlerFailure(event.message)


class SyncFailingEventHandler:
    """Synchronous handler that always raises."""

    def __init__(self) -> None:
        self.call_count = 0

    @event_handler
    def on_exception_triggering(self, event: ExceptionTriggeringEvent) -> None:
        self.call_count += 1
        raise HandlerFailure(event.message)


class YieldingEventHandler:
    """Synchronous handler marked to yield before it runs."""

    def __init__(self, log: list[str] | None = None) -> None:
        self.log: list[str] = log if log is not None else []

    @event_handler(yield_synchronous_execution=True)
    def on_order_created(self, event: OrderCreated) -> None:
        self.log.append("handled")


class PlainEventHandler:
    """Handler for an event type that is not a pydantic model."""

    def __init__(self) -> None:
        self.payloads: list[str] = []

    @event_handler
    def on_plain(self, event: PlainEvent) -> None:
        self.payloads.append(event.payload)


class InvalidEventHandler:
    """A valid handler followed by one with an unsupported event type."""

    @event_handler
    def on_order_created(self, event: OrderCreated) -> None:
        pass

    @event_handler
    def on_count(self, event: int) -> None:
        pass
