"""
Basic Usage Example

This example demonstrates the handler pipeline:
- Declaring event handlers with @event_handler
- Registering every handler of a class in a routing table
- Dispatching events to sync, async and cancellable handlers
- Observing failures carried by the dispatch awaitable

Run with: python examples/basic_usage.py
"""

import asyncio
import logging
from collections import defaultdict
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from eventdispatch import (
    CancellationToken,
    DispatchConfig,
    DispatchFunction,
    InstanceResolutionError,
    OperationCancelledError,
    event_handler,
    register_event_handlers_from_type,
)

# =============================================================================
# Step 1: Define Events
# =============================================================================
# Events are plain classes. Here they are immutable pydantic models.


class OrderPlaced(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: UUID = Field(default_factory=uuid4)
    customer: str
    total: float


class OrderShipped(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: UUID
    carrier: str


class ReportRequested(BaseModel):
    model_config = ConfigDict(frozen=True)

    seconds: float


# =============================================================================
# Step 2: Declare Handlers
# =============================================================================
# Any method taking (self, event) can be a handler. Async handlers may also
# accept a CancellationToken.


class OrderNotifications:
    """Sends notifications for order events."""

    def __init__(self) -> None:
        self.sent: list[str] = []

    @event_handler
    def on_placed(self, event: OrderPlaced) -> None:
        self.sent.append(f"Thanks for your order, {event.customer}!")

    @event_handler(yield_synchronous_execution=True)
    def on_shipped(self, event: OrderShipped) -> None:
        self.sent.append(f"Order {event.order_id} shipped with {event.carrier}")

    @event_handler
    async def on_report_requested(
        self,
        event: ReportRequested,
        cancellation_token: CancellationToken,
    ) -> None:
        try:
            await asyncio.wait_for(cancellation_token.wait(), event.seconds)
        except TimeoutError:
            pass
        cancellation_token.raise_if_cancelled()
        self.sent.append("Report ready")


# =============================================================================
# Step 3: A Minimal Routing Table
# =============================================================================
# eventdispatch only needs register(event_type, handler) from the host.


class RoutingTable:
    def __init__(self) -> None:
        self._handlers: dict[type, list[DispatchFunction]] = defaultdict(list)

    def register(self, event_type: type, handler: DispatchFunction) -> None:
        self._handlers[event_type].append(handler)

    async def publish(
        self,
        event: object,
        cancellation_token: CancellationToken | None = None,
    ) -> list[BaseException | None]:
        handlers = self._handlers.get(type(event), [])
        return await asyncio.gather(
            *(handler(event, cancellation_token) for handler in handlers),
            return_exceptions=True,
        )


async def main() -> None:
    logging.basicConfig(level=logging.INFO)

    print("=" * 60)
    print("eventdispatch - Basic Usage Example")
    print("=" * 60)

    routing_table = RoutingTable()
    notifications = OrderNotifications()

    # Register all marked methods of the class
    count = register_event_handlers_from_type(
        routing_table,
        OrderNotifications,
        lambda: notifications,
        DispatchConfig(enable_tracing=False),
    )
    print(f"\n1. Registered {count} handlers")

    # Dispatch a few events
    print("\n2. Publishing events")
    placed = OrderPlaced(customer="Alice", total=42.0)
    await routing_table.publish(placed)
    await routing_table.publish(OrderShipped(order_id=placed.order_id, carrier="ACME"))
    for message in notifications.sent:
        print(f"   {message}")

    # Cancel a long-running handler
    print("\n3. Cancelling a long-running handler")
    token = CancellationToken()
    publishing = asyncio.create_task(routing_table.publish(ReportRequested(seconds=10), token))
    await asyncio.sleep(0.1)
    token.cancel()
    [outcome] = await publishing
    print(f"   Outcome: {type(outcome).__name__}")
    assert isinstance(outcome, OperationCancelledError)

    # Failures are carried by the awaitable, never raised on call
    print("\n4. Instance factory failure")
    failing_table = RoutingTable()
    register_event_handlers_from_type(
        failing_table,
        OrderNotifications,
        lambda: None,
        DispatchConfig(enable_tracing=False),
    )
    [outcome] = await failing_table.publish(placed)
    print(f"   Outcome: {outcome}")
    assert isinstance(outcome, InstanceResolutionError)

    print("\n" + "=" * 60)
    print("Example completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
