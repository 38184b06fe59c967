"""
Module scanned by the from_module tests.

Defines two handler classes and one class without handlers. The imported
RecordingEventHandler is defined elsewhere and must be skipped.
"""

from eventdispatch import event_handler
from tests.fixtures.events import OrderCreated, OrderShipped
from tests.fixtures.handlers import RecordingEventHandler  # noqa: F401


class InventoryProjection:
    """Two synchronous handlers."""

    def __init__(self) -> None:
        self.reserved: list[OrderCreated] = []
        self.released: list[OrderShipped] = []

    @event_handler
    def reserve_stock(self, event: OrderCreated) -> None:
        self.reserved.append(event)

    @event_handler
    def release_stock(self, event: OrderShipped) -> None:
        self.released.append(event)


class ShippingNotifier:
    """One async handler."""

    def __init__(self) -> None:
        self.notified: list[OrderShipped] = []

    @event_handler
    async def notify(self, event: OrderShipped) -> None:
        self.notified.append(event)


class PriceCalculator:
    """Not a handler class."""

    def total(self, event: OrderCreated) -> int:
        return 0
