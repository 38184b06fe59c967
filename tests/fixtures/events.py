"""
Event types used across the eventdispatch test suite.

Events are immutable pydantic models. PlainEvent is an ordinary class to
check that nothing in the dispatch pipeline depends on pydantic.
"""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class Event(BaseModel):
    """Base class for test events."""

    model_config = ConfigDict(frozen=True)

    event_id: UUID = Field(default_factory=uuid4)
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


# =============================================================================
# Order Events
# =============================================================================


class OrderCreated(Event):
    """Event for order creation."""

    order_id: UUID = Field(default_factory=uuid4)
    customer: str = "customer-1"


class OrderShipped(Event):
    """Event for order shipping."""

    order_id: UUID = Field(default_factory=uuid4)
    tracking_number: str = "TRACK-1"


class OrderCancelled(Event):
    """Event for cancelling an order."""

    order_id: UUID = Field(default_factory=uuid4)
    reason: str = ""


class PriorityOrderCreated(OrderCreated):
    """Subclass of OrderCreated, accepted by OrderCreated handlers."""

    priority: int = 1


# =============================================================================
# Behavior-driving events
# =============================================================================


class LongRunningEvent(Event):
    """Event whose handler waits until cancelled or until duration elapses."""

    duration_seconds: float = 5.0


class ExceptionTriggeringEvent(Event):
    """Event whose handler always raises HandlerFailure."""

    message: str = "Handler failed intentionally"


class PlainEvent:
    """Event type that is not a pydantic model."""

    def __init__(self, payload: str = "payload") -> None:
        self.payload = payload

    def __repr__(self) -> str:
        return f"PlainEvent(payload={self.payload!r})"
