"""Unit tests for instance resolution and event type checks."""

import pytest

from eventdispatch.exceptions import (
    InstanceResolutionError,
    InvalidInstanceTypeError,
    UnexpectedEventTypeError,
)
from eventdispatch.handlers.instance import ensure_event_type, resolve_instance
from tests.fixtures import (
    OrderCreated,
    OrderShipped,
    PriorityOrderCreated,
    RecordingEventHandler,
    YieldingEventHandler,
)


class TestResolveInstance:
    """Tests for resolve_instance."""

    def test_returns_factory_result(self):
        handler = RecordingEventHandler()

        assert resolve_instance(lambda: handler, RecordingEventHandler) is handler

    def test_accepts_subclass_instances(self):
        class Special(RecordingEventHandler):
            pass

        instance = Special()

        assert resolve_instance(lambda: instance, RecordingEventHandler) is instance

    def test_factory_raises(self):
        """Factory exceptions are wrapped and chained."""
        original = RuntimeError("container not configured")

        def factory():
            raise original

        with pytest.raises(InstanceResolutionError) as exc_info:
            resolve_instance(factory, RecordingEventHandler)

        assert exc_info.value.__cause__ is original
        assert exc_info.value.expected_type is RecordingEventHandler

    def test_factory_returns_none(self):
        """A None instance is a resolution failure without a cause."""
        with pytest.raises(InstanceResolutionError) as exc_info:
            resolve_instance(lambda: None, RecordingEventHandler)

        assert exc_info.value.__cause__ is None
        assert "Failed to retrieve an instance of RecordingEventHandler" in str(exc_info.value)

    def test_factory_returns_wrong_type(self):
        with pytest.raises(InvalidInstanceTypeError) as exc_info:
            resolve_instance(YieldingEventHandler, RecordingEventHandler)

        assert exc_info.value.expected_type is RecordingEventHandler
        assert exc_info.value.actual_type is YieldingEventHandler
        assert str(exc_info.value).endswith(
            "Expected an instance of RecordingEventHandler but was given YieldingEventHandler."
        )

    def test_factory_is_called_each_time(self):
        calls = []

        def factory():
            calls.append(1)
            return RecordingEventHandler()

        first = resolve_instance(factory, RecordingEventHandler)
        second = resolve_instance(factory, RecordingEventHandler)

        assert len(calls) == 2
        assert first is not second


class TestEnsureEventType:
    """Tests for ensure_event_type."""

    def test_matching_event(self):
        ensure_event_type(OrderCreated(), OrderCreated)

    def test_subclass_event(self):
        ensure_event_type(PriorityOrderCreated(), OrderCreated)

    def test_mismatched_event(self):
        with pytest.raises(UnexpectedEventTypeError) as exc_info:
            ensure_event_type(OrderShipped(), OrderCreated)

        assert exc_info.value.expected_type is OrderCreated
        assert exc_info.value.actual_type is OrderShipped
        assert str(exc_info.value) == (
            "Invalid event. Expected event of type OrderCreated but OrderShipped was found."
        )

    def test_none_event(self):
        with pytest.raises(UnexpectedEventTypeError):
            ensure_event_type(None, OrderCreated)
