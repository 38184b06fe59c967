"""
Shared pytest fixtures for the eventdispatch library tests.

This module provides:
- Handler instance fixtures (recording_handler, async_handler)
- Tracing fixtures (mock_tracer, traced_config)
- Cancellation fixtures (cancellation_token)
- Routing fixtures (routing_table)
"""

from __future__ import annotations

import pytest

from eventdispatch import CancellationToken, DispatchConfig
from eventdispatch.observability import MockTracer
from tests.fixtures import (
    AsyncRecordingEventHandler,
    OrderCreated,
    RecordingEventHandler,
    RoutingTable,
)

# ============================================================================
# Handler Fixtures
# ============================================================================


@pytest.fixture
def recording_handler() -> RecordingEventHandler:
    """Provide a fresh RecordingEventHandler."""
    return RecordingEventHandler()


@pytest.fixture
def async_handler() -> AsyncRecordingEventHandler:
    """Provide a fresh AsyncRecordingEventHandler."""
    return AsyncRecordingEventHandler()


@pytest.fixture
def order_created() -> OrderCreated:
    """Provide a sample OrderCreated event."""
    return OrderCreated(customer="alice")


# ============================================================================
# Tracing Fixtures
# ============================================================================


@pytest.fixture
def mock_tracer() -> MockTracer:
    """Provide a MockTracer recording dispatch spans."""
    return MockTracer()


@pytest.fixture
def traced_config(mock_tracer: MockTracer) -> DispatchConfig:
    """Provide a DispatchConfig that routes spans to mock_tracer."""
    return DispatchConfig(tracer=mock_tracer)


@pytest.fixture
def untraced_config() -> DispatchConfig:
    """Provide a DispatchConfig with tracing disabled."""
    return DispatchConfig(enable_tracing=False)


# ============================================================================
# Cancellation and Routing Fixtures
# ============================================================================


@pytest.fixture
def cancellation_token() -> CancellationToken:
    """Provide a fresh, uncancelled token."""
    return CancellationToken()


@pytest.fixture
def routing_table() -> RoutingTable:
    """Provide an empty in-memory routing table."""
    return RoutingTable()
