"""
Shared pytest fixtures for observability integration tests.

This module provides fixtures for OpenTelemetry testing infrastructure
using an in-memory span exporter for span inspection.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest

# Module-level storage for the global test provider
_test_provider = None


@pytest.fixture(scope="session", autouse=True)
def setup_test_tracing() -> Generator[Any, None, None]:
    """
    Set up a global TracerProvider for all tests at session scope.

    OpenTelemetry only allows setting the global provider once, so an
    already configured provider is reused.
    """
    global _test_provider

    from opentelemetry import trace
    from opentelemetry.sdk.trace import TracerProvider

    current_provider = trace.get_tracer_provider()

    # Check if current provider is a proxy (not yet configured)
    if current_provider.__class__.__name__ == "ProxyTracerProvider":
        _test_provider = TracerProvider()
        trace.set_tracer_provider(_test_provider)
    else:
        _test_provider = current_provider

    yield _test_provider


@pytest.fixture(scope="function")
def trace_exporter(setup_test_tracing: Any) -> Generator[Any, None, None]:
    """
    Create an in-memory span exporter attached to the test provider.

    Yields:
        InMemorySpanExporter instance with captured spans
    """
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import SimpleSpanProcessor
    from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

    if not isinstance(_test_provider, TracerProvider):
        pytest.skip("Global tracer provider is not an SDK TracerProvider")

    exporter = InMemorySpanExporter()
    _test_provider.add_span_processor(SimpleSpanProcessor(exporter))

    yield exporter

    # Processors cannot be removed from a provider; stop this one exporting
    exporter.clear()
    exporter.shutdown()
