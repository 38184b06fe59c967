"""
Integration tests for the eventdispatch library.

These tests exercise the whole pipeline: handler declaration, descriptor
creation, registration in a routing table and dispatch. OpenTelemetry tests
are skipped automatically if opentelemetry-sdk is not installed.

Run integration tests:
    pytest tests/integration/ -v

Skip integration tests:
    pytest tests/ -v -m "not integration"
"""
