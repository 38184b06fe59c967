"""
Integration tests for dispatch tracing.

Tests in this package verify spans exported through a real OpenTelemetry
SDK provider.
"""
