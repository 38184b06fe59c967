"""
Observability utilities for eventdispatch.

This module provides the composition-based tracer used by dispatch functions
and the standard span attributes they emit.

Note:
    OpenTelemetry is an optional dependency. All utilities in this module
    gracefully handle the case where OpenTelemetry is not installed.
"""

from eventdispatch.observability.attributes import (
    ATTR_ERROR_TYPE,
    ATTR_EVENT_TYPE,
    ATTR_HANDLER_DECLARING_TYPE,
    ATTR_HANDLER_NAME,
    ATTR_HANDLER_SUCCESS,
    ATTR_HANDLER_VARIANT,
    SPAN_HANDLER_DISPATCH,
)
from eventdispatch.observability.tracer import (
    MockSpan,
    MockTracer,
    NullTracer,
    OpenTelemetryTracer,
    Tracer,
    create_tracer,
)
from eventdispatch.observability.tracing import (
    OTEL_AVAILABLE,
    should_trace,
)

__all__ = [
    # Tracing utilities
    "OTEL_AVAILABLE",
    "should_trace",
    # Tracer (composition-based API)
    "Tracer",
    "NullTracer",
    "OpenTelemetryTracer",
    "MockSpan",
    "MockTracer",
    "create_tracer",
    # Attributes
    "SPAN_HANDLER_DISPATCH",
    "ATTR_EVENT_TYPE",
    "ATTR_HANDLER_NAME",
    "ATTR_HANDLER_DECLARING_TYPE",
    "ATTR_HANDLER_VARIANT",
    "ATTR_HANDLER_SUCCESS",
    "ATTR_ERROR_TYPE",
]
