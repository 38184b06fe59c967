"""
Standard span attributes for eventdispatch.

Attribute names are shared by every dispatch function so spans from
different handlers can be filtered and grouped consistently.

Example:
    >>> from eventdispatch.observability.attributes import ATTR_EVENT_TYPE
    >>> with tracer.span("eventdispatch.handler.dispatch", {ATTR_EVENT_TYPE: "OrderCreated"}):
    ...     pass
"""

SPAN_HANDLER_DISPATCH = "eventdispatch.handler.dispatch"
"""Name of the span wrapping one dispatch function invocation."""

# =============================================================================
# Event Attributes
# =============================================================================

ATTR_EVENT_TYPE = "eventdispatch.event.type"
"""Type name of the event the handler accepts (e.g., 'OrderCreated')."""

# =============================================================================
# Handler Attributes
# =============================================================================

ATTR_HANDLER_NAME = "eventdispatch.handler.name"
"""Qualified name of the handler method (string)."""

ATTR_HANDLER_DECLARING_TYPE = "eventdispatch.handler.declaring_type"
"""Name of the class owning the handler method (string)."""

ATTR_HANDLER_VARIANT = "eventdispatch.handler.variant"
"""Handler shape: 'sync', 'async' or 'cancellable_async'."""

ATTR_HANDLER_SUCCESS = "eventdispatch.handler.success"
"""Whether the handler executed successfully (boolean)."""

# =============================================================================
# Error Attributes
# =============================================================================

ATTR_ERROR_TYPE = "eventdispatch.error.type"
"""Type of error encountered (exception class name)."""


__all__ = [
    "SPAN_HANDLER_DISPATCH",
    "ATTR_EVENT_TYPE",
    "ATTR_HANDLER_NAME",
    "ATTR_HANDLER_DECLARING_TYPE",
    "ATTR_HANDLER_VARIANT",
    "ATTR_HANDLER_SUCCESS",
    "ATTR_ERROR_TYPE",
]
