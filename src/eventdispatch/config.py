"""
Configuration for descriptor creation and dispatch function compilation.

This module provides:
- DispatchConfig: Tracing, logging and default behavior for dispatch functions
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from eventdispatch.observability import Tracer

_STANDARD_LOG_LEVELS = (
    logging.DEBUG,
    logging.INFO,
    logging.WARNING,
    logging.ERROR,
    logging.CRITICAL,
)


@dataclass(frozen=True)
class DispatchConfig:
    """
    Configuration shared by descriptor factories and the dispatch builder.

    Attributes:
        enable_tracing: If True and OpenTelemetry is available, each dispatch
            runs inside a span. Ignored if tracer is explicitly provided.
        tracer: Optional custom Tracer instance
        failure_log_level: Logging level used when a dispatch function carries
            a failure back to its caller. The caller owns the failure, so the
            default is DEBUG.
        default_yield_synchronous_execution: Yield flag applied to handlers
            whose marker and registration call leave it unspecified

    Example:
        >>> config = DispatchConfig(
        ...     enable_tracing=False,
        ...     failure_log_level=logging.WARNING,
        ... )
        >>> dispatch = compile_dispatch_function(descriptor, config)
    """

    # Tracing
    enable_tracing: bool = True
    tracer: Tracer | None = None

    # Logging
    failure_log_level: int = logging.DEBUG

    # Defaults for handlers registered without a marker
    default_yield_synchronous_execution: bool = False

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.failure_log_level not in _STANDARD_LOG_LEVELS:
            raise ValueError(
                f"failure_log_level must be a standard logging level, "
                f"got {self.failure_log_level!r}. "
                "Use logging.DEBUG (default), logging.INFO, logging.WARNING or logging.ERROR."
            )


DEFAULT_CONFIG = DispatchConfig()


__all__ = [
    "DispatchConfig",
    "DEFAULT_CONFIG",
]
