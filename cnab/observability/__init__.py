"""
Observability components.

Provides structured logging tagged with the bundle being worked on.
"""

from .logging import (
    ContextualLoggerAdapter,
    bundle_context,
    describe_bundle,
    get_logger,
    get_logging_context,
    log_operation,
)

__all__ = [
    "bundle_context",
    "describe_bundle",
    "get_logging_context",
    "ContextualLoggerAdapter",
    "get_logger",
    "log_operation",
]
