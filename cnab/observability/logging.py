"""
Logging utilities for the CNAB core library.

Records emitted while validating parameters or parsing claims carry the
bundle they concern (name, version) and, for claims, the installation name
and revision. The library never configures handlers; hosts decide where
records go and can read these attributes from their formatters.
"""

import contextvars
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator, Mapping

# Bundle/installation fields attached to every record in the current scope
_bundle_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar(
    "bundle_context", default=None
)


def describe_bundle(bundle: Mapping[str, Any] | None) -> dict[str, str]:
    """
    Extract the logging fields that identify a bundle.

    Args:
        bundle: Bundle dictionary (may be partial, empty or None)

    Returns:
        ``bundle_name`` / ``bundle_version`` for whichever are present strings
    """
    if not isinstance(bundle, Mapping):
        return {}
    fields = {"bundle_name": bundle.get("name"), "bundle_version": bundle.get("version")}
    return {key: value for key, value in fields.items() if isinstance(value, str)}


@contextmanager
def bundle_context(**fields: Any) -> Iterator[dict[str, Any]]:
    """
    Attach bundle fields to records logged inside the ``with`` block.

    Nested scopes extend the enclosing one; the previous context is restored
    on exit, including when the block raises.

    Args:
        **fields: Context fields (bundle_name, installation, revision, ...)

    Yields:
        The context in effect inside the block
    """
    context = {**(_bundle_context.get() or {}), **fields}
    token = _bundle_context.set(context)
    try:
        yield context
    finally:
        _bundle_context.reset(token)


def get_logging_context() -> dict[str, Any]:
    """Get the fields currently attached to log records."""
    context: dict[str, Any] = {"timestamp": datetime.now().isoformat()}
    context.update(_bundle_context.get() or {})
    return context


class ContextualLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that adds the current bundle context to log records.
    """

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        context = get_logging_context()
        context.update(kwargs.get("extra") or {})
        kwargs["extra"] = context
        return msg, kwargs


def get_logger(name: str) -> ContextualLoggerAdapter:
    """
    Get a logger that tags records with the current bundle context.

    Args:
        name: Logger name (typically __name__)
    """
    return ContextualLoggerAdapter(logging.getLogger(name), {})


def log_operation(
    logger: logging.Logger | logging.LoggerAdapter,
    operation: str,
    level: int = logging.INFO,
    success: bool = True,
    **context: Any,
) -> None:
    """
    Log the outcome of a library operation.

    Args:
        logger: Logger or adapter
        operation: Operation name, e.g. ``parameter.validate``
        level: Log level
        success: Whether the operation succeeded (for validation: the verdict)
        **context: Operation fields (parameter, reason, installation, ...)
    """
    log_context = get_logging_context()
    log_context.update(context)
    log_context.update({"operation": operation, "success": success})

    subject = context.get("parameter") or context.get("installation")
    message = f"{operation}: {'ok' if success else 'failed'}"
    if subject:
        message = f"{operation} [{subject}]: {'ok' if success else 'failed'}"
    if not success and context.get("reason"):
        message += f" ({context['reason']})"

    logger.log(level, message, extra=log_context)
