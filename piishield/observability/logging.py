"""Structured logging with correlation and tracing support.

Nothing logged here ever includes a protected value; callers pass counts,
rule names and field names only.
"""

from __future__ import annotations

import contextvars
import logging
import sys
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Generator, Optional

import structlog

from .config import LoggingConfig, get_config

# Context variable for correlation IDs
correlation_id: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)


def add_correlation_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add correlation ID to log events."""
    corr_id = correlation_id.get()
    if corr_id:
        event_dict["correlation_id"] = corr_id
    return event_dict


def add_timestamp(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add timestamp to log events."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_level(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add log level to event dict."""
    event_dict["level"] = method_name.upper()
    return event_dict


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    """Configure structured logging."""
    if config is None:
        config = get_config().logging

    processors_list: list[Any] = [
        structlog.stdlib.filter_by_level,
        add_timestamp,
        add_level,
        structlog.stdlib.add_logger_name,
        add_correlation_id,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if config.format == "json":
        processors_list.append(structlog.processors.JSONRenderer())
    else:
        processors_list.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors_list,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # basicConfig rejects stream and filename together, even when one is None
    destination: dict[str, Any] = (
        {"filename": config.file_path}
        if config.output == "file" and config.file_path
        else {"stream": sys.stdout}
    )
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, config.level.upper(), logging.INFO),
        **destination,
    )


def get_logger(name: str) -> Any:
    """Get a logger instance."""
    return structlog.get_logger(name)


@contextmanager
def correlation_context(corr_id: Optional[str] = None) -> Generator[str, None, None]:
    """Context manager for correlation ID."""
    if corr_id is None:
        corr_id = str(uuid.uuid4())

    token = correlation_id.set(corr_id)
    try:
        yield corr_id
    finally:
        correlation_id.reset(token)


@contextmanager
def trace_operation(operation: str, **kwargs: Any) -> Generator[dict[str, Any], None, None]:
    """Log start, completion or failure of an operation.

    Yields a mutable attribute dict; entries added to it are included in the
    completion event.
    """
    attributes: dict[str, Any] = dict(kwargs)
    # Unconfigured structlog prints straight to stdout
    if not get_config().logging.enable_tracing or not structlog.is_configured():
        yield attributes
        return

    logger = get_logger(__name__)
    start_time = datetime.now(timezone.utc)
    trace_id = str(uuid.uuid4())

    logger.debug("Operation started", operation=operation, trace_id=trace_id, **kwargs)

    try:
        yield attributes
    except Exception as e:
        duration = (datetime.now(timezone.utc) - start_time).total_seconds()
        logger.error(
            "Operation failed",
            operation=operation,
            trace_id=trace_id,
            duration_seconds=duration,
            status="error",
            error_type=type(e).__name__,
        )
        raise

    duration = (datetime.now(timezone.utc) - start_time).total_seconds()
    logger.info(
        "Operation completed",
        operation=operation,
        trace_id=trace_id,
        duration_seconds=duration,
        status="success",
        **attributes,
    )
