"""PIIShield logging configuration."""

from .config import LoggingConfig, ObservabilityConfig, get_config, set_config
from .logging import configure_logging, correlation_context, get_logger, trace_operation

__all__ = [
    "LoggingConfig",
    "ObservabilityConfig",
    "get_config",
    "set_config",
    "configure_logging",
    "correlation_context",
    "get_logger",
    "trace_operation",
]
