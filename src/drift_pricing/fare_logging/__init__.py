"""Structured logging for the pricing library."""

from .context import ContextFilter, LogContext, log_context, log_quote_context
from .filters import CoordinatePrecisionFilter, DefaultCorrelationFilter
from .formatters import DevFormatter, JSONFormatter
from .setup import configure_logging, get_logger, setup_logging
from .trace import logging_trace_hook

__all__ = [
    "setup_logging",
    "configure_logging",
    "get_logger",
    "log_context",
    "log_quote_context",
    "logging_trace_hook",
    "JSONFormatter",
    "DevFormatter",
    "CoordinatePrecisionFilter",
    "DefaultCorrelationFilter",
    "LogContext",
    "ContextFilter",
]
