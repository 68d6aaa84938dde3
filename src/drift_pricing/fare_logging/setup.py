"""Root logger configuration for applications embedding the pricing library."""

import logging
import sys
from typing import TextIO

from drift_pricing.settings import LoggingSettings

from .context import ContextFilter
from .filters import CoordinatePrecisionFilter, DefaultCorrelationFilter
from .formatters import DevFormatter, JSONFormatter

HANDLER_NAME = "drift_pricing"
QUIET_LOGGERS = ("shapely",)


def _build_handler(json_output: bool, environment: str, stream: TextIO | None) -> logging.Handler:
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(JSONFormatter(environment) if json_output else DevFormatter())

    # ContextFilter must run before the correlation default
    for log_filter in (ContextFilter(), DefaultCorrelationFilter(), CoordinatePrecisionFilter()):
        handler.addFilter(log_filter)

    return handler


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    environment: str = "development",
    stream: TextIO | None = None,
) -> logging.Handler:
    """Install the pricing handler on the root logger and return it.

    A handler installed by an earlier call is replaced. Handlers owned by the
    host application are left in place.
    """
    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            root_logger.removeHandler(existing)

    handler = _build_handler(json_output, environment, stream)
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper()))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return handler


def configure_logging(settings: LoggingSettings) -> logging.Handler:
    """Apply LOG_* environment settings."""
    return setup_logging(
        level=settings.level,
        json_output=settings.format == "json",
        environment=settings.environment,
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
