"""Log filters for location masking and correlation ID injection."""

import logging
import re


class CoordinatePrecisionFilter(logging.Filter):
    """Truncates decimal coordinates in messages to three places (~100 m).

    Pickup and destination points identify where riders live and work, so
    logs keep only neighbourhood-level precision.
    """

    COORDINATE_PATTERN = re.compile(r"(-?\d{1,3}\.\d{3})\d+")

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if "." in message:
            masked = self.COORDINATE_PATTERN.sub(r"\1", message)
            if masked != message:
                record.msg = masked
                record.args = None
        return True


class DefaultCorrelationFilter(logging.Filter):
    """Adds default correlation_id if not present."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = "-"
        return True
