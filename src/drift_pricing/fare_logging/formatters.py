"""Log formatters for JSON and human-readable output."""

import json
import logging
from datetime import UTC, datetime

SERVICE_NAME = "drift-pricing"

# Record attributes lifted into JSON output when present
CONTEXT_FIELDS = (
    "quote_id",
    "pickup_zone_id",
    "destination_zone_id",
    "trip_category",
    "correlation_id",
)


class JSONFormatter(logging.Formatter):
    """One JSON object per line for log shipping."""

    def __init__(self, environment: str = "development", service: str = SERVICE_NAME):
        super().__init__()
        self.environment = environment
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service,
            "env": self.environment,
        }
        payload.update(
            (field, getattr(record, field))
            for field in CONTEXT_FIELDS
            if getattr(record, field, None) is not None
        )

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        # Route labels contain arrows; keep them readable
        return json.dumps(payload, default=str, ensure_ascii=False)


class DevFormatter(logging.Formatter):
    """Single-line console format with the quote id appended when bound."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        quote_id = getattr(record, "quote_id", None)
        return f"{line} [quote={quote_id}]" if quote_id else line
