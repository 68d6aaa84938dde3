"""Adapters from the detector/engine trace hook to logging."""

import logging
from typing import Any

from drift_pricing.geo.zone_detection import TraceHook

_ZONE_FIELDS = ("pickup_zone_id", "destination_zone_id")


def logging_trace_hook(
    logger: logging.Logger | None = None, level: int = logging.DEBUG
) -> TraceHook:
    """Build a trace hook that writes each pricing event as a log record.

    Zone ids and the trip category are passed as record attributes so the
    JSON formatter emits them as fields.
    """
    target = logger or logging.getLogger("drift_pricing.trace")

    def hook(event: str, fields: dict[str, Any]) -> None:
        if not target.isEnabledFor(level):
            return
        extra = {key: fields[key] for key in _ZONE_FIELDS if key in fields}
        if "category" in fields:
            extra["trip_category"] = fields["category"]
        summary = " ".join(f"{key}={value}" for key, value in fields.items())
        target.log(level, f"{event} {summary}", extra=extra)

    return hook
