"""Hour-of-day surcharge multipliers."""

from datetime import datetime
from typing import NamedTuple
from zoneinfo import ZoneInfo

from .policy import TimeWindow

STANDARD_NAME = "Standard"


class TimeMultiplier(NamedTuple):
    value: float
    name: str


STANDARD = TimeMultiplier(1.0, STANDARD_NAME)


class TimeOfDayPricing:
    """Selects the surcharge window for a request time.

    Windows are checked in order and the first one containing the local hour
    wins, so an overlapping later window only applies outside earlier ones.
    Only the hour matters; the date is ignored.
    """

    def __init__(self, windows: tuple[TimeWindow, ...], service_timezone: str):
        self.windows = windows
        self.tz = ZoneInfo(service_timezone)

    def local_hour(self, requested_at: datetime) -> int:
        """Hour in the service timezone. Naive datetimes are taken as local already."""
        if requested_at.tzinfo is None:
            return requested_at.hour
        return requested_at.astimezone(self.tz).hour

    def get_multiplier(self, requested_at: datetime | None) -> TimeMultiplier:
        """Get the multiplier for a request time.

        Args:
            requested_at: When the trip was requested, or None

        Returns:
            The matching window's multiplier, or the 1.0 standard rate when
            no time is given or no window matches
        """
        if requested_at is None:
            return STANDARD

        hour = self.local_hour(requested_at)
        for window in self.windows:
            if window.contains(hour):
                return TimeMultiplier(window.multiplier, window.name)

        return STANDARD
