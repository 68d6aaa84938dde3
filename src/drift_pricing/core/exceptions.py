"""Exception hierarchy for zone detection and trip pricing."""

from typing import Any


class PricingError(Exception):
    """Base exception for all pricing errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidTripDetailsError(PricingError):
    """Trip input that cannot be priced (negative, non-finite or out of range)."""

    pass


class OutOfServiceAreaError(PricingError):
    """Pickup or destination falls outside every registered zone."""

    pass


class ZoneNotFoundError(PricingError):
    """Requested zone id does not exist in the registry."""

    pass


class ConfigurationError(PricingError):
    """Invalid zone registry or pricing policy."""

    pass
