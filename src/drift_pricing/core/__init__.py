"""Core utilities shared by the geo and pricing packages."""

from .exceptions import (
    ConfigurationError,
    InvalidTripDetailsError,
    OutOfServiceAreaError,
    PricingError,
    ZoneNotFoundError,
)

__all__ = [
    "PricingError",
    "InvalidTripDetailsError",
    "OutOfServiceAreaError",
    "ZoneNotFoundError",
    "ConfigurationError",
]
