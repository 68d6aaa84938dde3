"""Zone detection and suggested-contribution pricing for carpool trips."""

from .core.exceptions import (
    ConfigurationError,
    InvalidTripDetailsError,
    OutOfServiceAreaError,
    PricingError,
    ZoneNotFoundError,
)
from .geo import Zone, ZoneDetector, ZoneLoader, ZoneRegistry, default_registry
from .pricing import (
    PricingEngine,
    PricingPolicy,
    PricingResult,
    TripCategory,
    TripDetails,
    calculate_trip_pricing,
)

__version__ = "0.3.0"

__all__ = [
    "Zone",
    "ZoneDetector",
    "ZoneLoader",
    "ZoneRegistry",
    "default_registry",
    "PricingEngine",
    "PricingPolicy",
    "PricingResult",
    "TripCategory",
    "TripDetails",
    "calculate_trip_pricing",
    "PricingError",
    "InvalidTripDetailsError",
    "OutOfServiceAreaError",
    "ZoneNotFoundError",
    "ConfigurationError",
]
