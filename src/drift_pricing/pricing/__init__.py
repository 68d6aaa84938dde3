from .display import format_currency, format_pricing_display, format_usd_equivalent, usd_equivalent
from .engine import PricingEngine, build_engine, calculate_trip_pricing, get_default_engine
from .models import PricingBreakdown, PricingResult, TripCategory, TripDetails
from .policy import (
    ContributionBands,
    PricingPolicy,
    TimeWindow,
    check_policy_against_registry,
    load_policy,
)
from .time_of_day import TimeMultiplier, TimeOfDayPricing
from .vehicles import VehicleClass, vehicle_price

__all__ = [
    "PricingEngine",
    "build_engine",
    "calculate_trip_pricing",
    "get_default_engine",
    "TripDetails",
    "TripCategory",
    "PricingBreakdown",
    "PricingResult",
    "PricingPolicy",
    "ContributionBands",
    "TimeWindow",
    "check_policy_against_registry",
    "load_policy",
    "TimeOfDayPricing",
    "TimeMultiplier",
    "VehicleClass",
    "vehicle_price",
    "format_currency",
    "format_pricing_display",
    "format_usd_equivalent",
    "usd_equivalent",
]
