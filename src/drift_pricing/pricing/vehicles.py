from enum import Enum

from .models import PricingResult
from .money import round_cents


class VehicleClass(str, Enum):
    STANDARD = "standard"
    XL = "xl"
    VAN = "van"


VEHICLE_MULTIPLIERS: dict[VehicleClass, float] = {
    VehicleClass.STANDARD: 1.0,
    VehicleClass.XL: 1.25,
    VehicleClass.VAN: 1.5,
}


def vehicle_price(result: PricingResult, vehicle_class: VehicleClass) -> float:
    """Suggested contribution adjusted for the chosen vehicle size, in cents precision."""
    return round_cents(result.suggested_contribution * VEHICLE_MULTIPLIERS[vehicle_class])
