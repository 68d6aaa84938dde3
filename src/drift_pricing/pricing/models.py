"""Trip pricing input and output models."""

import math
from datetime import datetime
from enum import Enum
from typing import Self

from pydantic import BaseModel, ConfigDict, computed_field, model_validator

from drift_pricing.core.exceptions import InvalidTripDetailsError


class TripCategory(str, Enum):
    """Mutually exclusive trip classifications, each with its own fee formula."""

    WITHIN_ZONE = "within_zone"
    SUB_ZONE = "sub_zone"
    CROSS_ZONE = "cross_zone"
    AIRPORT = "airport"
    LONG_DISTANCE = "long_distance"


class TripDetails(BaseModel):
    """Trip to be priced.

    Distance and duration come from the directions service. Invalid values
    raise InvalidTripDetailsError directly instead of a pydantic
    ValidationError so callers have a single error type to handle.
    """

    model_config = ConfigDict(frozen=True)

    pickup_lat: float
    pickup_lon: float
    destination_lat: float
    destination_lon: float
    distance_miles: float
    duration_minutes: float
    requested_at: datetime | None = None
    has_extra_stop: bool = False

    @model_validator(mode="after")
    def validate_trip(self) -> Self:
        problems: dict[str, float] = {}

        for field in ("pickup_lat", "destination_lat"):
            value = getattr(self, field)
            if not math.isfinite(value) or not -90.0 <= value <= 90.0:
                problems[field] = value
        for field in ("pickup_lon", "destination_lon"):
            value = getattr(self, field)
            if not math.isfinite(value) or not -180.0 <= value <= 180.0:
                problems[field] = value
        for field in ("distance_miles", "duration_minutes"):
            value = getattr(self, field)
            if not math.isfinite(value) or value < 0:
                problems[field] = value

        if problems:
            raise InvalidTripDetailsError(
                f"Invalid trip details: {', '.join(sorted(problems))}",
                details={"invalid_fields": problems},
            )
        return self


_LINE_ITEM_LABELS = (
    ("base_fee", "Base fee"),
    ("sub_zone_fee", "Sub-zone fee"),
    ("distance_cost", "Distance"),
    ("time_cost", "Time"),
    ("extra_stop_fee", "Extra stop"),
    ("flat_rate", "Flat rate"),
)


class PricingBreakdown(BaseModel):
    """Fee components of a quote. Components that do not apply are None."""

    model_config = ConfigDict(frozen=True)

    base_fee: float | None = None
    distance_cost: float | None = None
    time_cost: float | None = None
    extra_stop_fee: float | None = None
    sub_zone_fee: float | None = None
    flat_rate: float | None = None
    per_mile_rate: float | None = None
    time_multiplier: float = 1.0
    time_multiplier_name: str = "Standard"

    def line_items(self) -> list[tuple[str, float]]:
        """Labelled monetary components that apply to this quote, in display order."""
        items = []
        for field, label in _LINE_ITEM_LABELS:
            value = getattr(self, field)
            if value is not None:
                items.append((label, value))
        return items

    @property
    def subtotal(self) -> float:
        return sum(value for _, value in self.line_items())


class PricingResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    pickup_zone_id: str
    pickup_zone_name: str
    destination_zone_id: str
    destination_zone_name: str
    category: TripCategory
    breakdown: PricingBreakdown
    suggested_contribution: float
    min_contribution: float
    max_contribution: float
    display_text: str
    calculated_at: datetime
    policy_version: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_within_zone(self) -> bool:
        return self.category == TripCategory.WITHIN_ZONE

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_sub_zone_trip(self) -> bool:
        return self.category == TripCategory.SUB_ZONE

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_cross_zone(self) -> bool:
        return self.category == TripCategory.CROSS_ZONE

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_airport_trip(self) -> bool:
        return self.category == TripCategory.AIRPORT

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_long_distance(self) -> bool:
        return self.category == TripCategory.LONG_DISTANCE
