"""Trip classification and suggested-contribution calculation."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from functools import lru_cache

from drift_pricing.core.exceptions import OutOfServiceAreaError
from drift_pricing.geo.zone_detection import TraceHook, ZoneDetector
from drift_pricing.geo.zones import Zone, ZoneLoader, ZoneRegistry, default_registry
from drift_pricing.settings import Settings, get_settings

from .models import PricingBreakdown, PricingResult, TripCategory, TripDetails
from .money import round_cents, round_half_up
from .policy import PricingPolicy, check_policy_against_registry, load_policy
from .time_of_day import TimeOfDayPricing

logger = logging.getLogger(__name__)

AIRPORT_LABEL = "Airport"

Fees = tuple[dict[str, float], float]


class PricingEngine:
    """Prices trips from pickup and destination coordinates.

    Classification precedence, first match wins:

    1. long-distance: endpoints in opposite far clusters (even via the airport)
    2. airport: either endpoint in the airport zone
    3. within-zone: identical zones
    4. sub-zone: different zones of the same family
    5. cross-zone: everything else

    The engine holds no mutable state; one instance can serve concurrent
    callers.
    """

    def __init__(
        self,
        registry: ZoneRegistry,
        policy: PricingPolicy | None = None,
        trace: TraceHook | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.registry = registry
        self.policy = policy or PricingPolicy()
        check_policy_against_registry(self.policy, registry)

        self.trace = trace
        self.detector = ZoneDetector(registry, trace=trace)
        self.time_pricing = TimeOfDayPricing(
            self.policy.time_windows, self.policy.service_timezone
        )
        self.clock = clock or (lambda: datetime.now(UTC))

    def classify(self, pickup_zone_id: str, destination_zone_id: str) -> TripCategory:
        if self.policy.crosses_clusters(pickup_zone_id, destination_zone_id):
            return TripCategory.LONG_DISTANCE
        if self.registry.is_airport(pickup_zone_id) or self.registry.is_airport(
            destination_zone_id
        ):
            return TripCategory.AIRPORT
        if pickup_zone_id == destination_zone_id:
            return TripCategory.WITHIN_ZONE
        if self.registry.are_related(pickup_zone_id, destination_zone_id):
            return TripCategory.SUB_ZONE
        return TripCategory.CROSS_ZONE

    def quote(self, trip: TripDetails) -> PricingResult:
        """Price a trip.

        Raises:
            OutOfServiceAreaError: If either endpoint is outside every zone
        """
        pickup = self.detector.detect_zone(trip.pickup_lat, trip.pickup_lon)
        destination = self.detector.detect_zone(trip.destination_lat, trip.destination_lon)

        if pickup is None or destination is None:
            raise OutOfServiceAreaError(
                "Pickup or destination is outside the service area",
                details={
                    "pickup_in_area": pickup is not None,
                    "destination_in_area": destination is not None,
                },
            )

        category = self.classify(pickup.zone_id, destination.zone_id)
        self._emit(
            "trip.classified",
            pickup_zone_id=pickup.zone_id,
            destination_zone_id=destination.zone_id,
            category=category.value,
        )

        components, subtotal = self._fees(category, pickup, destination, trip)
        multiplier = self.time_pricing.get_multiplier(trip.requested_at)
        band = self.policy.bands.for_category(category)

        suggested = round_half_up(subtotal * multiplier.value)
        minimum = round_half_up(subtotal * (1 - band) * multiplier.value)
        maximum = round_half_up(subtotal * (1 + band) * multiplier.value)

        self._emit(
            "trip.priced",
            category=category.value,
            subtotal=subtotal,
            time_multiplier=multiplier.value,
            suggested_contribution=suggested,
        )

        return PricingResult(
            pickup_zone_id=pickup.zone_id,
            pickup_zone_name=pickup.display_name,
            destination_zone_id=destination.zone_id,
            destination_zone_name=destination.display_name,
            category=category,
            breakdown=PricingBreakdown(
                **components,
                time_multiplier=multiplier.value,
                time_multiplier_name=multiplier.name,
            ),
            suggested_contribution=suggested,
            min_contribution=minimum,
            max_contribution=maximum,
            display_text=self._display_text(category, pickup, destination),
            calculated_at=trip.requested_at or self.clock(),
            policy_version=self.policy.version,
        )

    def _fees(
        self, category: TripCategory, pickup: Zone, destination: Zone, trip: TripDetails
    ) -> Fees:
        if category == TripCategory.LONG_DISTANCE:
            return self._long_distance_fees()
        if category == TripCategory.AIRPORT:
            return self._airport_fees(pickup, destination, trip)
        if category == TripCategory.WITHIN_ZONE:
            return self._within_zone_fees(trip)
        if category == TripCategory.SUB_ZONE:
            return self._sub_zone_fees()
        return self._cross_zone_fees(trip)

    def _within_zone_fees(self, trip: TripDetails) -> Fees:
        # Four outcomes: a short trip with a stop pays the with-stop rate only,
        # a longer trip with a stop also pays the surcharge, and trips without
        # a stop pay the short-trip rate whatever their length.
        policy = self.policy
        if not trip.has_extra_stop:
            return {"base_fee": policy.short_trip_rate}, policy.short_trip_rate

        if trip.duration_minutes <= policy.short_trip_max_minutes:
            return {"base_fee": policy.with_stop_rate}, policy.with_stop_rate

        return (
            {"base_fee": policy.with_stop_rate, "extra_stop_fee": policy.extra_stop_surcharge},
            policy.with_stop_rate + policy.extra_stop_surcharge,
        )

    def _sub_zone_fees(self) -> Fees:
        policy = self.policy
        return (
            {"base_fee": policy.sub_zone_base_fee, "sub_zone_fee": policy.sub_zone_surcharge},
            policy.sub_zone_base_fee + policy.sub_zone_surcharge,
        )

    def _cross_zone_fees(self, trip: TripDetails) -> Fees:
        policy = self.policy
        distance_cost = trip.distance_miles * policy.price_per_mile
        time_cost = trip.duration_minutes * policy.price_per_minute

        components = {
            "base_fee": policy.cross_zone_base_fee,
            "distance_cost": round_cents(distance_cost),
            "per_mile_rate": policy.price_per_mile,
        }
        if time_cost > 0:
            components["time_cost"] = round_cents(time_cost)

        return components, policy.cross_zone_base_fee + distance_cost + time_cost

    def _airport_fees(self, pickup: Zone, destination: Zone, trip: TripDetails) -> Fees:
        policy = self.policy
        other = destination if self.registry.is_airport(pickup.zone_id) else pickup

        if other.zone_id in policy.airport_premium_zone_ids:
            per_mile = policy.airport_premium_per_mile
        else:
            per_mile = policy.airport_standard_per_mile

        distance_cost = trip.distance_miles * per_mile
        return (
            {
                "base_fee": policy.airport_base_fee,
                "distance_cost": round_cents(distance_cost),
                "per_mile_rate": per_mile,
            },
            policy.airport_base_fee + distance_cost,
        )

    def _long_distance_fees(self) -> Fees:
        flat = self.policy.long_distance_flat_price
        return {"flat_rate": flat}, flat

    def _display_text(self, category: TripCategory, pickup: Zone, destination: Zone) -> str:
        if category == TripCategory.WITHIN_ZONE:
            return f"Within {pickup.display_name}"
        return f"{self._route_label(pickup)} → {self._route_label(destination)}"

    def _route_label(self, zone: Zone) -> str:
        return AIRPORT_LABEL if self.registry.is_airport(zone.zone_id) else zone.display_name

    def _emit(self, event: str, **fields: object) -> None:
        if self.trace is not None:
            self.trace(event, fields)


def build_engine(settings: Settings, trace: TraceHook | None = None) -> PricingEngine:
    """Build an engine from the zone and policy files named in settings."""
    pricing = settings.pricing
    registry = (
        ZoneLoader(pricing.zones_path).registry if pricing.zones_path else default_registry()
    )
    policy = load_policy(pricing.policy_path) if pricing.policy_path else PricingPolicy()

    logger.info(f"Pricing engine ready: {len(registry)} zones, policy {policy.version}")
    return PricingEngine(registry, policy, trace=trace)


@lru_cache(maxsize=1)
def get_default_engine() -> PricingEngine:
    """Process-wide engine built from environment settings on first use."""
    return build_engine(get_settings())


def calculate_trip_pricing(trip: TripDetails, engine: PricingEngine | None = None) -> PricingResult:
    """Price a trip with the given engine, or the default engine."""
    return (engine or get_default_engine()).quote(trip)
