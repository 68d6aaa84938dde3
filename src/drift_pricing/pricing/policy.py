"""Versioned pricing policy: fee constants, zone lists and time windows.

Every number the engine uses lives here so that a policy change never
touches classification code. The defaults are the current Grand Cayman
rates; a JSON file with the same shape can override them.
"""

import logging
from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from drift_pricing.core.exceptions import ConfigurationError
from drift_pricing.geo.zones import ZoneRegistry

from .models import TripCategory

logger = logging.getLogger(__name__)


class TimeWindow(BaseModel):
    """Hour-of-day surcharge window.

    ``start_hour`` is inclusive and ``end_hour`` exclusive. A window whose
    start is later than its end wraps through midnight.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    start_hour: int = Field(ge=0, le=23)
    end_hour: int = Field(ge=0, le=23)
    multiplier: float = Field(ge=1.0)

    @model_validator(mode="after")
    def validate_span(self) -> Self:
        if self.start_hour == self.end_hour:
            raise ValueError(f"Time window '{self.name}' has identical start and end hour")
        return self

    @property
    def wraps_midnight(self) -> bool:
        return self.start_hour > self.end_hour

    def contains(self, hour: int) -> bool:
        if self.wraps_midnight:
            return hour >= self.start_hour or hour < self.end_hour
        return self.start_hour <= hour < self.end_hour


class ContributionBands(BaseModel):
    """Fractional width of the min/max range around the suggested amount."""

    model_config = ConfigDict(frozen=True)

    within_zone: float = Field(default=0.10, ge=0.0, lt=1.0)
    sub_zone: float = Field(default=0.05, ge=0.0, lt=1.0)
    cross_zone: float = Field(default=0.08, ge=0.0, lt=1.0)
    airport: float = Field(default=0.08, ge=0.0, lt=1.0)
    long_distance: float = Field(default=0.0, ge=0.0, lt=1.0)

    def for_category(self, category: TripCategory) -> float:
        return float(getattr(self, category.value))


def _default_time_windows() -> tuple[TimeWindow, ...]:
    return (
        TimeWindow(name="Late Night", start_hour=22, end_hour=6, multiplier=1.25),
        TimeWindow(name="Early Morning", start_hour=5, end_hour=7, multiplier=1.15),
    )


class PricingPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str = "2025.2"
    currency_symbol: str = "CI$"
    service_timezone: str = "America/Cayman"
    usd_exchange_rate: float = Field(default=1.20, gt=0.0)

    # Within-zone
    short_trip_max_minutes: float = Field(default=3.0, ge=0.0)
    short_trip_rate: float = Field(default=6.00, ge=0.0)
    with_stop_rate: float = Field(default=10.00, ge=0.0)
    extra_stop_surcharge: float = Field(default=3.00, ge=0.0)

    # Sub-zone
    sub_zone_base_fee: float = Field(default=6.00, ge=0.0)
    sub_zone_surcharge: float = Field(default=2.00, ge=0.0)

    # Cross-zone
    cross_zone_base_fee: float = Field(default=5.00, ge=0.0)
    price_per_mile: float = Field(default=1.50, ge=0.0)
    price_per_minute: float = Field(default=0.0, ge=0.0)

    # Airport
    airport_base_fee: float = Field(default=10.00, ge=0.0)
    airport_standard_per_mile: float = Field(default=1.50, ge=0.0)
    airport_premium_per_mile: float = Field(default=2.50, ge=0.0)
    airport_premium_zone_ids: tuple[str, ...] = ("zone_3", "zone_3a", "zone_3b", "zone_4")

    # Long-distance
    long_distance_flat_price: float = Field(default=60.00, ge=0.0)
    western_cluster_zone_ids: tuple[str, ...] = ("zone_1", "zone_2", "zone_2a")
    eastern_cluster_zone_ids: tuple[str, ...] = ("zone_6", "zone_7")

    time_windows: tuple[TimeWindow, ...] = Field(default_factory=_default_time_windows)
    bands: ContributionBands = Field(default_factory=ContributionBands)

    @model_validator(mode="after")
    def validate_rates(self) -> Self:
        if self.with_stop_rate <= self.short_trip_rate:
            raise ValueError(
                f"with_stop_rate ({self.with_stop_rate}) must exceed "
                f"short_trip_rate ({self.short_trip_rate})"
            )
        overlap = set(self.western_cluster_zone_ids) & set(self.eastern_cluster_zone_ids)
        if overlap:
            raise ValueError(f"Long-distance clusters overlap: {', '.join(sorted(overlap))}")
        return self

    def referenced_zone_ids(self) -> set[str]:
        return (
            set(self.airport_premium_zone_ids)
            | set(self.western_cluster_zone_ids)
            | set(self.eastern_cluster_zone_ids)
        )

    def crosses_clusters(self, zone_id_a: str, zone_id_b: str) -> bool:
        """True when the two zones sit in opposite long-distance clusters."""
        west = self.western_cluster_zone_ids
        east = self.eastern_cluster_zone_ids
        return (zone_id_a in west and zone_id_b in east) or (
            zone_id_a in east and zone_id_b in west
        )


def check_policy_against_registry(policy: PricingPolicy, registry: ZoneRegistry) -> None:
    """Fail fast when the policy names zones the registry does not define.

    Cluster and premium lists are maintained by hand alongside the zone file,
    so renumbering a zone without updating the policy must not go unnoticed.
    """
    missing = sorted(policy.referenced_zone_ids() - registry.zone_ids)
    if missing:
        raise ConfigurationError(
            f"Pricing policy {policy.version} references unknown zones: {', '.join(missing)}",
            details={"missing_zone_ids": missing, "policy_version": policy.version},
        )


def load_policy(path: Path | str) -> PricingPolicy:
    """Load a pricing policy from a JSON file."""
    policy_path = Path(path)
    try:
        policy = PricingPolicy.model_validate_json(policy_path.read_text())
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read pricing policy {policy_path}: {e}",
            details={"path": str(policy_path)},
        ) from e
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid pricing policy in {policy_path}: {e.error_count()} error(s)",
            details={"path": str(policy_path), "errors": e.errors(include_url=False)},
        ) from e

    logger.info(f"Loaded pricing policy {policy.version} from {policy_path}")
    return policy
