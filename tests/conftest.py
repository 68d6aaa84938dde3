from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from drift_pricing.geo.zone_detection import ZoneDetector
from drift_pricing.geo.zones import ZoneLoader, ZoneRegistry, default_registry
from drift_pricing.pricing.engine import PricingEngine, get_default_engine
from drift_pricing.pricing.models import TripDetails
from drift_pricing.pricing.policy import PricingPolicy
from tests.factories import FIXED_NOW


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_zones_path(fixtures_dir: Path) -> Path:
    """Small alternate zone layout on a 10x10 degree grid."""
    return fixtures_dir / "sample_zones.geojson"


@pytest.fixture
def sample_policy_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "sample_policy.json"


@pytest.fixture
def sample_registry(sample_zones_path: Path) -> ZoneRegistry:
    return ZoneLoader(sample_zones_path).registry


@pytest.fixture
def registry() -> ZoneRegistry:
    return default_registry()


@pytest.fixture
def detector(registry: ZoneRegistry) -> ZoneDetector:
    return ZoneDetector(registry)


@pytest.fixture
def policy() -> PricingPolicy:
    return PricingPolicy()


@pytest.fixture
def engine(registry: ZoneRegistry, policy: PricingPolicy) -> PricingEngine:
    return PricingEngine(registry, policy, clock=lambda: FIXED_NOW)


@pytest.fixture
def make_trip() -> Callable[..., TripDetails]:
    """Build TripDetails from (lat, lon) pairs."""

    def _make(
        pickup: tuple[float, float],
        destination: tuple[float, float],
        distance_miles: float = 5.0,
        duration_minutes: float = 10.0,
        **kwargs: Any,
    ) -> TripDetails:
        return TripDetails(
            pickup_lat=pickup[0],
            pickup_lon=pickup[1],
            destination_lat=destination[0],
            destination_lon=destination[1],
            distance_miles=distance_miles,
            duration_minutes=duration_minutes,
            **kwargs,
        )

    return _make


@pytest.fixture(autouse=True)
def reset_default_engine():
    """Drop the cached settings-built engine between tests."""
    get_default_engine.cache_clear()
    yield
    get_default_engine.cache_clear()

