from collections.abc import Callable
from typing import Any

from .geometry import bounds_contain, point_in_polygon
from .zones import Zone, ZoneRegistry

TraceHook = Callable[[str, dict[str, Any]], None]


class ZoneDetector:
    """Resolves coordinates to the most specific enclosing zone.

    Tiers are checked in a fixed order and the first containing polygon wins:
    airport, sub-zones, main zones, then the island-wide fallback. The
    airport always wins so that any trip touching it gets airport pricing.
    """

    def __init__(self, registry: ZoneRegistry, trace: TraceHook | None = None):
        self.registry = registry
        self.trace = trace
        # Tier order is fixed for the life of the detector.
        self._tiers: tuple[tuple[str, tuple[Zone, ...]], ...] = (
            ("airport", (registry.airport_zone,)),
            ("sub_zone", tuple(registry.sub_zones())),
            ("main_zone", tuple(registry.main_zones())),
            ("fallback", (registry.fallback_zone,)),
        )

    def detect_zone(self, lat: float, lon: float) -> Zone | None:
        """Find the zone for a coordinate.

        Args:
            lat: Latitude in decimal degrees
            lon: Longitude in decimal degrees

        Returns:
            The matched zone, or None when the point is outside the service area
        """
        zone, tier = self._find_zone(lat, lon)
        if self.trace is not None:
            self.trace(
                "zone.resolved",
                {
                    "lat": lat,
                    "lon": lon,
                    "zone_id": zone.zone_id if zone else None,
                    "tier": tier,
                },
            )
        return zone

    def _find_zone(self, lat: float, lon: float) -> tuple[Zone | None, str | None]:
        if not self.registry.is_within_service_bounds(lat, lon):
            return None, None

        for tier, zones in self._tiers:
            for zone in zones:
                if self._contains(zone, lat, lon):
                    return zone, tier

        return None, None

    def _contains(self, zone: Zone, lat: float, lon: float) -> bool:
        if not bounds_contain(self.registry.zone_bounds(zone.zone_id), lon, lat):
            return False
        return point_in_polygon(lon, lat, zone.boundary)

    def detect_zone_id(self, lat: float, lon: float) -> str | None:
        zone = self.detect_zone(lat, lon)
        return zone.zone_id if zone else None

    def detect_zone_batch(self, coords: list[tuple[float, float]]) -> list[Zone | None]:
        """Resolve zones for multiple (lat, lon) coordinates."""
        return [self.detect_zone(lat, lon) for lat, lon in coords]
