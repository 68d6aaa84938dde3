import json
import logging
from collections.abc import Iterable
from functools import lru_cache
from importlib.resources import files
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from shapely.geometry import Polygon

from drift_pricing.core.exceptions import ConfigurationError, ZoneNotFoundError

from .geometry import BoundingBox, LonLat, bounds_contain, merge_bounds, vertex_centroid

logger = logging.getLogger(__name__)

DEFAULT_ZONES_RESOURCE = "grand_cayman_zones.geojson"


class Zone(BaseModel):
    """A named pricing region. Boundary vertices are (lon, lat)."""

    model_config = ConfigDict(frozen=True)

    zone_id: str = Field(min_length=1)
    name: str
    display_name: str
    boundary: tuple[LonLat, ...]
    parent_zone_id: str | None = None
    color: str | None = None

    @property
    def is_sub_zone(self) -> bool:
        return self.parent_zone_id is not None

    @property
    def centroid(self) -> LonLat:
        return vertex_centroid(self.boundary)


class ZoneRegistry:
    """Immutable, validated set of zones with hierarchy helpers.

    Registry order is significant: within a detection tier the first zone
    whose polygon contains a point wins.
    """

    def __init__(
        self,
        zones: Iterable[Zone],
        airport_zone_id: str,
        fallback_zone_id: str,
    ) -> None:
        self._zones: tuple[Zone, ...] = tuple(zones)
        self._airport_zone_id = airport_zone_id
        self._fallback_zone_id = fallback_zone_id

        by_id: dict[str, Zone] = {}
        for zone in self._zones:
            if zone.zone_id in by_id:
                raise ConfigurationError(
                    f"Duplicate zone id '{zone.zone_id}'", details={"zone_id": zone.zone_id}
                )
            by_id[zone.zone_id] = zone
        self._by_id = MappingProxyType(by_id)

        self._validate_designations()
        self._validate_hierarchy()
        self._bounds = MappingProxyType(
            {zone.zone_id: self._polygon_bounds(zone) for zone in self._zones}
        )
        self._service_bounds = merge_bounds(list(self._bounds.values()))

    def _validate_designations(self) -> None:
        for role, zone_id in (
            ("airport", self._airport_zone_id),
            ("fallback", self._fallback_zone_id),
        ):
            if zone_id not in self._by_id:
                raise ConfigurationError(
                    f"Designated {role} zone '{zone_id}' is not in the registry",
                    details={"role": role, "zone_id": zone_id},
                )
        if self._airport_zone_id == self._fallback_zone_id:
            raise ConfigurationError("Airport and fallback zones must be different zones")

    def _validate_hierarchy(self) -> None:
        for zone in self._zones:
            if zone.parent_zone_id is None:
                continue
            parent = self._by_id.get(zone.parent_zone_id)
            if parent is None:
                raise ConfigurationError(
                    f"Zone '{zone.zone_id}' references unknown parent '{zone.parent_zone_id}'",
                    details={"zone_id": zone.zone_id, "parent_zone_id": zone.parent_zone_id},
                )
            # Families are one level deep; a sub-zone cannot parent another sub-zone.
            if parent.is_sub_zone:
                raise ConfigurationError(
                    f"Zone '{zone.zone_id}' has parent '{parent.zone_id}' which is itself a sub-zone",
                    details={"zone_id": zone.zone_id, "parent_zone_id": parent.zone_id},
                )

    @staticmethod
    def _polygon_bounds(zone: Zone) -> BoundingBox:
        if len(set(zone.boundary)) < 3:
            raise ConfigurationError(
                f"Zone '{zone.zone_id}' boundary needs at least three distinct vertices",
                details={"zone_id": zone.zone_id},
            )
        polygon = Polygon(zone.boundary)
        if polygon.area <= 0:
            raise ConfigurationError(
                f"Zone '{zone.zone_id}' boundary encloses no area",
                details={"zone_id": zone.zone_id},
            )
        min_lon, min_lat, max_lon, max_lat = polygon.bounds
        return (min_lon, min_lat, max_lon, max_lat)

    def __len__(self) -> int:
        return len(self._zones)

    def __contains__(self, zone_id: object) -> bool:
        return zone_id in self._by_id

    @property
    def zones(self) -> tuple[Zone, ...]:
        return self._zones

    @property
    def zone_ids(self) -> frozenset[str]:
        return frozenset(self._by_id)

    @property
    def airport_zone(self) -> Zone:
        return self._by_id[self._airport_zone_id]

    @property
    def fallback_zone(self) -> Zone:
        return self._by_id[self._fallback_zone_id]

    def is_airport(self, zone_id: str) -> bool:
        return zone_id == self._airport_zone_id

    def get_zone(self, zone_id: str) -> Zone | None:
        return self._by_id.get(zone_id)

    def require_zone(self, zone_id: str) -> Zone:
        zone = self._by_id.get(zone_id)
        if zone is None:
            raise ZoneNotFoundError(f"Zone '{zone_id}' not found", details={"zone_id": zone_id})
        return zone

    def display_name(self, zone_id: str) -> str:
        zone = self._by_id.get(zone_id)
        return zone.display_name if zone else "Unknown Zone"

    def sub_zones(self) -> list[Zone]:
        """Zones with a parent, excluding the airport, in registry order."""
        return [
            zone
            for zone in self._zones
            if zone.is_sub_zone and zone.zone_id != self._airport_zone_id
        ]

    def main_zones(self) -> list[Zone]:
        """Parentless zones other than the airport and the fallback, in registry order."""
        return [
            zone
            for zone in self._zones
            if not zone.is_sub_zone
            and zone.zone_id not in (self._airport_zone_id, self._fallback_zone_id)
        ]

    def resolve_parent_id(self, zone_id: str) -> str:
        """Family id of a zone: its parent, or itself for main zones."""
        zone = self.require_zone(zone_id)
        return zone.parent_zone_id or zone.zone_id

    def are_related(self, zone_id_a: str, zone_id_b: str) -> bool:
        """True when both zones belong to the same family."""
        parent_a = self.resolve_parent_id(zone_id_a)
        parent_b = self.resolve_parent_id(zone_id_b)
        return parent_a == parent_b or parent_a == zone_id_b or parent_b == zone_id_a

    def zone_bounds(self, zone_id: str) -> BoundingBox:
        self.require_zone(zone_id)
        return self._bounds[zone_id]

    def zone_center(self, zone_id: str) -> LonLat | None:
        zone = self._by_id.get(zone_id)
        return zone.centroid if zone else None

    @property
    def service_bounds(self) -> BoundingBox:
        return self._service_bounds

    def is_within_service_bounds(self, lat: float, lon: float) -> bool:
        return bounds_contain(self._service_bounds, lon, lat)


class ZoneLoader:
    """Builds a ZoneRegistry from a GeoJSON FeatureCollection.

    The collection carries two foreign members, ``airport_zone_id`` and
    ``fallback_zone_id``. Each feature is a Polygon whose properties hold
    ``zone_id``, ``name``, ``display_name`` and optionally ``parent_zone_id``
    and ``color``.
    """

    def __init__(self, geojson_path: Path | str):
        self.geojson_path = Path(geojson_path)
        self.registry = self._load_registry()

    def _load_registry(self) -> ZoneRegistry:
        try:
            with open(self.geojson_path) as f:
                geojson = json.load(f)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read zone file {self.geojson_path}: {e}",
                details={"path": str(self.geojson_path)},
            ) from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Zone file {self.geojson_path} is not valid JSON: {e}",
                details={"path": str(self.geojson_path)},
            ) from e

        registry = self.parse_collection(geojson)
        logger.info(f"Loaded {len(registry)} zones from {self.geojson_path}")
        return registry

    @staticmethod
    def parse_collection(geojson: dict[str, Any]) -> ZoneRegistry:
        if geojson.get("type") != "FeatureCollection":
            raise ConfigurationError(f"Expected FeatureCollection, got {geojson.get('type')}")

        zones = [ZoneLoader._parse_feature(feature) for feature in geojson.get("features", [])]
        if not zones:
            raise ConfigurationError("Zone collection contains no features")

        return ZoneRegistry(
            zones,
            airport_zone_id=geojson.get("airport_zone_id", ""),
            fallback_zone_id=geojson.get("fallback_zone_id", ""),
        )

    @staticmethod
    def _parse_feature(feature: dict[str, Any]) -> Zone:
        properties = feature.get("properties") or {}
        geometry = feature.get("geometry") or {}

        zone_id = properties.get("zone_id")
        if not zone_id:
            raise ConfigurationError("Zone feature is missing zone_id")

        if geometry.get("type") != "Polygon":
            raise ConfigurationError(
                f"Zone {zone_id}: unsupported geometry type {geometry.get('type')}",
                details={"zone_id": zone_id},
            )

        coordinates = geometry.get("coordinates") or [[]]
        outer_ring = coordinates[0]
        if not outer_ring:
            raise ConfigurationError(f"Zone {zone_id}: empty coordinates", details={"zone_id": zone_id})

        name = properties.get("name", zone_id)
        return Zone(
            zone_id=zone_id,
            name=name,
            display_name=properties.get("display_name", name),
            boundary=tuple(ZoneLoader._parse_position(zone_id, position) for position in outer_ring),
            parent_zone_id=properties.get("parent_zone_id"),
            color=properties.get("color"),
        )

    @staticmethod
    def _parse_position(zone_id: str, position: Any) -> LonLat:
        # Positions may carry a trailing altitude; only lon and lat are kept.
        if (
            not isinstance(position, (list, tuple))
            or len(position) < 2
            or not all(isinstance(value, (int, float)) for value in position[:2])
        ):
            raise ConfigurationError(
                f"Zone {zone_id}: invalid position {position!r}",
                details={"zone_id": zone_id, "position": position},
            )
        return (float(position[0]), float(position[1]))


@lru_cache(maxsize=1)
def default_registry() -> ZoneRegistry:
    """Grand Cayman zones bundled with the package."""
    resource = files("drift_pricing") / "data" / DEFAULT_ZONES_RESOURCE
    registry = ZoneLoader.parse_collection(json.loads(resource.read_text()))
    logger.info(f"Loaded {len(registry)} bundled zones from {DEFAULT_ZONES_RESOURCE}")
    return registry
