from .distance import haversine_distance_miles
from .geometry import point_in_polygon, vertex_centroid
from .zone_detection import ZoneDetector
from .zones import Zone, ZoneLoader, ZoneRegistry, default_registry

__all__ = [
    "Zone",
    "ZoneLoader",
    "ZoneRegistry",
    "ZoneDetector",
    "default_registry",
    "haversine_distance_miles",
    "point_in_polygon",
    "vertex_centroid",
]
