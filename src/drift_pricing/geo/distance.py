"""Straight-line trip length for quotes shown before a route is available."""

import math

EARTH_RADIUS_MILES = 3958.8


def haversine_distance_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two (lat, lon) points, rounded to 0.1 mile."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    half_dphi = math.radians(lat2 - lat1) / 2
    half_dlambda = math.radians(lon2 - lon1) / 2

    h = math.sin(half_dphi) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(half_dlambda) ** 2
    # Clamp rounding noise for near-antipodal points
    central_angle = 2 * math.asin(math.sqrt(min(h, 1.0)))

    return round(EARTH_RADIUS_MILES * central_angle, 1)
