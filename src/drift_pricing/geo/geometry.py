"""Planar polygon helpers operating on (lon, lat) vertex lists.

Points on a polygon edge may classify either way under ray casting. Zone
boundaries are drawn with enough margin that this does not matter for
pricing, so no special handling is attempted.
"""

from collections.abc import Sequence

LonLat = tuple[float, float]
BoundingBox = tuple[float, float, float, float]


def point_in_polygon(lon: float, lat: float, polygon: Sequence[LonLat]) -> bool:
    """Ray-casting containment test.

    Casts a horizontal ray from the point and counts edge crossings; an odd
    count means the point is inside. The polygon is treated as closed, so the
    last vertex connects back to the first whether or not it is repeated.

    Args:
        lon: Longitude of the test point
        lat: Latitude of the test point
        polygon: Ordered (lon, lat) vertices

    Returns:
        True if the point is inside the polygon
    """
    inside = False
    j = len(polygon) - 1

    for i in range(len(polygon)):
        xi, yi = polygon[i]
        xj, yj = polygon[j]

        if (yi > lat) != (yj > lat):
            x_cross = (xj - xi) * (lat - yi) / (yj - yi) + xi
            if lon < x_cross:
                inside = not inside

        j = i

    return inside


def vertex_centroid(polygon: Sequence[LonLat]) -> LonLat:
    """Arithmetic mean of the vertices, used for map labels only."""
    if not polygon:
        raise ValueError("Cannot calculate centroid of empty polygon")

    lon_sum = sum(vertex[0] for vertex in polygon)
    lat_sum = sum(vertex[1] for vertex in polygon)
    count = len(polygon)

    return (lon_sum / count, lat_sum / count)


def merge_bounds(boxes: Sequence[BoundingBox]) -> BoundingBox:
    """Smallest (min_lon, min_lat, max_lon, max_lat) box enclosing all boxes."""
    if not boxes:
        raise ValueError("Cannot merge an empty set of bounding boxes")

    return (
        min(box[0] for box in boxes),
        min(box[1] for box in boxes),
        max(box[2] for box in boxes),
        max(box[3] for box in boxes),
    )


def bounds_contain(bounds: BoundingBox, lon: float, lat: float) -> bool:
    min_lon, min_lat, max_lon, max_lat = bounds
    return min_lon <= lon <= max_lon and min_lat <= lat <= max_lat
