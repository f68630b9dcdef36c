"""
Distance calculation using the Haversine formula.

Used as the fallback when the Distance Matrix proxy cannot answer.  Roads
are not straight lines, so the great-circle distance is stretched by a
fixed detour factor to approximate the road distance.

Complexity: O(1) per call.
"""

import math

from .entities import Coordinate, DistanceResult

EARTH_RADIUS_KM = 6_371.0
ROAD_DETOUR_FACTOR = 1.3


def haversine_km(
    lat1: float, lng1: float, lat2: float, lng2: float
) -> float:
    """Return the great-circle distance in **km** between two points."""
    lat1_r, lat2_r = math.radians(lat1), math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)

    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlng / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(min(a, 1.0)))


def estimate_road_distance(origin: Coordinate, destination: Coordinate) -> DistanceResult:
    """Straight-line distance x ``ROAD_DETOUR_FACTOR``, flagged as estimated."""
    straight = haversine_km(origin.lat, origin.lng, destination.lat, destination.lng)
    if not math.isfinite(straight):
        raise ValueError("Cannot estimate a distance between these coordinates")
    adjusted = straight * ROAD_DETOUR_FACTOR
    return DistanceResult(
        distance_km=adjusted,
        duration_text="Estimated",
        distance_text=f"~{adjusted:.1f} km (estimated)",
        is_estimated=True,
    )
