"""
Distance calculation using the Haversine formula.

Assumption
----------
Flying taxis travel in a straight line, so the great-circle distance
between pickup and dropoff is the trip distance.  No routing over air
corridors is attempted.

Known limitation
----------------
Coordinates outside [-90, 90] / [-180, 180] are not rejected here; they
produce a NaN or meaningless distance.  Range checks belong to the API
schemas.

Complexity: O(1) per call.
"""

import math

from .entities import GeoPoint

EARTH_RADIUS_KM = 6_371.0


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """Return the great-circle distance in **km** between two points."""
    lat1_r, lat2_r = math.radians(a.lat), math.radians(b.lat)
    dlat = math.radians(b.lat - a.lat)
    dlng = math.radians(b.lng - a.lng)

    h = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlng / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))
