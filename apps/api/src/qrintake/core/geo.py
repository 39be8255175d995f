"""
Geospatial helpers.

Great-circle distance and coordinate validation used by the geofence checks.
"""

import math
from numbers import Real

EARTH_RADIUS_METERS = 6_371_000


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Compute the Haversine distance in meters between two points.

    Inputs are decimal degrees and must already be valid coordinates.
    NaN inputs produce NaN.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_METERS * c


def _is_number(value: object) -> bool:
    # bool is a subclass of int
    if not isinstance(value, Real) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints too large for a float
        return False


def is_valid_coordinate(latitude: object, longitude: object) -> bool:
    """Return True if both values are finite numbers within geographic bounds."""
    if not (_is_number(latitude) and _is_number(longitude)):
        return False
    return -90 <= latitude <= 90 and -180 <= longitude <= 180  # type: ignore[operator]
