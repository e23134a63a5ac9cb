"""Great-circle distance between two coordinate pairs."""

import math

from trial_finder.constants import EARTH_RADIUS_MILES


def distance_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> int:
    """Haversine distance in miles, rounded to the nearest whole mile."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return round(EARTH_RADIUS_MILES * c)
