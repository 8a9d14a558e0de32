"""
SkyDrift Utility Functions
Great-circle math, compass labels and display formatting.
"""

from math import radians, sin, cos, sqrt, atan2, degrees, floor, isfinite
from numbers import Real
from typing import Any, Optional
from .config import Constants

COMPASS_LABELS = [
    "North",
    "Northeast",
    "East",
    "Southeast",
    "South",
    "Southwest",
    "West",
    "Northwest",
]


def is_finite_number(value: Any) -> bool:
    """
    Check that a value is a real, finite number.

    Booleans are rejected even though they subclass int.

    Example:
        >>> is_finite_number(1.5)
        True
        >>> is_finite_number(float('nan'))
        False
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return isfinite(value)


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate great circle distance between two points using Haversine formula.

    Upstream positions are frequently corrupt, so any non-finite or
    non-numeric argument yields 0.0 instead of propagating NaN.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees

    Returns:
        Distance in kilometers

    Example:
        >>> round(haversine_distance(0, 0, 0, 90), 1)
        10007.5
    """
    if not all(is_finite_number(v) for v in (lat1, lon1, lat2, lon2)):
        return 0.0

    # Convert to radians
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])

    # Haversine formula
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push near-antipodal pairs just past 1
    a = min(1.0, max(0.0, a))
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return Constants.EARTH_RADIUS_KM * c


def calculate_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate bearing (direction) from point 1 to point 2.

    Returns the initial bearing (forward azimuth) from the first
    point to the second point. Note that the bearing may change
    along a great circle path.

    Args:
        lat1, lon1: Start point (degrees)
        lat2, lon2: End point (degrees)

    Returns:
        Bearing in degrees (0-360, where 0=North, 90=East, 180=South, 270=West).
        0.0 if any coordinate is not a finite number.
    """
    if not all(is_finite_number(v) for v in (lat1, lon1, lat2, lon2)):
        return 0.0

    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])

    dlon = lon2 - lon1

    x = sin(dlon) * cos(lat2)
    y = cos(lat1) * sin(lat2) - sin(lat1) * cos(lat2) * cos(dlon)

    return normalize_bearing(degrees(atan2(x, y)))


def normalize_bearing(bearing: float) -> float:
    """Fold an angle in degrees into [0, 360)."""
    bearing = (bearing + 360) % 360
    # -1e-15 + 360 rounds to exactly 360.0
    if bearing >= 360:
        bearing = 0.0
    return bearing


def compass_label(bearing: float) -> str:
    """
    Map a bearing to one of eight compass directions.

    Sectors are 45° wide and centred on the labels, so 22.5° rounds
    up to Northeast.

    Example:
        >>> compass_label(92)
        'East'
    """
    index = int(floor(bearing / 45 + 0.5)) % 8
    return COMPASS_LABELS[index]


def validate_coordinates(lat: float, lon: float) -> bool:
    """
    Validate latitude and longitude coordinates.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees

    Returns:
        True if coordinates are finite and within range

    Example:
        >>> validate_coordinates(49.3508, 8.1364)
        True
        >>> validate_coordinates(100, 200)
        False
    """
    if not (is_finite_number(lat) and is_finite_number(lon)):
        return False
    return -90 <= lat <= 90 and -180 <= lon <= 180


def format_altitude(altitude_km: Optional[float], include_feet: bool = True) -> str:
    """
    Format altitude with optional feet conversion.

    Example:
        >>> format_altitude(10)
        '10.00 km (32808 ft)'
    """
    if altitude_km is None:
        return "N/A"

    if include_feet:
        feet = altitude_km * Constants.KM_TO_FEET
        return f"{altitude_km:.2f} km ({feet:.0f} ft)"

    return f"{altitude_km:.2f} km"


def format_distance(distance_km: Optional[float]) -> str:
    """Format a distance in kilometers."""
    if distance_km is None:
        return "N/A"
    return f"{distance_km:,.1f} km"


def format_speed(speed_kmh: Optional[float]) -> str:
    """Format a speed in km/h."""
    if speed_kmh is None:
        return "N/A"
    return f"{speed_kmh:.1f} km/h"


def format_bearing(bearing: Optional[float]) -> str:
    """
    Format a bearing with its compass label.

    Example:
        >>> format_bearing(270)
        '270.0° (West)'
    """
    if bearing is None:
        return "N/A"
    return f"{bearing:.1f}° ({compass_label(bearing)})"
