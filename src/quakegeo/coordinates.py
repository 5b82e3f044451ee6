"""
Physical constants and coordinate domain checks.

Latitude is limited to [-90°, 90°]. Longitude may span [-180°, 360°] so that
geometry straddling the antimeridian can be expressed without wrapping.
Depth is in kilometres, positive down.
"""

import math
from typing import Optional, Tuple

from .errors import RangeError

# Mean earth radius in kilometres
EARTH_RADIUS_MEAN = 6371.0072

# Angular tolerance (radians) ~1 mm at the equator
TOLERANCE = 1e-12

LAT_RANGE = (-90.0, 90.0)
LON_RANGE = (-180.0, 360.0)

TO_RADIANS = math.pi / 180.0
TO_DEGREES = 180.0 / math.pi
TWO_PI = 2.0 * math.pi


def _check_range(value: float, bounds: Tuple[float, float], name: str) -> float:
    if not math.isfinite(value):
        raise RangeError(f"{name} must be finite, got {value}")
    low, high = bounds
    if value < low or value > high:
        raise RangeError(f"{name} {value} is outside [{low}, {high}]")
    return value


def check_latitude(latitude: float) -> float:
    """Return ``latitude`` as a float, raising RangeError if out of range."""
    return _check_range(float(latitude), LAT_RANGE, "Latitude")


def check_longitude(longitude: float) -> float:
    """Return ``longitude`` as a float, raising RangeError if out of range."""
    return _check_range(float(longitude), LON_RANGE, "Longitude")


def check_depth(
    depth: float, depth_range: Optional[Tuple[float, float]] = None
) -> float:
    """
    Validate a depth value.

    Args:
        depth: Depth in km (positive down)
        depth_range: Optional (min, max) bounds in km. When omitted only
            finiteness is checked.

    Returns:
        The depth as a float

    Raises:
        RangeError: If depth is non-finite or outside ``depth_range``
    """
    depth = float(depth)
    if depth_range is None:
        if not math.isfinite(depth):
            raise RangeError(f"Depth must be finite, got {depth}")
        return depth
    return _check_range(depth, depth_range, "Depth")


def degrees_lat_per_km(point) -> float:
    """Degrees of latitude spanned by one km at the depth of ``point``."""
    return TO_DEGREES / (EARTH_RADIUS_MEAN - point.depth)


def degrees_lon_per_km(point) -> float:
    """Degrees of longitude spanned by one km at the latitude and depth of ``point``."""
    return TO_DEGREES / ((EARTH_RADIUS_MEAN - point.depth) * math.cos(point.lat_rad))
