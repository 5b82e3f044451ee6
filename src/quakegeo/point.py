#!/usr/bin/env python3
"""
Immutable geographic point with depth.

Constructors take arguments in ``(latitude, longitude, depth)`` order while
the text form is ``longitude,latitude,depth`` to match KML, GeoJSON and other
plotting formats that use ``x,y,z`` order.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple
import logging

from .coordinates import (
    TO_RADIANS,
    check_depth,
    check_latitude,
    check_longitude,
)
from .errors import FieldCountError, FormatError

logger = logging.getLogger(__name__)

POINT_FORMAT = "{:.5f},{:.5f},{:.5f}"


@dataclass(frozen=True)
class Point:
    """
    A point on the earth's surface at some depth.

    Latitude and longitude are decimal degrees, depth is km positive down.
    Radian forms of latitude and longitude are derived once at construction.
    Points sort by latitude, then longitude; depth does not affect ordering,
    so points differing only in depth are neither less nor greater.
    """

    latitude: float
    longitude: float
    depth: float = 0.0
    lat_rad: float = field(init=False, repr=False, compare=False)
    lon_rad: float = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        latitude = check_latitude(self.latitude)
        longitude = check_longitude(self.longitude)
        depth = check_depth(self.depth)
        object.__setattr__(self, "latitude", latitude)
        object.__setattr__(self, "longitude", longitude)
        object.__setattr__(self, "depth", depth)
        object.__setattr__(self, "lat_rad", latitude * TO_RADIANS)
        object.__setattr__(self, "lon_rad", longitude * TO_RADIANS)

    @classmethod
    def create(
        cls,
        latitude: float,
        longitude: float,
        depth: float = 0.0,
        depth_range: Optional[Tuple[float, float]] = None,
    ) -> "Point":
        """
        Create a point, optionally restricting depth to an accepted range.

        Args:
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees
            depth: Depth in km (positive down)
            depth_range: Optional (min, max) depth bounds in km

        Returns:
            A new Point

        Raises:
            RangeError: If any value is non-finite or out of range
        """
        check_depth(depth, depth_range)
        return cls(latitude, longitude, depth)

    def _sort_key(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)

    def __lt__(self, other: "Point") -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __le__(self, other: "Point") -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: "Point") -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: "Point") -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self._sort_key() >= other._sort_key()

    def __str__(self) -> str:
        return format_point(self)


def format_point(point: Point) -> str:
    """Format a point as ``lon,lat,depth`` with 5 decimal places."""
    return POINT_FORMAT.format(point.longitude, point.latitude, point.depth)


def parse_point(
    text: str, depth_range: Optional[Tuple[float, float]] = None
) -> Point:
    """
    Parse a ``lon,lat,depth`` tuple.

    Whitespace around fields and empty fields are ignored, as are any fields
    beyond the third. This is the inverse of :func:`format_point`.

    Args:
        text: Comma-separated coordinate tuple
        depth_range: Optional (min, max) depth bounds in km

    Returns:
        The parsed Point

    Raises:
        FormatError: If a field is not a number
        FieldCountError: If fewer than three fields are present
        RangeError: If a parsed value is out of range
    """
    fields = [f.strip() for f in text.split(",")]
    fields = [f for f in fields if f]
    if len(fields) < 3:
        raise FieldCountError(
            f"Expected lon,lat,depth but found {len(fields)} field(s) in {text!r}"
        )
    try:
        lon, lat, depth = (float(f) for f in fields[:3])
    except ValueError as e:
        raise FormatError(f"Unparseable coordinate tuple {text!r}: {e}") from e
    return Point.create(lat, lon, depth, depth_range)
