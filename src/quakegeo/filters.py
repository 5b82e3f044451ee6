"""
Spatial predicates for selecting points near an origin.

A rectangle check in degree space is far cheaper than a distance
calculation, so :class:`RectangleAndDistanceFilter` uses it to reject most
candidates before measuring distance.
"""

from typing import NamedTuple

from .coordinates import LAT_RANGE, LON_RANGE, degrees_lat_per_km, degrees_lon_per_km
from .geometry import horz_distance_fast
from .point import Point


class Rectangle(NamedTuple):
    """Half-open degree-space rectangle: ``min <= value < max`` on each axis."""

    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    def contains(self, longitude: float, latitude: float) -> bool:
        return (
            self.min_lon <= longitude < self.max_lon
            and self.min_lat <= latitude < self.max_lat
        )


def rectangle(origin: Point, distance: float) -> Rectangle:
    """
    Build a rectangle centred on ``origin`` extending ``distance`` km each way.

    The km-to-degree conversion uses the latitude and depth of the origin.
    Edges are clamped to the valid longitude and latitude ranges.
    """
    d_lon = distance * degrees_lon_per_km(origin)
    d_lat = distance * degrees_lat_per_km(origin)
    return Rectangle(
        max(origin.longitude - d_lon, LON_RANGE[0]),
        max(origin.latitude - d_lat, LAT_RANGE[0]),
        min(origin.longitude + d_lon, LON_RANGE[1]),
        min(origin.latitude + d_lat, LAT_RANGE[1]),
    )


class DistanceFilter:
    """Accepts points within ``distance`` km (fast horizontal) of ``origin``."""

    def __init__(self, origin: Point, distance: float):
        self.origin = origin
        self.distance = distance

    def __call__(self, point: Point) -> bool:
        return horz_distance_fast(self.origin, point) <= self.distance

    def filter_info(self) -> str:
        return f"[origin: {self.origin}, distance: {self.distance}]"

    def __repr__(self) -> str:
        return f"DistanceFilter {self.filter_info()}"


class RectangleFilter:
    """Accepts points inside the degree-space box around ``origin``."""

    def __init__(self, origin: Point, distance: float):
        self.rect = rectangle(origin, distance)

    def __call__(self, point: Point) -> bool:
        return self.rect.contains(point.longitude, point.latitude)

    def __repr__(self) -> str:
        return f"RectangleFilter {tuple(self.rect)}"


class RectangleAndDistanceFilter:
    """Rectangle pre-check followed by the distance check."""

    def __init__(self, origin: Point, distance: float):
        self.rect_filter = RectangleFilter(origin, distance)
        self.dist_filter = DistanceFilter(origin, distance)

    def __call__(self, point: Point) -> bool:
        return self.rect_filter(point) and self.dist_filter(point)

    def __repr__(self) -> str:
        return f"RectangleAndDistanceFilter {self.dist_filter.filter_info()}"


def distance_filter(origin: Point, distance: float) -> DistanceFilter:
    """Predicate that is true for points within ``distance`` km of ``origin``."""
    return DistanceFilter(origin, distance)


def rectangle_filter(origin: Point, distance: float) -> RectangleFilter:
    """Predicate that is true for points inside the box around ``origin``."""
    return RectangleFilter(origin, distance)


def distance_and_rectangle_filter(
    origin: Point, distance: float
) -> RectangleAndDistanceFilter:
    """Predicate combining a rectangle pre-filter with a distance check."""
    return RectangleAndDistanceFilter(origin, distance)
