#!/usr/bin/env python3
"""
Geometry and distance calculation utilities on a spherical earth.

Public functions take and return degrees and kilometres except where a name
ends in ``_rad``. Each distance has an exact spherical version and a ``_fast``
planar approximation. The fast versions scale longitude by the cosine of a
mean latitude, so they are only good at short range and break silently
across the ±180° meridian.

See the Aviation Formulary (http://williams.best.vwh.net/avform.htm) and
Movable Type Scripts (http://www.movable-type.co.uk/scripts/latlong.html)
for derivations.
"""

from typing import Iterable, Sequence
import logging
import math

from .bounds import BoundingBox
from .coordinates import (
    EARTH_RADIUS_MEAN,
    LAT_RANGE,
    LON_RANGE,
    TO_DEGREES,
    TOLERANCE,
    TWO_PI,
)
from .errors import EmptyCollectionError, RangeError
from .point import Point
from .vector import Vector

logger = logging.getLogger(__name__)


def angle(p1: Point, p2: Point) -> float:
    """
    Calculate the angle between two points using the haversine formula.

    This is valid everywhere, including across the antimeridian. ``atan2`` of
    two roots is used rather than ``asin``/``acos`` to keep precision near
    coincident and antipodal points.

    Args:
        p1: First point
        p2: Second point

    Returns:
        Angular separation in radians
    """
    sin_dlat_by2 = math.sin((p2.lat_rad - p1.lat_rad) / 2.0)
    sin_dlon_by2 = math.sin((p2.lon_rad - p1.lon_rad) / 2.0)
    # half length of chord connecting points
    c = sin_dlat_by2 * sin_dlat_by2 + (
        math.cos(p1.lat_rad) * math.cos(p2.lat_rad) * sin_dlon_by2 * sin_dlon_by2
    )
    c = min(c, 1.0)
    return 2.0 * math.atan2(math.sqrt(c), math.sqrt(1.0 - c))


def horz_distance(p1: Point, p2: Point) -> float:
    """Great-circle distance in km between two points, ignoring depth."""
    return EARTH_RADIUS_MEAN * angle(p1, p2)


def horz_distance_fast(p1: Point, p2: Point) -> float:
    """
    Approximate horizontal distance in km using a flat-earth formula.

    Longitude difference is scaled by the cosine of the mean latitude. Error
    grows with separation and latitude; results are wrong for points that
    straddle the antimeridian.
    """
    d_lat = p1.lat_rad - p2.lat_rad
    d_lon = (p1.lon_rad - p2.lon_rad) * math.cos((p1.lat_rad + p2.lat_rad) * 0.5)
    return EARTH_RADIUS_MEAN * math.sqrt(d_lat * d_lat + d_lon * d_lon)


def vert_distance(p1: Point, p2: Point) -> float:
    """Signed vertical distance ``p2.depth - p1.depth`` in km (positive down)."""
    return p2.depth - p1.depth


def linear_distance(p1: Point, p2: Point) -> float:
    """
    Straight-line (chord) distance in km between two points at depth.

    Each point's radius is reduced by its depth before applying the law of
    cosines, so this is accurate at any separation.
    """
    alpha = angle(p1, p2)
    r1 = EARTH_RADIUS_MEAN - p1.depth
    r2 = EARTH_RADIUS_MEAN - p2.depth
    b = r1 * math.sin(alpha)
    c = r2 - r1 * math.cos(alpha)
    return math.sqrt(b * b + c * c)


def linear_distance_fast(p1: Point, p2: Point) -> float:
    """Pythagorean combination of :func:`horz_distance_fast` and depth difference."""
    h = horz_distance_fast(p1, p2)
    v = vert_distance(p1, p2)
    return math.sqrt(h * h + v * v)


def is_pole(point: Point) -> bool:
    """Check whether ``point`` is within tolerance of either pole."""
    return math.cos(point.lat_rad) < TOLERANCE


def azimuth_rad(p1: Point, p2: Point) -> float:
    """
    Calculate the forward azimuth (bearing) from p1 to p2.

    At a pole every direction is south (north pole) or north (south pole), so
    pi or 0 is returned respectively. Note that ``azimuth_rad(p2, p1)`` is not
    in general ``azimuth_rad(p1, p2) + pi``.

    Args:
        p1: Start point
        p2: End point

    Returns:
        Azimuth in radians in the range [0, 2*pi), clockwise from north
    """
    if is_pole(p1):
        return math.pi if p1.lat_rad > 0 else 0.0
    d_lon = p2.lon_rad - p1.lon_rad
    cos_lat2 = math.cos(p2.lat_rad)
    az_rad = math.atan2(
        math.sin(d_lon) * cos_lat2,
        math.cos(p1.lat_rad) * math.sin(p2.lat_rad)
        - math.sin(p1.lat_rad) * cos_lat2 * math.cos(d_lon),
    )
    return (az_rad + TWO_PI) % TWO_PI


def azimuth(p1: Point, p2: Point) -> float:
    """Forward azimuth from p1 to p2 in degrees in the range [0, 360)."""
    return azimuth_rad(p1, p2) * TO_DEGREES


def _normalize_longitude(lon: float) -> float:
    # projection can step just past either end of the supported range
    if lon < LON_RANGE[0]:
        return lon + 360.0
    if lon > LON_RANGE[1]:
        return lon - 360.0
    return lon


def _project(
    lon: float, lat: float, depth: float, az: float, d_h: float, d_v: float
) -> Point:
    # radians and km in, degrees out
    sin_lat1 = math.sin(lat)
    cos_lat1 = math.cos(lat)
    ad = d_h / EARTH_RADIUS_MEAN
    sin_d = math.sin(ad)
    cos_d = math.cos(ad)
    sin_lat2 = sin_lat1 * cos_d + cos_lat1 * sin_d * math.cos(az)
    lat2 = math.asin(max(-1.0, min(1.0, sin_lat2)))
    lon2 = lon + math.atan2(
        math.sin(az) * sin_d * cos_lat1, cos_d - sin_lat1 * math.sin(lat2)
    )
    lat_deg = max(LAT_RANGE[0], min(LAT_RANGE[1], lat2 * TO_DEGREES))
    lon_deg = _normalize_longitude(lon2 * TO_DEGREES)
    return Point(lat_deg, lon_deg, depth + d_v)


def location(point: Point, azimuth: float, distance: float) -> Point:
    """
    Project a point along a great circle.

    This is the approximate inverse of :func:`azimuth_rad` combined with
    :func:`horz_distance`. Depth is unchanged.

    Args:
        point: Start point
        azimuth: Direction of travel in radians
        distance: Distance to travel in km

    Returns:
        The point reached
    """
    return _project(point.lon_rad, point.lat_rad, point.depth, azimuth, distance, 0.0)


def translate(point: Point, vector: Vector) -> Point:
    """Move a point by a vector, applying its horizontal and vertical components."""
    return _project(
        point.lon_rad,
        point.lat_rad,
        point.depth,
        vector.azimuth,
        vector.horizontal,
        vector.vertical,
    )


def distance_to_line(p1: Point, p2: Point, p3: Point) -> float:
    """
    Signed cross-track distance from p3 to the great circle through p1 and p2.

    Positive values lie to the right of the line walking from p1 towards p2.
    Accurate at all scales but markedly slower than
    :func:`distance_to_line_fast`.

    Returns:
        Distance in km
    """
    ad13 = angle(p1, p3)
    d_az = azimuth_rad(p1, p3) - azimuth_rad(p1, p2)
    xtd = math.asin(math.sin(ad13) * math.sin(d_az))
    return 0.0 if abs(xtd) < TOLERANCE else xtd * EARTH_RADIUS_MEAN


def _scaled_offsets(p1: Point, p2: Point, p3: Point):
    # p1 moved to the origin, longitude scaled by a latitude weighted toward p3
    lon_scale = math.cos(0.5 * p3.lat_rad + 0.25 * p1.lat_rad + 0.25 * p2.lat_rad)
    x2 = (p2.lon_rad - p1.lon_rad) * lon_scale
    y2 = p2.lat_rad - p1.lat_rad
    x3 = (p3.lon_rad - p1.lon_rad) * lon_scale
    y3 = p3.lat_rad - p1.lat_rad
    return x2, y2, x3, y3


def distance_to_line_fast(p1: Point, p2: Point, p3: Point) -> float:
    """
    Planar approximation of :func:`distance_to_line`, with the same sign convention.

    If p1 and p2 coincide there is no line, and the unsigned distance from
    p3 to p1 is returned.
    """
    x2, y2, x3, y3 = _scaled_offsets(p1, p2, p3)
    norm = math.sqrt(x2 * x2 + y2 * y2)
    if norm == 0.0:
        return math.hypot(x3, y3) * EARTH_RADIUS_MEAN
    return (x3 * y2 - x2 * y3) / norm * EARTH_RADIUS_MEAN


def distance_to_segment(p1: Point, p2: Point, p3: Point) -> float:
    """
    Calculate the distance from p3 to the great-circle segment p1-p2.

    When the projection of p3 onto the line falls beyond either end of the
    segment, the distance to the nearer endpoint is returned instead.

    Returns:
        Unsigned distance in km
    """
    ad13 = angle(p1, p3)
    d_az = azimuth_rad(p1, p3) - azimuth_rad(p1, p2)
    xtd = math.asin(math.sin(ad13) * math.sin(d_az))
    cos_xtd = math.cos(xtd)
    ratio = math.cos(ad13) / cos_xtd if cos_xtd != 0.0 else 1.0
    atd = math.acos(max(-1.0, min(1.0, ratio))) * EARTH_RADIUS_MEAN
    if atd > horz_distance(p1, p2):
        return horz_distance(p2, p3)
    if math.cos(d_az) < 0:
        return horz_distance(p1, p3)
    return 0.0 if abs(xtd) < TOLERANCE else abs(xtd) * EARTH_RADIUS_MEAN


def distance_to_segment_fast(p1: Point, p2: Point, p3: Point) -> float:
    """Planar approximation of :func:`distance_to_segment`."""
    x2, y2, x3, y3 = _scaled_offsets(p1, p2, p3)
    seg_len_sq = x2 * x2 + y2 * y2
    if seg_len_sq == 0.0:
        return math.hypot(x3, y3) * EARTH_RADIUS_MEAN
    t = (x3 * x2 + y3 * y2) / seg_len_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(x3 - t * x2, y3 - t * y2) * EARTH_RADIUS_MEAN


def plunge(p1: Point, p2: Point) -> float:
    """Plunge in radians of the vector from p1 to p2, positive down."""
    return Vector.between(p1, p2).plunge()


def bisect(p1: Point, p2: Point, p3: Point) -> Vector:
    """
    Unit vector at p2 whose azimuth is the mean of the azimuths to p1 and p3.

    Useful for the miter direction at a corner of a trace.
    """
    v1 = Vector.between(p2, p1)
    v2 = Vector.between(p2, p3)
    az = (v2.azimuth + v1.azimuth) / 2.0
    return Vector(az, 1.0, 0.0)


def are_similar(p1: Point, p2: Point) -> bool:
    """Check whether longitude, latitude and depth all agree within tolerance."""
    return (
        math.isclose(p1.longitude, p2.longitude, rel_tol=0.0, abs_tol=TOLERANCE)
        and math.isclose(p1.latitude, p2.latitude, rel_tol=0.0, abs_tol=TOLERANCE)
        and math.isclose(p1.depth, p2.depth, rel_tol=0.0, abs_tol=TOLERANCE)
    )


def bounds(points: Iterable[Point]) -> BoundingBox:
    """
    Compute the bounding box of some points in one pass.

    Longitude is not treated as circular; callers holding data that spans
    the antimeridian should shift longitudes into [0, 360] first.

    Raises:
        EmptyCollectionError: If ``points`` is empty
    """
    min_lon = math.inf
    max_lon = -math.inf
    min_lat = math.inf
    max_lat = -math.inf
    count = 0
    for p in points:
        min_lon = min(min_lon, p.longitude)
        max_lon = max(max_lon, p.longitude)
        min_lat = min(min_lat, p.latitude)
        max_lat = max(max_lat, p.latitude)
        count += 1
    if count == 0:
        raise EmptyCollectionError("Cannot compute bounds of no points")
    return BoundingBox.from_extents(min_lat, min_lon, max_lat, max_lon)


def centroid(points: Iterable[Point]) -> Point:
    """
    Arithmetic mean of latitude, longitude and depth.

    This is not a geodesic centroid and is only meaningful for compact
    clusters away from the antimeridian.

    Raises:
        EmptyCollectionError: If ``points`` is empty
    """
    c_lon = 0.0
    c_lat = 0.0
    c_depth = 0.0
    size = 0
    for p in points:
        c_lon += p.longitude
        c_lat += p.latitude
        c_depth += p.depth
        size += 1
    if size == 0:
        raise EmptyCollectionError("Cannot compute centroid of no points")
    return Point(c_lat / size, c_lon / size, c_depth / size)


def closest_point(point: Point, points: Sequence[Point]) -> Point:
    """Return the member of ``points`` nearest ``point`` by fast horizontal distance."""
    r_min = math.inf
    closest = points[0]
    for p in points:
        r = horz_distance_fast(point, p)
        if r < r_min:
            r_min = r
            closest = p
    return closest


def min_distance_to_points(point: Point, points: Iterable[Point]) -> float:
    """Fast horizontal distance in km from ``point`` to the nearest of ``points``."""
    return min((horz_distance_fast(point, p) for p in points), default=math.inf)


def min_distance_to_line(point: Point, line: Sequence[Point]) -> float:
    """
    Fast distance in km from ``point`` to a polyline.

    A single-point line degrades to the distance to that point.
    """
    if len(line) == 1:
        return horz_distance_fast(point, line[0])
    return min(
        distance_to_segment_fast(line[i], line[i + 1], point)
        for i in range(len(line) - 1)
    )


def min_distance_index(point: Point, line: Sequence[Point]) -> int:
    """
    Index of the polyline segment nearest ``point`` by fast segment distance.

    Segment ``i`` joins ``line[i]`` and ``line[i + 1]``.

    Raises:
        RangeError: If ``line`` has fewer than two points
    """
    if len(line) < 2:
        raise RangeError("A line needs at least two points to have segments")
    min_dist = math.inf
    min_index = -1
    for i in range(len(line) - 1):
        dist = distance_to_segment_fast(line[i], line[i + 1], point)
        if dist < min_dist:
            min_dist = dist
            min_index = i
    return min_index
