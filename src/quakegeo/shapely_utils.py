"""
Utility functions for handing point geometry to Shapely.

Renderers and spatial-index code generally want Shapely objects in plain
(longitude, latitude) degree space. No projection is applied here.
"""

from typing import List, Tuple

from shapely.geometry import LineString, Polygon, box


def points_to_coords(points) -> List[Tuple[float, float]]:
    """Convert an iterable of points to a list of (longitude, latitude) tuples."""
    return [(p.longitude, p.latitude) for p in points]


def coords_to_polyline(coord_tuples: List[Tuple[float, float]]) -> LineString:
    """
    Convert a list of coordinate tuples to a Shapely LineString.

    Args:
        coord_tuples: List of (longitude, latitude) tuples

    Returns:
        LineString object in geographic coordinates

    Raises:
        ValueError: If coord_tuples is empty or has less than 2 points
    """
    if not coord_tuples or len(coord_tuples) < 2:
        raise ValueError("At least two positions are required to create a LineString.")
    return LineString(coord_tuples)


def coords_to_polygon(coord_tuples: List[Tuple[float, float]]) -> Polygon:
    """
    Convert a list of coordinate tuples to a closed Shapely Polygon.

    The ring is closed implicitly, so the last tuple need not repeat the first.

    Args:
        coord_tuples: List of (longitude, latitude) tuples

    Returns:
        Polygon object in geographic coordinates

    Raises:
        ValueError: If fewer than three distinct vertices are supplied
    """
    if coord_tuples and len(coord_tuples) > 1 and coord_tuples[0] == coord_tuples[-1]:
        coord_tuples = coord_tuples[:-1]
    if len(coord_tuples) < 3:
        raise ValueError("At least three positions are required to create a Polygon.")
    return Polygon(coord_tuples)


def bounds_to_polygon(bounds) -> Polygon:
    """Convert a bounding box to a rectangular Shapely Polygon."""
    return box(
        bounds.min.longitude,
        bounds.min.latitude,
        bounds.max.longitude,
        bounds.max.latitude,
    )
