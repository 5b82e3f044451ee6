"""
Axis-aligned geographic bounding box.
"""

from typing import TYPE_CHECKING, List, NamedTuple

from shapely.geometry import Polygon

from .point import Point
from .shapely_utils import bounds_to_polygon

if TYPE_CHECKING:
    from .sequence import PointSequence


class BoundingBox(NamedTuple):
    """
    Rectangle (in degree space) spanned by a lower-left and upper-right point.

    Corners always have zero depth. The type does not check that ``min`` is
    actually south-west of ``max``; whoever builds the box is responsible
    for that (see :func:`quakegeo.geometry.bounds`).
    """

    min: Point
    max: Point

    @classmethod
    def from_extents(
        cls, min_lat: float, min_lon: float, max_lat: float, max_lon: float
    ) -> "BoundingBox":
        """Create a box from latitude and longitude extents in degrees."""
        return cls(Point(min_lat, min_lon), Point(max_lat, max_lon))

    def to_sequence(self) -> "PointSequence":
        """
        Return the box as a closed sequence of five points, starting at
        ``min`` and winding counter-clockwise.
        """
        from .sequence import PointSequence

        return PointSequence(
            [
                self.min,
                Point(self.min.latitude, self.max.longitude),
                self.max,
                Point(self.max.latitude, self.min.longitude),
                self.min,
            ]
        )

    def to_array(self) -> List[float]:
        """Return ``[min.longitude, min.latitude, max.longitude, max.latitude]``."""
        return [
            self.min.longitude,
            self.min.latitude,
            self.max.longitude,
            self.max.latitude,
        ]

    def to_polygon(self) -> Polygon:
        """Return the box as a shapely Polygon in (lon, lat) coordinates."""
        return bounds_to_polygon(self)

    def contains(self, point: Point) -> bool:
        """Check whether ``point`` lies inside or on the edge of this box."""
        return (
            self.min.latitude <= point.latitude <= self.max.latitude
            and self.min.longitude <= point.longitude <= self.max.longitude
        )

    def __str__(self) -> str:
        return str(self.to_array())
