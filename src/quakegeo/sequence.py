#!/usr/bin/env python3
"""
Immutable ordered sequences of points, such as fault traces.
"""

from typing import Iterable, Iterator, List, Optional, Tuple
import logging
import math

from shapely.geometry import LineString, Polygon

from . import geometry
from .bounds import BoundingBox
from .errors import EmptyCollectionError, RangeError
from .point import Point, format_point, parse_point
from .shapely_utils import coords_to_polygon, coords_to_polyline, points_to_coords
from .vector import Vector

logger = logging.getLogger(__name__)


def _check_positive(value: float, name: str) -> float:
    if not (math.isfinite(value) and value > 0.0):
        raise RangeError(f"{name} must be a positive, finite number, got {value}")
    return value


class PointSequence:
    """
    An ordered, immutable, non-empty list of points.

    Duplicate points are allowed. Every derived operation returns a new
    sequence; the points themselves are shared, never copied.
    """

    __slots__ = ("_points",)

    def __init__(self, points: Iterable[Point]):
        """Initializes a PointSequence.

        Args:
            points: The points, in order.

        Raises:
            EmptyCollectionError: If ``points`` is empty.
            TypeError: If any member is not a Point.
        """
        points = tuple(points)
        if not points:
            raise EmptyCollectionError("PointSequence may not be empty")
        for i, p in enumerate(points):
            if not isinstance(p, Point):
                raise TypeError(f"Item {i} is {type(p).__name__}, not Point")
        object.__setattr__(self, "_points", points)

    @classmethod
    def _wrap(cls, points: Tuple[Point, ...]) -> "PointSequence":
        # trusted, already validated tuple
        seq = cls.__new__(cls)
        object.__setattr__(seq, "_points", points)
        return seq

    @classmethod
    def of(cls, points: Iterable[Point]) -> "PointSequence":
        """Return ``points`` unchanged if already a PointSequence, else wrap it."""
        if isinstance(points, PointSequence):
            return points
        return cls(points)

    def __setattr__(self, name, value):
        raise AttributeError("PointSequence is immutable")

    def __delattr__(self, name):
        raise AttributeError("PointSequence is immutable")

    def __len__(self) -> int:
        """Return number of points in the sequence."""
        return len(self._points)

    def __getitem__(self, index):
        """Allow indexing; slices return a new PointSequence."""
        if isinstance(index, slice):
            return PointSequence(self._points[index])
        return self._points[index]

    def __iter__(self) -> Iterator[Point]:
        """Allow iteration over points."""
        return iter(self._points)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PointSequence):
            return NotImplemented
        return self._points == other._points

    def __hash__(self) -> int:
        return hash(self._points)

    def __repr__(self) -> str:
        return f"PointSequence({list(self._points)!r})"

    def __str__(self) -> str:
        return format_points(self)

    def first(self) -> Point:
        return self._points[0]

    def last(self) -> Point:
        return self._points[-1]

    def length(self) -> float:
        """
        Horizontal length in km, summing the fast distance between consecutive
        points. Depth is ignored. Zero for a single point.
        """
        return sum(self.distances())

    def distances(self) -> List[float]:
        """Fast horizontal length in km of each of the ``n - 1`` segments."""
        pts = self._points
        return [
            geometry.horz_distance_fast(pts[i], pts[i + 1])
            for i in range(len(pts) - 1)
        ]

    def depth(self) -> float:
        """Mean depth of the points in km."""
        return sum(p.depth for p in self._points) / len(self._points)

    def bounds(self) -> BoundingBox:
        """Bounding box of the points."""
        return geometry.bounds(self._points)

    def reverse(self) -> "PointSequence":
        """Return a new sequence with the order reversed."""
        return PointSequence._wrap(self._points[::-1])

    def translate(self, vector: Vector) -> "PointSequence":
        """
        Move every point by ``vector``.

        Each point is projected independently, so this is not a rigid
        translation: a fixed azimuth points in different directions at
        different places on a sphere.
        """
        return PointSequence._wrap(
            tuple(geometry.translate(p, vector) for p in self._points)
        )

    def partition(self, length: float) -> List["PointSequence"]:
        """
        Split this sequence into contiguous parts of roughly equal length.

        The number of parts is the nearest integer to ``self.length() /
        length``, so parts can be somewhat longer or shorter than ``length``.
        Each part begins with the last point of the previous one. If the final
        original segment would leave a trailing part shorter than 1.5 part
        lengths, it is folded into the preceding part instead.

        Args:
            length: Target part length in km

        Returns:
            List of PointSequences; ``[self]`` if this sequence is not longer
            than ``length``

        Raises:
            RangeError: If ``length`` is not positive and finite
        """
        _check_positive(length, "Length")
        total_length = self.length()
        if total_length <= length:
            logger.debug(
                f"Sequence length {total_length:.3f} km <= {length} km; not partitioning"
            )
            return [self]

        partition_length = total_length / round(total_length / length)
        logger.debug(
            f"Partitioning {total_length:.3f} km into {partition_length:.3f} km parts"
        )

        distances = self.distances()
        last_segment = len(distances) - 1
        partitions: List[PointSequence] = []
        builder = PointSequenceBuilder()
        residual = 0.0
        for i, segment_length in enumerate(distances):
            start = self._points[i]
            builder.add(start)
            distance = segment_length + residual
            while partition_length < distance:
                # On the last segment avoid leaving a final part of length ~0
                if i == last_segment and distance < 1.5 * partition_length:
                    break
                az = geometry.azimuth_rad(start, self._points[i + 1])
                end = geometry.location(start, az, partition_length - residual)
                builder.add(end)
                partitions.append(builder.build())
                builder = PointSequenceBuilder()
                builder.add(end)
                start = end
                distance -= partition_length
                residual = 0.0
            residual = distance
        builder.add(self.last())
        partitions.append(builder.build())
        logger.debug(f"Created {len(partitions)} partitions")
        return partitions

    def resample(self, spacing: float) -> "PointSequence":
        """
        Resample to evenly spaced points no farther apart than ``spacing``.

        The spacing actually used is ``self.length() / ceil(self.length() /
        spacing)``. Interior vertices that do not fall on the new spacing are
        dropped, so corners may be cut at large spacings. The first and last
        points are preserved exactly.

        Args:
            spacing: Maximum point spacing in km

        Returns:
            A new PointSequence; ``self`` if this sequence is not longer than
            ``spacing``

        Raises:
            RangeError: If ``spacing`` is not positive and finite
        """
        _check_positive(spacing, "Spacing")
        total_length = self.length()
        if total_length <= spacing:
            logger.debug(
                f"Sequence length {total_length:.3f} km <= {spacing} km; not resampling"
            )
            return self

        count = math.ceil(total_length / spacing)
        spacing = total_length / count
        start = self.first()
        resampled = [start]
        walker = spacing
        for point in self._points[1:]:
            az = geometry.azimuth_rad(start, point)
            distance = geometry.horz_distance_fast(start, point)
            while walker <= distance:
                resampled.append(geometry.location(start, az, walker))
                walker += spacing
            start = point
            walker -= distance
        # accumulated error can leave the walk just short of the final point
        if len(resampled) > count:
            resampled[-1] = self.last()
        else:
            resampled.append(self.last())
        logger.debug(
            f"Resampled {len(self)} points to {len(resampled)} at {spacing:.3f} km"
        )
        return PointSequence._wrap(tuple(resampled))

    def to_linestring(self) -> LineString:
        """Return the points as a Shapely LineString in (lon, lat) coordinates."""
        return coords_to_polyline(points_to_coords(self._points))

    def to_polygon(self) -> Polygon:
        """Return a closed Shapely Polygon view of the points for rendering."""
        return coords_to_polygon(points_to_coords(self._points))


class PointSequenceBuilder:
    """
    Accumulates points for a PointSequence.

    A builder is owned by a single caller. Once :meth:`build` has been
    called the builder is frozen and further additions raise RuntimeError.
    """

    def __init__(self):
        self._points: List[Point] = []
        self._sequence: Optional[PointSequence] = None

    def _check_open(self) -> None:
        if self._sequence is not None:
            raise RuntimeError("Builder has already been built")

    def add(self, point: Point) -> None:
        """Append a point."""
        self._check_open()
        if not isinstance(point, Point):
            raise TypeError(f"Expected Point, got {type(point).__name__}")
        self._points.append(point)

    def add_coordinates(
        self, latitude: float, longitude: float, depth: float = 0.0
    ) -> None:
        """Create and append a point from its coordinates."""
        self._check_open()
        self._points.append(Point(latitude, longitude, depth))

    def extend(self, points: Iterable[Point]) -> None:
        """Append several points. Nothing is added if any item is not a Point."""
        self._check_open()
        points = list(points)
        for i, p in enumerate(points):
            if not isinstance(p, Point):
                raise TypeError(f"Item {i} is {type(p).__name__}, not Point")
        self._points.extend(points)

    def __len__(self) -> int:
        return len(self._points)

    def build(self) -> PointSequence:
        """
        Freeze the builder and return its PointSequence.

        Raises:
            EmptyCollectionError: If no points were added
        """
        if self._sequence is None:
            self._sequence = PointSequence(self._points)
        return self._sequence


def format_points(points: Iterable[Point]) -> str:
    """Format points as newline-separated ``lon,lat,depth`` tuples."""
    return "\n".join(format_point(p) for p in points)


def parse_points(
    text: str, depth_range: Optional[Tuple[float, float]] = None
) -> PointSequence:
    """
    Parse whitespace-delimited ``lon,lat,depth`` tuples into a PointSequence.

    Raises:
        EmptyCollectionError: If ``text`` contains no tuples
        FormatError: If any tuple is malformed
    """
    return PointSequence(parse_point(token, depth_range) for token in text.split())
