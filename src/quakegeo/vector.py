"""
Directed separation between two points.
"""

from typing import NamedTuple
import math

from .coordinates import TO_DEGREES, TWO_PI


class Vector(NamedTuple):
    """
    Azimuth and horizontal/vertical separation between two points.

    The vector from A to B is not the reverse of the vector from B to A:
    the horizontal and vertical magnitudes agree but great-circle azimuths
    differ by some amount other than 180° in general. Vertical separation is
    positive down.
    """

    azimuth: float  # radians clockwise from north
    horizontal: float  # km
    vertical: float  # km

    @classmethod
    def between(cls, p1, p2) -> "Vector":
        """
        Create the vector describing the move from ``p1`` to ``p2``.

        Args:
            p1: Start point
            p2: End point

        Returns:
            Vector with azimuth in radians and separations in km
        """
        from .geometry import azimuth_rad, horz_distance, vert_distance

        return cls(azimuth_rad(p1, p2), horz_distance(p1, p2), vert_distance(p1, p2))

    @classmethod
    def with_plunge(cls, azimuth: float, plunge: float, length: float) -> "Vector":
        """Create a vector from an azimuth and plunge (radians) and a length (km)."""
        return cls(azimuth, length * math.cos(plunge), length * math.sin(plunge))

    def plunge(self) -> float:
        """
        Angle in radians between this vector and the horizontal, positive down.

        Curvature is ignored so this degrades beyond a couple hundred km.
        """
        return math.atan2(self.vertical, self.horizontal)

    def reverse(self) -> "Vector":
        """Return a copy with azimuth turned 180° and vertical sign flipped."""
        return Vector((self.azimuth + math.pi) % TWO_PI, self.horizontal, -self.vertical)

    def __str__(self) -> str:
        return (
            f"Vector(az={self.azimuth * TO_DEGREES:.3f}°, "
            f"Δh={self.horizontal:.3f} km, Δv={self.vertical:.3f} km)"
        )
