#!/usr/bin/env python3
"""
quakegeo - spherical-earth geometry for seismic-hazard calculations.

This package provides immutable points with depth, great-circle and fast
planar distances, azimuths, forward projection, spatial filters, and
resampling and partitioning of point sequences such as fault traces.
"""
import importlib.metadata

__version__ = importlib.metadata.version("quakegeo")

# Import main classes for public API
from .errors import (
    QuakeGeoError,
    RangeError,
    FormatError,
    FieldCountError,
    EmptyCollectionError,
)
from .point import Point, format_point, parse_point
from .vector import Vector
from .bounds import BoundingBox
from .sequence import PointSequence, PointSequenceBuilder, format_points, parse_points
from . import filters, geometry

__all__ = [
    "QuakeGeoError",
    "RangeError",
    "FormatError",
    "FieldCountError",
    "EmptyCollectionError",
    "Point",
    "format_point",
    "parse_point",
    "Vector",
    "BoundingBox",
    "PointSequence",
    "PointSequenceBuilder",
    "format_points",
    "parse_points",
    "filters",
    "geometry",
]
