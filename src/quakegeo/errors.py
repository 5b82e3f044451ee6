"""
Exception types raised while validating geographic input.

Every error is a local, synchronous validation failure. They all derive from
``ValueError`` so callers that only care about "bad input" can catch that.
"""


class QuakeGeoError(ValueError):
    """Base class for quakegeo validation errors."""


class RangeError(QuakeGeoError):
    """A value lies outside its physical or numeric domain."""


class FormatError(QuakeGeoError):
    """Textual coordinate input could not be parsed."""


class FieldCountError(FormatError, IndexError):
    """A coordinate tuple has fewer fields than required."""


class EmptyCollectionError(QuakeGeoError):
    """A collection that must hold at least one point was empty."""
