"""
Value types for planar points and point correspondences.

Both types are immutable tuples, so plain ``(x, y)`` pairs can be used
wherever a :class:`Point2D` is expected.
"""

from typing import NamedTuple


class Point2D(NamedTuple):
    x: float
    y: float


class Correspondence(NamedTuple):
    """A source point and the destination point it must map to."""

    source: Point2D
    destination: Point2D
