"""
Exception types raised by the homography estimator and point mapper.

Every failure is reported as a subclass of :class:`HomographyError` so callers
can catch the whole family at once, or a single condition when they care
about it.
"""


class HomographyError(ValueError):
    """Base class for all homography failures."""


class InvalidInputError(HomographyError):
    """Wrong number of points, malformed points, or non-finite coordinates."""


class SingularSystemError(HomographyError):
    """The correspondences do not determine a unique, invertible homography."""


class DegenerateMappingError(HomographyError):
    """The projective denominator vanishes for the query point."""
