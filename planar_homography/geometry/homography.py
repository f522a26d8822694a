"""
Homography estimation from four point correspondences.

A planar homography (projective transformation) maps points on one plane to
corresponding points on another.  With h33 fixed to 1 the 3x3 matrix has
eight unknowns; each correspondence contributes two linear equations, so four
correspondences give an exactly determined 8x8 system that is solved
directly.
"""

import math
from typing import NamedTuple

import numpy as np
from scipy import linalg

from planar_homography.geometry.errors import (
    DegenerateMappingError,
    InvalidInputError,
    SingularSystemError,
)
from planar_homography.geometry.points import Correspondence, Point2D
from planar_homography.geometry.validation import (
    as_point,
    as_points,
    check_general_position,
)

DEFAULT_MAX_CONDITION = 1e15
DEFAULT_COLLINEARITY_TOL = 1e-9
DEFAULT_DENOMINATOR_TOL = 0.0


class HomographyParameters(NamedTuple):
    """The eight free entries of a homography matrix, row-major, h33 == 1."""

    h11: float
    h12: float
    h13: float
    h21: float
    h22: float
    h23: float
    h31: float
    h32: float

    @classmethod
    def identity(cls) -> "HomographyParameters":
        return cls(1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_matrix(cls, H) -> "HomographyParameters":
        """Normalise a 3 x 3 homography matrix so that H[2, 2] == 1.

        Parameters
        ----------
        H : array_like
            3 x 3 homography matrix, defined up to scale.

        Returns
        -------
        HomographyParameters
        """
        H = np.asarray(H, dtype=float)
        if H.shape != (3, 3):
            raise InvalidInputError(f"expected a 3 x 3 matrix, got shape {H.shape}")
        if not np.all(np.isfinite(H)):
            raise SingularSystemError("homography matrix has non-finite entries")
        if H[2, 2] == 0.0:
            raise SingularSystemError("homography matrix cannot be normalised: H[2, 2] == 0")

        H = H / H[2, 2]
        return cls(*(float(v) for v in H.ravel()[:8]))

    def as_matrix(self) -> np.ndarray:
        """Return the full 3 x 3 matrix with h33 == 1."""
        return np.array([*self, 1.0], dtype=float).reshape(3, 3)

    def inverse(self) -> "HomographyParameters":
        """Parameters of the mapping from the destination plane back to the source."""
        try:
            H_inv = np.linalg.inv(self.as_matrix())
        except np.linalg.LinAlgError as exc:
            raise SingularSystemError("homography is not invertible") from exc
        return HomographyParameters.from_matrix(H_inv)


def build_linear_system(src: list, dst: list):
    """Stack the two equations contributed by each correspondence.

    For source (x, y) and destination (u, v) the rows are::

        [x, y, 1, 0, 0, 0, -x*u, -y*u]  ->  u
        [0, 0, 0, x, y, 1, -x*v, -y*v]  ->  v

    Parameters
    ----------
    src, dst : list of Point2D
        Four source and four destination points.

    Returns
    -------
    A : np.ndarray
        8 x 8 coefficient matrix.
    b : np.ndarray
        Right-hand side of length 8.
    """
    A = []
    b = []
    for (x, y), (u, v) in zip(src, dst):
        A.append([x, y, 1, 0, 0, 0, -x * u, -y * u])
        A.append([0, 0, 0, x, y, 1, -x * v, -y * v])
        b.extend([u, v])

    return np.array(A, dtype=float), np.array(b, dtype=float)


def estimate_homography(source_points, destination_points, *,
                        max_condition: float = DEFAULT_MAX_CONDITION,
                        collinearity_tol: float = DEFAULT_COLLINEARITY_TOL
                        ) -> HomographyParameters:
    """Estimate the homography mapping four source points onto four destinations.

    Parameters
    ----------
    source_points, destination_points : sequence of (x, y)
        Exactly four points each; ``source_points[i]`` maps to
        ``destination_points[i]``.
    max_condition : float
        Largest condition number of the 8 x 8 system accepted as solvable.
    collinearity_tol : float
        Flatness below which three points are treated as collinear
        (see :func:`triangle_degeneracy`).

    Returns
    -------
    HomographyParameters

    Raises
    ------
    InvalidInputError
        Wrong number of points or non-finite coordinates.
    SingularSystemError
        Three collinear or two coincident points on either side, or a
        numerically singular system.
    """
    src = as_points(source_points, "source_points")
    dst = as_points(destination_points, "destination_points")

    check_general_position(src, "source points", collinearity_tol)
    check_general_position(dst, "destination points", collinearity_tol)

    A, b = build_linear_system(src, dst)

    cond = np.linalg.cond(A)
    if not np.isfinite(cond) or cond > max_condition:
        raise SingularSystemError(
            f"coefficient matrix is singular or ill-conditioned (cond={cond:.3g})"
        )

    try:
        h = linalg.solve(A, b)
    except linalg.LinAlgError as exc:
        raise SingularSystemError("coefficient matrix is singular") from exc

    if not np.all(np.isfinite(h)):
        raise SingularSystemError("solution contains non-finite parameters")

    return HomographyParameters(*(float(v) for v in h))


def estimate_from_correspondences(correspondences, **tolerances) -> HomographyParameters:
    """Same as :func:`estimate_homography` for an iterable of four ``(source, destination)`` pairs."""
    try:
        pairs = [Correspondence(*pair) for pair in correspondences]
    except TypeError as exc:
        raise InvalidInputError("each correspondence must be a (source, destination) pair") from exc

    return estimate_homography([p.source for p in pairs],
                               [p.destination for p in pairs], **tolerances)


def _as_parameters(params) -> HomographyParameters:
    try:
        values = [float(v) for v in params]
        params = HomographyParameters(*values)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidInputError("homography parameters must be 8 real numbers") from exc

    if not all(math.isfinite(v) for v in params):
        raise InvalidInputError("homography parameters must be finite")
    return params


def map_point(point, params, *,
              denominator_tol: float = DEFAULT_DENOMINATOR_TOL) -> Point2D:
    """Map *point* through the homography described by *params*.

    Parameters
    ----------
    point : (x, y)
        Query point on the source plane.
    params : HomographyParameters or sequence of 8 floats
        ``[h11, h12, h13, h21, h22, h23, h31, h32]``.
    denominator_tol : float
        The point is rejected when ``|h31*x + h32*y + 1|`` does not exceed
        this value.  The default only rejects an exact zero.

    Returns
    -------
    Point2D
        The mapped point on the destination plane.

    Raises
    ------
    DegenerateMappingError
        The point maps to infinity (or overflows) under this homography.
    """
    x, y = as_point(point)
    h11, h12, h13, h21, h22, h23, h31, h32 = _as_parameters(params)

    denom = h31 * x + h32 * y + 1.0
    if abs(denom) <= denominator_tol:
        raise DegenerateMappingError(
            f"point ({x}, {y}) maps to infinity (denominator {denom:.3g})"
        )

    x_out = (h11 * x + h12 * y + h13) / denom
    y_out = (h21 * x + h22 * y + h23) / denom
    if not (math.isfinite(x_out) and math.isfinite(y_out)):
        raise DegenerateMappingError(f"point ({x}, {y}) maps to a non-finite location")

    return Point2D(x_out, y_out)


def reprojection_errors(params, source_points, destination_points) -> list:
    """Distance between each mapped source point and its destination.

    Returns
    -------
    list of float
        One Euclidean error per correspondence, in destination units.
    """
    src_points = as_points(source_points, "source_points")
    dst_points = as_points(destination_points, "destination_points")

    errors = []
    for src, dst in zip(src_points, dst_points):
        mapped = map_point(src, params)
        errors.append(math.hypot(mapped.x - dst.x, mapped.y - dst.y))
    return errors
