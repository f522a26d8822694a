"""
Input checks shared by the estimator and the point mapper.

Malformed input raises :class:`InvalidInputError`; point sets that cannot
define a homography (three collinear or two coincident points) raise
:class:`SingularSystemError`.
"""

import math
from itertools import combinations

from planar_homography.geometry.errors import InvalidInputError, SingularSystemError
from planar_homography.geometry.points import Point2D


def as_point(point, name: str = "point") -> Point2D:
    """Convert *point* to a :class:`Point2D` of finite floats.

    Parameters
    ----------
    point : sequence of two numbers
        Anything that unpacks to ``(x, y)``.
    name : str
        Label used in error messages.

    Returns
    -------
    Point2D
    """
    try:
        x, y = point
        x, y = float(x), float(y)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidInputError(f"{name} must be an (x, y) pair, got {point!r}") from exc

    if not (math.isfinite(x) and math.isfinite(y)):
        raise InvalidInputError(f"{name} has non-finite coordinates ({x}, {y})")
    return Point2D(x, y)


def as_points(points, name: str = "points", count: int = 4) -> list:
    """Convert a sequence of exactly *count* pairs to a list of :class:`Point2D`."""
    try:
        points = list(points)
    except TypeError as exc:
        raise InvalidInputError(f"{name} must be a sequence of points") from exc

    if len(points) != count:
        raise InvalidInputError(
            f"{name} must contain exactly {count} points, got {len(points)}"
        )
    return [as_point(p, f"{name}[{i}]") for i, p in enumerate(points)]


def triangle_degeneracy(a: Point2D, b: Point2D, c: Point2D) -> float:
    """Scale-free flatness measure of the triangle *abc*.

    Twice the triangle area divided by the squared length of its longest
    side. Zero for collinear or coincident points; an equilateral triangle
    scores about 0.87.
    """
    cross = (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x)
    longest = max(math.hypot(b.x - a.x, b.y - a.y),
                  math.hypot(c.x - b.x, c.y - b.y),
                  math.hypot(a.x - c.x, a.y - c.y))
    if longest == 0.0:
        return 0.0
    return abs(cross) / (longest * longest)


def check_general_position(points: list, name: str = "points",
                           tol: float = 1e-9) -> None:
    """Raise :class:`SingularSystemError` if any three of *points* are collinear.

    Coincident points count as collinear with any third point.
    """
    for i, j, k in combinations(range(len(points)), 3):
        if triangle_degeneracy(points[i], points[j], points[k]) <= tol:
            raise SingularSystemError(
                f"{name} {i}, {j} and {k} are collinear or coincident; "
                "the correspondences do not define a unique homography"
            )
