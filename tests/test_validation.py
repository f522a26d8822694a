import pytest

from planar_homography.geometry.errors import InvalidInputError, SingularSystemError
from planar_homography.geometry.points import Point2D
from planar_homography.geometry.validation import (
    as_point,
    as_points,
    check_general_position,
    triangle_degeneracy,
)


def test_as_point_converts_to_floats():
    p = as_point([3, "4.5"])
    assert p == Point2D(3.0, 4.5)
    assert isinstance(p.x, float)


@pytest.mark.parametrize("bad", [None, 5, (1, 2, 3), ("a", 1)])
def test_as_point_rejects_malformed(bad):
    with pytest.raises(InvalidInputError):
        as_point(bad)


def test_as_points_count():
    assert len(as_points([(0, 0), (1, 0)], count=2)) == 2
    with pytest.raises(InvalidInputError, match="exactly 4 points, got 2"):
        as_points([(0, 0), (1, 0)])
    with pytest.raises(InvalidInputError):
        as_points(None)


def test_triangle_degeneracy_is_scale_free():
    a, b, c = Point2D(0, 0), Point2D(1, 0), Point2D(0, 1)
    small = triangle_degeneracy(a, b, c)
    big = triangle_degeneracy(Point2D(0, 0), Point2D(1e6, 0), Point2D(0, 1e6))
    assert small == pytest.approx(big)
    assert small == pytest.approx(0.5)


def test_triangle_degeneracy_zero_for_flat_triangles():
    assert triangle_degeneracy(Point2D(0, 0), Point2D(50, 0), Point2D(100, 0)) == 0.0
    assert triangle_degeneracy(Point2D(1, 1), Point2D(1, 1), Point2D(1, 1)) == 0.0


def test_check_general_position():
    square = [Point2D(0, 0), Point2D(1, 0), Point2D(1, 1), Point2D(0, 1)]
    check_general_position(square)

    flat = [Point2D(0, 0), Point2D(50, 0), Point2D(100, 0), Point2D(1, 1)]
    with pytest.raises(SingularSystemError, match="0, 1 and 2"):
        check_general_position(flat)


def test_check_general_position_tolerance():
    nearly_flat = [Point2D(0, 0), Point2D(50, 1e-6), Point2D(100, 0), Point2D(0, 100)]
    check_general_position(nearly_flat)
    with pytest.raises(SingularSystemError):
        check_general_position(nearly_flat, tol=1e-6)


def test_as_point_rejects_coordinates_too_large_for_a_float():
    with pytest.raises(InvalidInputError):
        as_point((10**400, 0))
    with pytest.raises(InvalidInputError):
        as_points([(0, 0), (1, 0), (1, 10**400), (0, 1)])
