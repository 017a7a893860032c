import math

import pytest

from gridslam.boundingbox import OrientedBoundingBox
from gridslam.point import Point


def _rectangle(width=4.0, height=2.0, angle=math.pi / 6, center=(1.0, 2.0)):
    c, s = math.cos(angle), math.sin(angle)
    corners = []
    for lx, ly in ((-1, -1), (1, -1), (1, 1), (-1, 1)):
        x, y = lx * width / 2, ly * height / 2
        corners.append(Point(center[0] + c * x - s * y, center[1] + s * x + c * y))
    return corners


def test_area_of_rotated_rectangle():
    box = OrientedBoundingBox(_rectangle(4.0, 2.0))
    assert box.area() == pytest.approx(4.0 * 2.0)


def test_corners_are_centered_on_points():
    box = OrientedBoundingBox(_rectangle(center=(1.0, 2.0)))
    corners = [box.ul, box.ur, box.ll, box.lr]
    assert sum(p.x for p in corners) / 4 == pytest.approx(1.0)
    assert sum(p.y for p in corners) / 4 == pytest.approx(2.0)


def test_corners_match_rectangle_corners():
    points = _rectangle()
    box = OrientedBoundingBox(points)
    for corner in (box.ul, box.ur, box.ll, box.lr):
        assert min(math.hypot(corner.x - p.x, corner.y - p.y) for p in points) == pytest.approx(
            0.0, abs=1e-9
        )


def test_translation_keeps_area():
    a = OrientedBoundingBox(_rectangle(center=(0.0, 0.0)))
    b = OrientedBoundingBox(_rectangle(center=(10.0, -5.0)))
    assert a.area() == pytest.approx(b.area())
    assert b.ul.x - a.ul.x == pytest.approx(10.0)


def test_uncorrelated_points_raise():
    points = [Point(0, 0), Point(2, 0), Point(2, 1), Point(0, 1)]
    with pytest.raises(ValueError):
        OrientedBoundingBox(points)


def test_empty_points_raise():
    with pytest.raises(ValueError):
        OrientedBoundingBox([])