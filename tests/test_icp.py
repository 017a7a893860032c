import math

import pytest

from gridslam.icp import icp_nonlinear_step, icp_step
from gridslam.point import Point

POINTS = [Point(0.0, 0.0), Point(2.0, 1.0), Point(1.0, 3.0)]


def _transform(p, theta, tx, ty):
    c, s = math.cos(theta), math.sin(theta)
    return Point(c * p.x - s * p.y + tx, s * p.x + c * p.y + ty)


@pytest.mark.parametrize("step", [icp_step, icp_nonlinear_step])
def test_identical_pairs_give_identity(step):
    pose, error = step([(p, p) for p in POINTS])
    assert (pose.x, pose.y, pose.theta) == pytest.approx((0.0, 0.0, 0.0), abs=1e-12)
    assert error == pytest.approx(0.0, abs=1e-12)


@pytest.mark.parametrize("step", [icp_step, icp_nonlinear_step])
def test_pure_translation_is_recovered(step):
    pairs = [(p, p + Point(3.0, -2.0)) for p in POINTS]
    pose, error = step(pairs)
    assert (pose.x, pose.y, pose.theta) == pytest.approx((3.0, -2.0, 0.0), abs=1e-12)
    assert error == pytest.approx(0.0, abs=1e-12)


@pytest.mark.parametrize("theta", [0.3, -1.1, 2.5])
def test_nonlinear_step_recovers_rigid_motion(theta):
    pairs = [(p, _transform(p, theta, 0.5, -0.7)) for p in POINTS]
    pose, error = icp_nonlinear_step(pairs)
    assert pose.theta == pytest.approx(theta)
    assert (pose.x, pose.y) == pytest.approx((0.5, -0.7))
    assert error == pytest.approx(0.0, abs=1e-9)


def test_error_matches_residuals_of_returned_pose():
    pairs = [(p, _transform(p, 0.4, 1.0, 2.0)) for p in POINTS]
    pose, error = icp_step(pairs)
    residual = sum(
        (_transform(a, pose.theta, pose.x, pose.y) - b)
        * (_transform(a, pose.theta, pose.x, pose.y) - b)
        for a, b in pairs
    )
    assert error == pytest.approx(residual)
    assert error >= 0.0


def test_translation_aligns_means():
    pairs = [(p, _transform(p, 0.2, -1.0, 0.5)) for p in POINTS]
    pose, _ = icp_step(pairs)
    n = len(pairs)
    mean_first = Point(sum(a.x for a, _ in pairs) / n, sum(a.y for a, _ in pairs) / n)
    mean_second = Point(sum(b.x for _, b in pairs) / n, sum(b.y for _, b in pairs) / n)
    moved = _transform(mean_first, pose.theta, pose.x, pose.y)
    assert (moved.x, moved.y) == pytest.approx((mean_second.x, mean_second.y))


def test_accepts_generator_input():
    pose, error = icp_step((p, p) for p in POINTS)
    assert pose.theta == pytest.approx(0.0)
    assert error == pytest.approx(0.0, abs=1e-12)


@pytest.mark.parametrize("step", [icp_step, icp_nonlinear_step])
def test_empty_input_raises(step):
    with pytest.raises(ValueError):
        step([])