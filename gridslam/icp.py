"""Closed-form alignment steps for matched point pairs."""

from __future__ import annotations

import math
from typing import Iterable, List, Tuple

from gridslam.point import OrientedPoint, Point

PointPair = Tuple[Point, Point]


def _means(pairs: List[PointPair]) -> Tuple[Point, Point]:
    if not pairs:
        raise ValueError("at least one point pair is required")
    scale = 1.0 / len(pairs)
    first = Point(sum(a.x for a, _ in pairs), sum(a.y for a, _ in pairs)) * scale
    second = Point(sum(b.x for _, b in pairs), sum(b.y for _, b in pairs)) * scale
    return first, second


def _solve(
    theta: float, pairs: List[PointPair], mean_first: Point, mean_second: Point
) -> Tuple[OrientedPoint, float]:
    s, c = math.sin(theta), math.cos(theta)
    x = mean_second.x - (c * mean_first.x - s * mean_first.y)
    y = mean_second.y - (s * mean_first.x + c * mean_first.y)
    error = 0.0
    for a, b in pairs:
        delta = Point(c * a.x - s * a.y + x - b.x, s * a.x + c * a.y + y - b.y)
        error += delta * delta
    return OrientedPoint(x, y, theta), error


def icp_step(pairs: Iterable[PointPair]) -> Tuple[OrientedPoint, float]:
    """Estimate the transform mapping first points onto second points.

    Returns the transform and the summed squared residual.
    """
    pairs = list(pairs)
    mean_first, mean_second = _means(pairs)
    sxx = sxy = syx = 0.0
    for a, b in pairs:
        fa, fb = a - mean_first, b - mean_second
        sxx += fa.x * fb.x
        sxy += fa.x * fb.y
        syx += fa.y * fb.x
    theta = math.atan2(sxy - syx, sxx + sxy)
    return _solve(theta, pairs, mean_first, mean_second)


def icp_nonlinear_step(pairs: Iterable[PointPair]) -> Tuple[OrientedPoint, float]:
    """Estimate the transform by averaging per-pair angular offsets.

    Returns the transform and the summed squared residual.
    """
    pairs = list(pairs)
    mean_first, mean_second = _means(pairs)
    gain = math.sqrt(mean_first * mean_first)
    ms = mc = 0.0
    for a, b in pairs:
        fa, fb = a - mean_first, b - mean_second
        dalpha = math.atan2(fb.y, fb.x) - math.atan2(fa.y, fa.x)
        ms += gain * math.sin(dalpha)
        mc += gain * math.cos(dalpha)
    theta = math.atan2(ms, mc)
    return _solve(theta, pairs, mean_first, mean_second)