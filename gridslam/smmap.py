"""Occupancy cells that accumulate beam endpoints, and the map built from them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from gridslam.gridmap import GridMap
from gridslam.harray2d import HierarchicalArray2D
from gridslam.point import Point

SIGHT_INC = 1
PATCH_MAGNITUDE = 5


def _f32(value: float) -> float:
    """Round a value to single precision, as the accumulator stores it."""
    return float(np.float32(value))


@dataclass
class PointAccumulator:
    """Counts of hits and visits of a cell, plus the sum of hit positions.

    The hit positions are summed in single precision.
    """

    acc: Point = field(default_factory=lambda: Point(0.0, 0.0))
    n: int = 0
    visits: int = 0

    def update(self, value: bool, p: Point = Point(0.0, 0.0)) -> None:
        """Record a hit at ``p`` when ``value`` is true, otherwise a pass-through."""
        if value:
            self.acc = Point(
                _f32(_f32(self.acc.x) + _f32(p.x)), _f32(_f32(self.acc.y) + _f32(p.y))
            )
            self.n += 1
            self.visits += SIGHT_INC
        else:
            self.visits += 1

    def mean(self) -> Point:
        """Mean position of the hits; raises ZeroDivisionError without hits."""
        scale = 1.0 / self.n
        return Point(self.acc.x * scale, self.acc.y * scale)

    def occupancy(self) -> float:
        """Fraction of visits that were hits, or -1 for a cell never visited."""
        if not self.visits:
            return -1.0
        return self.n * SIGHT_INC / self.visits

    def __float__(self) -> float:
        return self.occupancy()

    def add(self, other: PointAccumulator) -> None:
        """Merge the counts and hit sum of ``other`` into this cell."""
        self.acc = Point(
            _f32(self.acc.x + other.acc.x), _f32(self.acc.y + other.acc.y)
        )
        self.n += other.n
        self.visits += other.visits

    def entropy(self) -> float:
        """Binary entropy of the occupancy; maximal for a cell never visited."""
        if not self.visits:
            return -math.log(0.5)
        if self.n == self.visits or self.n == 0:
            return 0.0
        x = self.n * SIGHT_INC / self.visits
        return -(x * math.log(x) + (1 - x) * math.log(1 - x))


def _storage(xsize: int, ysize: int) -> HierarchicalArray2D:
    return HierarchicalArray2D(xsize, ysize, PATCH_MAGNITUDE, PointAccumulator)


def scan_matcher_map(
    center: Point, xmin: float, ymin: float, xmax: float, ymax: float, delta: float
) -> GridMap:
    """A grid map of PointAccumulator cells held in on-demand patches."""
    return GridMap(
        center, xmin, ymin, xmax, ymax, delta, storage_factory=_storage, unknown=PointAccumulator()
    )