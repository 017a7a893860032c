import math

import numpy as np
import pytest

from gridslam.point import Point
from gridslam.smmap import PointAccumulator, scan_matcher_map


def test_fresh_cell_is_unknown():
    cell = PointAccumulator()
    assert cell.occupancy() == -1.0
    assert float(cell) == -1.0


def test_hits_and_misses_counted():
    cell = PointAccumulator()
    cell.update(True, Point(1.0, 2.0))
    cell.update(False)
    assert cell.n == 1
    assert cell.visits == 2
    assert cell.occupancy() == 0.5


def test_mean_of_hits():
    cell = PointAccumulator()
    cell.update(True, Point(1.0, 3.0))
    cell.update(True, Point(3.0, 5.0))
    assert cell.mean() == Point(2.0, 4.0)


def test_mean_without_hits_raises():
    with pytest.raises(ZeroDivisionError):
        PointAccumulator().mean()


def test_accumulation_is_single_precision():
    cell = PointAccumulator()
    cell.update(True, Point(0.1, 0.2))
    assert cell.acc.x == float(np.float32(0.1))
    assert cell.acc.y == float(np.float32(0.2))


def test_add_merges_counts():
    a = PointAccumulator()
    a.update(True, Point(1.0, 1.0))
    b = PointAccumulator()
    b.update(True, Point(2.0, 2.0))
    b.update(False)
    a.add(b)
    assert (a.n, a.visits) == (2, 3)
    assert a.acc == Point(3.0, 3.0)


def test_entropy_values():
    assert PointAccumulator().entropy() == pytest.approx(-math.log(0.5))
    full = PointAccumulator()
    full.update(True, Point(0.0, 0.0))
    assert full.entropy() == 0.0
    empty = PointAccumulator()
    empty.update(False)
    assert empty.entropy() == 0.0
    half = PointAccumulator()
    half.update(True, Point(0.0, 0.0))
    half.update(False)
    assert half.entropy() == pytest.approx(-math.log(0.5))


def test_map_unallocated_value_is_unknown():
    grid = scan_matcher_map(Point(0.0, 0.0), -5.0, -5.0, 5.0, 5.0, 0.1)
    index = grid.world2map(Point(0.0, 0.0))
    assert grid.is_inside(index)
    assert grid.value(index).occupancy() == -1.0
    assert not grid.storage.is_allocated(index.x, index.y)


def test_map_cell_updates_persist():
    grid = scan_matcher_map(Point(0.0, 0.0), -5.0, -5.0, 5.0, 5.0, 0.1)
    index = grid.world2map(Point(1.0, 1.0))
    grid.cell(index).update(True, Point(1.0, 1.0))
    assert grid.storage.is_allocated(index.x, index.y)
    stored = grid.value(index)
    assert stored.n == 1
    assert stored.mean() == Point(1.0, 1.0)


def test_map_outside_cell_raises():
    grid = scan_matcher_map(Point(0.0, 0.0), -5.0, -5.0, 5.0, 5.0, 0.1)
    with pytest.raises(IndexError):
        grid.cell(Point(-3, -3))