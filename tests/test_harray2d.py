import pytest

from gridslam.array2d import AccessibilityState
from gridslam.harray2d import HierarchicalArray2D
from gridslam.point import Point

INSIDE = AccessibilityState.INSIDE
ALLOCATED = AccessibilityState.ALLOCATED


def test_patch_grid_size():
    h = HierarchicalArray2D(64, 32, 4)
    assert (h.xsize, h.ysize) == (64 >> 4, 32 >> 4)
    assert h.patch_magnitude == 4
    assert h.patch_size == 4


def test_patch_indexes():
    h = HierarchicalArray2D(64, 64, 4)
    assert h.patch_indexes(17, 5) == Point(17 >> 4, 5 >> 4)
    assert h.patch_indexes(-3, 2) == Point(-1, -1)


def test_states_before_and_after_allocation():
    h = HierarchicalArray2D(32, 32, 3)
    assert h.cell_state(9, 9) == INSIDE
    assert not h.is_allocated(9, 9)
    h.set_cell(9, 9, 4.0)
    assert h.cell_state(9, 9) == INSIDE | ALLOCATED
    assert h.is_allocated(15, 15)
    assert h.cell_state(40, 0) == AccessibilityState.OUTSIDE
    assert h.cell_state(-1, 0) == AccessibilityState.OUTSIDE


def test_cell_reads_back_and_allocates():
    h = HierarchicalArray2D(16, 16, 2)
    assert h.cell(5, 6) == 0.0
    assert h.is_allocated(5, 6)
    h.set_cell(5, 6, 2.5)
    assert h.cell(5, 6) == 2.5
    assert h.cell(4, 4) == 0.0


def test_cell_outside_raises():
    h = HierarchicalArray2D(16, 16, 2)
    with pytest.raises(IndexError):
        h.cell(16, 0)
    with pytest.raises(IndexError):
        h.set_cell(-1, -1, 1.0)


def test_copy_shares_patches_until_active_area_allocated():
    h = HierarchicalArray2D(16, 16, 2)
    h.set_cell(3, 3, 1.0)
    c = h.copy()
    assert c.active_area == frozenset()
    c.set_cell(3, 3, 2.0)
    assert h.cell(3, 3) == 2.0

    c.set_active_area([Point(3, 3)])
    c.alloc_active_area()
    c.set_cell(3, 3, 9.0)
    assert h.cell(3, 3) == 2.0
    assert c.cell(3, 3) == 9.0


def test_active_area_in_cell_and_patch_coordinates():
    h = HierarchicalArray2D(32, 32, 3)
    h.set_active_area([Point(9, 17), Point(10, 18)])
    assert h.active_area == frozenset({h.patch_indexes(9, 17)})
    h.set_active_area([Point(2, 3)], patch_coords=True)
    assert h.active_area == frozenset({Point(2, 3)})
    h.alloc_active_area()
    assert h.is_allocated(2 << 3, 3 << 3)
    assert not h.is_allocated(0, 0)


def test_resize_moves_patches():
    h = HierarchicalArray2D(16, 16, 2)
    h.set_cell(1, 1, 3.0)
    h.resize(-1, -1, 4, 4)
    assert (h.xsize, h.ysize) == (5, 5)
    assert h.cell(1 + 4, 1 + 4) == 3.0
    assert not h.is_allocated(0, 0)