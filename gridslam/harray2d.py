"""A two-level grid whose square patches are allocated on demand and shared on copy."""

from __future__ import annotations

from typing import Any, FrozenSet, Iterable, List, Optional, Set

from gridslam.array2d import AccessibilityState, Array2D, CellFactory
from gridslam.point import Point


def _no_patch() -> Optional[Array2D]:
    return None


class HierarchicalArray2D(Array2D):
    """A grid of patches of ``2**patch_magnitude`` cells per side.

    ``xsize`` and ``ysize`` count patches. Cell indexes address single cells.
    Copies share their patches; :meth:`alloc_active_area` gives the active
    patches private copies before they are written.
    """

    def __init__(
        self,
        xsize: int,
        ysize: int,
        patch_magnitude: int = 5,
        cell_factory: CellFactory = float,
    ):
        super().__init__(xsize >> patch_magnitude, ysize >> patch_magnitude, _no_patch)
        self.patch_cell_factory = cell_factory
        self._patch_magnitude = patch_magnitude
        self._active_area: Set[Point] = set()

    @property
    def patch_size(self) -> int:
        # The storage reports its magnitude here; maps shift by this value.
        return self._patch_magnitude

    @property
    def patch_magnitude(self) -> int:
        return self._patch_magnitude

    @property
    def active_area(self) -> FrozenSet[Point]:
        return frozenset(self._active_area)

    def resize(self, xmin: int, ymin: int, xmax: int, ymax: int) -> None:
        """Reshape the patch grid; bounds are in patch coordinates."""
        super().resize(xmin, ymin, xmax, ymax)

    def patch_indexes(self, x: int, y: int) -> Point:
        """Patch holding cell ``(x, y)``; ``Point(-1, -1)`` for negative indexes."""
        if x >= 0 and y >= 0:
            return Point(x >> self._patch_magnitude, y >> self._patch_magnitude)
        return Point(-1, -1)

    def is_allocated(self, x: int, y: int) -> bool:
        c = self.patch_indexes(x, y)
        if not self.is_inside(c.x, c.y):
            return False
        return self._cells[c.x][c.y] is not None

    def cell_state(self, x: int, y: int) -> AccessibilityState:
        c = self.patch_indexes(x, y)
        if self.is_inside(c.x, c.y):
            if self._cells[c.x][c.y] is not None:
                return AccessibilityState.INSIDE | AccessibilityState.ALLOCATED
            return AccessibilityState.INSIDE
        return AccessibilityState.OUTSIDE

    def _create_patch(self) -> Array2D:
        side = 1 << self._patch_magnitude
        return Array2D(side, side, self.patch_cell_factory)

    def _patch_for(self, x: int, y: int) -> tuple:
        c = self.patch_indexes(x, y)
        if not self.is_inside(c.x, c.y):
            raise IndexError(f"cell ({x}, {y}) is outside the array")
        patch = self._cells[c.x][c.y]
        if patch is None:
            patch = self._create_patch()
            self._cells[c.x][c.y] = patch
        offset_x = x - (c.x << self._patch_magnitude)
        offset_y = y - (c.y << self._patch_magnitude)
        return patch, offset_x, offset_y

    def cell(self, x: int, y: int) -> Any:
        """Return the cell at ``(x, y)``, allocating its patch if needed."""
        patch, ox, oy = self._patch_for(x, y)
        return patch.cell(ox, oy)

    def set_cell(self, x: int, y: int, value: Any) -> None:
        """Store ``value`` at ``(x, y)``, allocating its patch if needed."""
        patch, ox, oy = self._patch_for(x, y)
        patch.set_cell(ox, oy, value)

    def set_active_area(self, points: Iterable[Point], patch_coords: bool = False) -> None:
        """Replace the active area with ``points`` (cell or patch coordinates)."""
        self._active_area = {
            Point(p.x, p.y) if patch_coords else self.patch_indexes(p.x, p.y)
            for p in points
        }

    def alloc_active_area(self) -> None:
        """Give every active patch fresh storage of its own."""
        for p in self._active_area:
            if not self.is_inside(p.x, p.y):
                continue
            patch = self._cells[p.x][p.y]
            self._cells[p.x][p.y] = self._create_patch() if patch is None else patch.copy()

    def copy(self) -> HierarchicalArray2D:
        """Return a copy that shares patches with this one and has no active area."""
        duplicate = type(self)(0, 0, self._patch_magnitude, self.patch_cell_factory)
        duplicate._xsize, duplicate._ysize = self._xsize, self._ysize
        cells: List[List[Any]] = [list(column) for column in self._cells]
        duplicate._cells = cells
        return duplicate