"""Dense two-dimensional cell arrays and cell accessibility flags."""

from __future__ import annotations

import enum
from copy import copy as _shallow_copy
from typing import Any, Callable, List

CellFactory = Callable[[], Any]


class AccessibilityState(enum.IntFlag):
    """Whether a cell lies inside a storage and whether its memory exists."""

    OUTSIDE = 0x0
    INSIDE = 0x1
    ALLOCATED = 0x2


class Array2D:
    """A fixed-size grid of cells indexed as ``(x, y)``.

    New cells are made by ``cell_factory``. A size that is not positive in
    either direction gives an empty array.
    """

    def __init__(self, xsize: int = 0, ysize: int = 0, cell_factory: CellFactory = float):
        self.cell_factory = cell_factory
        if xsize > 0 and ysize > 0:
            self._xsize, self._ysize = xsize, ysize
        else:
            self._xsize = self._ysize = 0
        self._cells: List[List[Any]] = self._new_cells(self._xsize, self._ysize)

    def _new_cells(self, xsize: int, ysize: int) -> List[List[Any]]:
        return [[self.cell_factory() for _ in range(ysize)] for _ in range(xsize)]

    @property
    def xsize(self) -> int:
        return self._xsize

    @property
    def ysize(self) -> int:
        return self._ysize

    @property
    def patch_size(self) -> int:
        return 0

    @property
    def patch_magnitude(self) -> int:
        return 0

    def clear(self) -> None:
        """Drop every cell and shrink to an empty array."""
        self._cells = []
        self._xsize = self._ysize = 0

    def resize(self, xmin: int, ymin: int, xmax: int, ymax: int) -> None:
        """Reshape to cover ``[xmin, xmax) x [ymin, ymax)`` of the current index space.

        Cells in the overlap keep their values; index ``(xmin, ymin)`` becomes ``(0, 0)``.
        """
        xsize, ysize = xmax - xmin, ymax - ymin
        if xsize < 0 or ysize < 0:
            raise ValueError("the new bounds are inverted")
        new_cells = self._new_cells(xsize, ysize)
        for x in range(max(xmin, 0), min(xmax, self._xsize)):
            column = self._cells[x]
            target = new_cells[x - xmin]
            for y in range(max(ymin, 0), min(ymax, self._ysize)):
                target[y - ymin] = column[y]
        self._cells = new_cells
        self._xsize, self._ysize = xsize, ysize

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self._xsize and 0 <= y < self._ysize

    def _check(self, x: int, y: int) -> None:
        if not self.is_inside(x, y):
            raise IndexError(f"cell ({x}, {y}) is outside the array")

    def cell(self, x: int, y: int) -> Any:
        """Return the cell at ``(x, y)``; raises IndexError outside the array."""
        self._check(x, y)
        return self._cells[x][y]

    def set_cell(self, x: int, y: int, value: Any) -> None:
        """Store ``value`` at ``(x, y)``; raises IndexError outside the array."""
        self._check(x, y)
        self._cells[x][y] = value

    def cell_state(self, x: int, y: int) -> AccessibilityState:
        if self.is_inside(x, y):
            return AccessibilityState.INSIDE | AccessibilityState.ALLOCATED
        return AccessibilityState.OUTSIDE

    def copy(self) -> Array2D:
        """Return an independent copy; each cell is copied shallowly."""
        duplicate = type(self).__new__(type(self))
        duplicate.cell_factory = self.cell_factory
        duplicate._xsize, duplicate._ysize = self._xsize, self._ysize
        duplicate._cells = [[_shallow_copy(c) for c in column] for column in self._cells]
        return duplicate