"""Grid maps that relate world coordinates to cells of a storage."""

from __future__ import annotations

import math
from typing import Any, Callable, Tuple

from gridslam.array2d import AccessibilityState, Array2D
from gridslam.point import Point, point_max, point_min

StorageFactory = Callable[[int, int], Any]


def _c_round(v: float) -> int:
    """Round half away from zero."""
    if v >= 0:
        return int(math.floor(v + 0.5))
    return -int(math.floor(-v + 0.5))


class GridMap:
    """A map of cells of side ``delta`` over a storage such as Array2D.

    Cell indexes are integer Points; world positions are Points in metres.
    Reading an unallocated or outside cell with :meth:`value` gives ``unknown``.
    """

    def __init__(
        self,
        center: Point,
        xmin: float,
        ymin: float,
        xmax: float,
        ymax: float,
        delta: float,
        storage_factory: StorageFactory = Array2D,
        unknown: Any = -1.0,
    ):
        storage = storage_factory(
            int(math.ceil((xmax - xmin) / delta)), int(math.ceil((ymax - ymin) / delta))
        )
        self._setup(
            center,
            xmax - xmin,
            ymax - ymin,
            delta,
            storage,
            unknown,
            _c_round((center.x - xmin) / delta),
            _c_round((center.y - ymin) / delta),
        )

    def _setup(self, center, world_x, world_y, delta, storage, unknown, sx2=None, sy2=None):
        self._center = Point(center.x, center.y)
        self._world_size_x = world_x
        self._world_size_y = world_y
        self._delta = delta
        self._storage = storage
        self.unknown = unknown
        self._update_map_size()
        self._size_x2 = self._map_size_x >> 1 if sx2 is None else sx2
        self._size_y2 = self._map_size_y >> 1 if sy2 is None else sy2

    def _update_map_size(self) -> None:
        self._map_size_x = self._storage.xsize << self._storage.patch_size
        self._map_size_y = self._storage.ysize << self._storage.patch_size

    @classmethod
    def from_map_size(
        cls,
        map_size_x: int,
        map_size_y: int,
        delta: float,
        storage_factory: StorageFactory = Array2D,
        unknown: Any = -1.0,
    ) -> GridMap:
        """A map of the given cell counts whose centre is the middle of the grid."""
        grid = cls.__new__(cls)
        world_x, world_y = map_size_x * delta, map_size_y * delta
        grid._setup(
            Point(0.5 * world_x, 0.5 * world_y),
            world_x,
            world_y,
            delta,
            storage_factory(map_size_x, map_size_y),
            unknown,
        )
        return grid

    @classmethod
    def from_world_size(
        cls,
        center: Point,
        world_size_x: float,
        world_size_y: float,
        delta: float,
        storage_factory: StorageFactory = Array2D,
        unknown: Any = -1.0,
    ) -> GridMap:
        """A map of the given world extent centred on ``center``."""
        grid = cls.__new__(cls)
        storage = storage_factory(
            int(math.ceil(world_size_x / delta)), int(math.ceil(world_size_y / delta))
        )
        grid._setup(center, world_size_x, world_size_y, delta, storage, unknown)
        return grid

    @property
    def center(self) -> Point:
        return self._center

    @property
    def world_size_x(self) -> float:
        return self._world_size_x

    @property
    def world_size_y(self) -> float:
        return self._world_size_y

    @property
    def map_size_x(self) -> int:
        return self._map_size_x

    @property
    def map_size_y(self) -> int:
        return self._map_size_y

    @property
    def delta(self) -> float:
        return self._delta

    resolution = delta

    @property
    def storage(self) -> Any:
        return self._storage

    def _reshape(self, imin: Point, imax: Point, xmin, ymin, xmax, ymax) -> None:
        scale = float(1 << self._storage.patch_magnitude)
        pxmin = int(math.floor(imin.x / scale))
        pxmax = int(math.ceil(imax.x / scale))
        pymin = int(math.floor(imin.y / scale))
        pymax = int(math.ceil(imax.y / scale))
        self._storage.resize(pxmin, pymin, pxmax, pymax)
        self._update_map_size()
        self._world_size_x = xmax - xmin
        self._world_size_y = ymax - ymin
        self._size_x2 -= pxmin * int(scale)
        self._size_y2 -= pymin * int(scale)

    def resize(self, xmin: float, ymin: float, xmax: float, ymax: float) -> None:
        """Reshape the map to cover the given world rectangle."""
        imin = self.world2map(Point(xmin, ymin))
        imax = self.world2map(Point(xmax, ymax))
        self._reshape(imin, imax, xmin, ymin, xmax, ymax)

    def grow(self, xmin: float, ymin: float, xmax: float, ymax: float) -> None:
        """Enlarge the map, if needed, so that it also covers the given rectangle."""
        imin = self.world2map(Point(xmin, ymin))
        imax = self.world2map(Point(xmax, ymax))
        if self.is_inside(imin) and self.is_inside(imax):
            return
        imin = point_min(imin, Point(0, 0))
        imax = point_max(imax, Point(self._map_size_x - 1, self._map_size_y - 1))
        self._reshape(imin, imax, xmin, ymin, xmax, ymax)

    def world2map(self, p: Point) -> Point:
        """Index of the cell containing world position ``p``."""
        return Point(
            _c_round((p.x - self._center.x) / self._delta) + self._size_x2,
            _c_round((p.y - self._center.y) / self._delta) + self._size_y2,
        )

    def map2world(self, p: Point) -> Point:
        """World position of the centre of cell ``p``."""
        return (
            Point((p.x - self._size_x2) * self._delta, (p.y - self._size_y2) * self._delta)
            + self._center
        )

    def size(self) -> Tuple[float, float, float, float]:
        """World positions ``(xmin, ymin, xmax, ymax)`` of the first and last cells."""
        low = self.map2world(Point(0, 0))
        high = self.map2world(Point(self._map_size_x - 1, self._map_size_y - 1))
        return low.x, low.y, high.x, high.y

    def is_inside(self, p: Point) -> bool:
        """Whether cell index ``p`` lies within the map."""
        return bool(self._storage.cell_state(p.x, p.y) & AccessibilityState.INSIDE)

    def _require_inside(self, p: Point) -> None:
        if not self.is_inside(p):
            raise IndexError(f"cell ({p.x}, {p.y}) is outside the map")

    def cell(self, p: Point) -> Any:
        """The cell at index ``p``, allocating storage if needed."""
        self._require_inside(p)
        return self._storage.cell(p.x, p.y)

    def set_cell(self, p: Point, value: Any) -> None:
        """Store ``value`` in the cell at index ``p``."""
        self._require_inside(p)
        self._storage.set_cell(p.x, p.y, value)

    def value(self, p: Point) -> Any:
        """The cell at ``p`` if its storage exists, otherwise ``unknown``."""
        if self._storage.cell_state(p.x, p.y) & AccessibilityState.ALLOCATED:
            return self._storage.cell(p.x, p.y)
        return self.unknown

    def to_double_array(self) -> Array2D:
        """Cell values as floats, leaving out the last row and column."""
        result = Array2D(self._map_size_x - 1, self._map_size_y - 1)
        for x in range(self._map_size_x - 1):
            for y in range(self._map_size_y - 1):
                result.set_cell(x, y, float(self.value(Point(x, y))))
        return result

    def to_double_map(self) -> GridMap:
        """A float map over the same extent, filled index by index."""
        pmin = self.map2world(Point(0, 0))
        pmax = self.map2world(Point(self._map_size_x - 1, self._map_size_y - 1))
        center = (pmax + pmin) * 0.5
        extent = pmax - pmin
        plain = GridMap.from_world_size(center, extent.x, extent.y, self._delta)
        for x in range(self._map_size_x - 1):
            for y in range(self._map_size_y - 1):
                p = Point(x, y)
                plain.set_cell(p, float(self.value(p)))
        return plain