# gridslam

Building blocks for grid-based simultaneous localisation and mapping (SLAM):
pose algebra, motion increments, Gaussian statistics, occupancy grids with
on-demand storage, scan-matching map cells and particle-filter helpers.

## Modules

- `gridslam.point`: frozen `Point` and `OrientedPoint` dataclasses. Points add,
  subtract, scale by a number and give the dot product when multiplied by
  another point. Helpers: `normalize_angle` (into [-pi, pi)),
  `absolute_difference`, `absolute_sum`, `point_min`, `point_max`,
  `interpolate`, `euclidean_distance` and `radial_angle`.
- `gridslam.movement`: `FSRMovement` (forward, sideward, rotate) with
  `between`, `compose`, `inverted`, `normalized` and `move`, plus
  `frame_transformation` to carry a pose from one frame into another.
- `gridslam.stat`: `sample_gaussian` (polar Box-Muller; a nonzero seed
  reseeds the generator), `eval_gaussian`, `eval_log_gaussian`,
  `sample_uniform_int`, `sample_uniform_double`, `Covariance3`,
  `EigenCovariance3` (eigenvalues in ascending order, `rotate`, `sample`),
  `Gaussian3.eval` (log likelihood) and `gaussian_from_samples`. Without
  weights, `gaussian_from_samples` divides its sums by `n + 1`.
- `gridslam.icp`: `icp_step` and `icp_nonlinear_step`, each taking
  `(first, second)` point pairs and returning the transform and the summed
  squared residual. An empty list raises `ValueError`.
- `gridslam.datasmoother`: `DataSmoother`, a Gaussian-kernel density over
  weighted 1D samples, with integration, `sample`, `sample_multiple`,
  `sample_numeric`, `approx_gauss`, `cramer_von_mises_to_gauss`,
  `kld_to_gauss` and text dumps (`dump_data`, `dump_smoothed_data`).
- `gridslam.dmatrix`: `DMatrix`, a small dense matrix read and written as
  `m[i, j]`, with `det`, `inv`, `transpose`, `identity`, `+`, `-` and `*`.
  Errors derive from `MatrixError`: `NotInvertibleMatrixError`,
  `IncompatibleMatrixError`, `NotSquareMatrixError`.
- `gridslam.boundingbox`: `OrientedBoundingBox`, aligned with the principal
  axes of a point set, with corners `ul`, `ur`, `ll`, `lr` and `area()`. A set
  whose covariance has no usable eigenvectors raises `ValueError`.
- `gridslam.array2d`: `AccessibilityState` flags and `Array2D`, a dense grid
  with `cell`, `set_cell`, `is_inside`, `cell_state`, `resize`, `clear` and
  `copy`. Access outside the grid raises `IndexError`.
- `gridslam.harray2d`: `HierarchicalArray2D`, a grid of square patches that
  are allocated on first access and shared between copies;
  `set_active_area` and `alloc_active_area` give chosen patches private
  storage.
- `gridslam.gridmap`: `GridMap`, which relates world coordinates to cells of
  a storage (`world2map`, `map2world`, `resize`, `grow`, `cell`, `set_cell`,
  `value`, `to_double_array`, `to_double_map`). `value` returns the map's
  `unknown` for unallocated or outside cells.
- `gridslam.smmap`: `PointAccumulator` occupancy cells (hit and visit counts,
  hit positions summed in single precision, `occupancy`, `mean`, `entropy`)
  and `scan_matcher_map`, a `GridMap` of such cells in 32x32 patches.
- `gridslam.particlefilter`: `to_normal_form`, `to_log_form`, systematic
  resampling (`resample_indexes`, `UniformResampler`), `repeat_indexes`,
  `neff`, `normalize`, `rle`, and the `Evolver` and `AuxiliaryEvolver` steps.
- `gridslam.optimizer`: `Optimizer`, which refines a pose by trying the six
  `Move`s and halving its steps when none helps; the likelihood function and
  local map are supplied by the caller through `OptimizerParams` and
  factories.
- `gridslam.pgm`: `write_pgm`, which writes a grid of values as a binary P5
  image, values near 1 dark.
- `gridslam.memusage`: `memory_usage` and `print_memory_usage`, which read
  `VmData` and `VmSize` from a process status file (by default the current
  process's `/proc` entry; an unreadable file gives nothing).

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from gridslam.point import OrientedPoint, absolute_difference
from gridslam.movement import FSRMovement

start = OrientedPoint(0.0, 0.0, 0.0)
goal = OrientedPoint(1.0, 1.0, 1.57)

step = FSRMovement.between(start, goal)
print(step.move(start))                    # goal again
print(absolute_difference(goal, start))    # goal seen from start
```

```python
from gridslam.particlefilter import neff, resample_indexes

weights = [0.1, 0.2, 0.7]
print(neff(weights))
print(resample_indexes(weights, 0))        # random, ascending indexes
```

```python
from gridslam.point import Point
from gridslam.smmap import scan_matcher_map

grid = scan_matcher_map(Point(0, 0), -10, -10, 10, 10, 0.05)
cell = grid.cell(grid.world2map(Point(1.0, 2.0)))
cell.update(True, Point(1.0, 2.0))
print(cell.occupancy())                    # 1.0
```

## What the package does not do

There is no complete SLAM processor here: no scan matcher that scores laser
readings against a map, no sensor or reading types, no log-file reader, and
no command-line program. `Optimizer` only searches poses with a likelihood
and a local map that you provide, and the map modules store cells without
any ray casting of scans into them.