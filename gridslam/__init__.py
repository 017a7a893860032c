"""Poses, motion, statistics, occupancy grids, scan-matching map cells and particle-filter helpers for grid-based SLAM."""

__version__ = "0.1.0"