[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gridslam"
version = "0.1.0"
description = "Building blocks for grid-based SLAM: poses, movements, statistics, occupancy grids, scan-matching map cells and particle-filter helpers."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["slam", "robotics", "occupancy-grid", "particle-filter", "mapping", "pose"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["gridslam"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
