[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mapnav"
version = "0.1.0"
description = "Waypoint maps, line-of-sight checks, and A* and Bug pathfinding for 3D navigation"
requires-python = ">=3.10"
dependencies = []
keywords = ["pathfinding", "a-star", "bug-algorithm", "line-of-sight", "waypoints", "navigation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mapnav"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
