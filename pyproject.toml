[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "delaunay"
version = "0.1.0"
description = "SVG reader producing cubic Bezier shapes, with small numeric helpers for mesh generation"
requires-python = ">=3.10"
dependencies = []
keywords = ["svg", "bezier", "geometry", "parser", "transform"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["delaunay"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
