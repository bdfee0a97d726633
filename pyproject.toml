[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "firewater"
version = "0.1.0"
description = "A two-player cooperative platformer with a fire character and a water character on a tile grid"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "platformer", "pygame", "cooperative", "tile-grid"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
firewater = "firewater.main:main"

[tool.hatch.build.targets.wheel]
packages = ["firewater"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
