[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "berquest"
version = "0.1.0"
description = "A small tile-based puzzle game: collect every coin on a .ber map, then reach the exit."
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "puzzle", "tile", "xpm", "maze"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
berquest = "berquest.display:main"

[tool.hatch.build.targets.wheel]
packages = ["berquest"]

[tool.pytest.ini_options]
addopts = "-ra"
