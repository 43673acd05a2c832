[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gravduck"
version = "0.1.0"
description = "A gravity-flipping tile puzzle platformer: guide the duck to its egg by turning gravity."
requires-python = ">=3.10"
keywords = ["game", "puzzle", "platformer", "gravity", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: MacOS X",
    "Environment :: Win32 (MS Windows)",
    "Environment :: X11 Applications",
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
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gravduck = "gravduck.game:main"

[tool.hatch.build.targets.wheel]
packages = ["gravduck"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
