[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tilemapper"
version = "0.1.0"
description = "A grid-based tile map editor with profiles, texture folders and plain-text map files"
requires-python = ">=3.10"
keywords = ["tilemap", "map editor", "level editor", "pygame", "game development"]
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
    "Topic :: Games/Entertainment",
    "Topic :: Multimedia :: Graphics :: Editors",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tilemapper = "tilemapper.app:main"

[tool.hatch.build.targets.wheel]
packages = ["tilemapper"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
