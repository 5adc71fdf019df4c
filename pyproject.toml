[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tower"
version = "0.1.0"
description = "A small turn-based dungeon crawler for the terminal, with generated levels, melee combat and an event-driven game core"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "roguelike",
    "dungeon",
    "game",
    "turn-based",
    "terminal",
    "pathfinding",
    "event-bus",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tower = "tower.game.display:main"

[tool.hatch.build.targets.wheel]
packages = ["tower"]

[tool.pytest.ini_options]
addopts = "-ra"
