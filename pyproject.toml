[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "arenalegends"
version = "0.1.0"
description = "Rules engine for a two-player real-time card battle arena: units, towers, spells, projectiles, match clock and a server client."
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "real-time strategy", "card battle", "simulation", "arena"]
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
    "Topic :: Games/Entertainment :: Real Time Strategy",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["arenalegends"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
