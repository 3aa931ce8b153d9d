[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zemeroth"
version = "0.1.0"
description = "Rules of a hex-grid turn-based tactics game: hex maps, battle state, pathfinding, scenarios and campaign progress."
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "hex", "hexagonal-grid", "turn-based", "tactics", "pathfinding"]
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
    "Topic :: Games/Entertainment :: Turn Based Strategy",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zemeroth"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
