[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "npcbehavior"
version = "0.1.0"
description = "NPC behaviour building blocks: world events, a decision centre, JSON-configured components, a broadcast hub, a message router and scale-experiment tooling"
requires-python = ">=3.10"
dependencies = []
keywords = ["npc", "game-ai", "fsm", "behavior-tree", "simulation", "blackboard"]
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
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["npcbehavior"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
