[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slimefield"
version = "0.1.0"
description = "Game logic for a small third-person slime arena: vector math, collision, characters, projectiles, enemies, scenes and WAV parsing"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "collision", "physics", "camera", "wav", "simulation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: First Person Shooters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["slimefield"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
