[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pixmorph"
version = "0.1.0"
description = "Project model, control-point editing and track propagation for pixel-level video morphing"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["morphing", "video", "optical flow", "control points", "recursive filter"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video :: Non-Linear Editor",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["pixmorph"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
