[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tileforge"
version = "0.1.0"
description = "Core of a node-based procedural tile texture editor: project files, node graph, undo history, layout and editor state"
requires-python = ">=3.10"
dependencies = []
keywords = ["tiles", "textures", "procedural", "node-graph", "pixel-art", "palette"]
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
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tileforge"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
