[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "morphmania"
version = "0.1.0"
description = "Game logic for a shape-shifting bead hunt: walk meshes, morph movement, audio mixing, text layout and tutorial flow"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "walkmesh", "barycentric", "audio-mixer", "text-layout", "tutorial"]
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
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["morphmania"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
