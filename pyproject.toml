[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pcstream"
version = "0.1.0"
description = "Building blocks for adaptive point cloud streaming: viewport estimation, visibility computation and DASH segment requests"
requires-python = ">=3.10"
dependencies = []
keywords = ["point cloud", "streaming", "DASH", "MPD", "viewport", "volumetric video"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pcstream"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
