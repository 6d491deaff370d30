[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kiwi"
version = "0.1.0"
description = "Building blocks for small real-time applications: a typed component store, reader/writer guarded components, input state, a camera, texture layers and render pipeline ordering."
requires-python = ">=3.10"
keywords = ["game", "engine", "components", "camera", "render-pipeline", "textures"]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["kiwi"]

[tool.pytest.ini_options]
addopts = "-ra"
