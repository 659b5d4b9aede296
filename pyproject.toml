[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "amarillo"
version = "0.5.0"
description = "Core of a small 3D game engine: scene graph, transforms, cameras, meshes, JSON documents and asset file helpers"
requires-python = ">=3.10"
keywords = ["game engine", "scene graph", "3d", "camera", "mesh", "transform", "quaternion"]
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
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
amarillo = "amarillo.application:main"

[tool.hatch.build.targets.wheel]
packages = ["amarillo"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
