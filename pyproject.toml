[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "solid-snake"
version = "0.1.0"
description = "A wrap-around snake arcade game with a smoothly gliding body, built on pygame"
requires-python = ">=3.10"
keywords = ["snake", "game", "arcade", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
solid-snake = "solid_snake.app:main"

[tool.hatch.build.targets.wheel]
packages = ["solid_snake"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
