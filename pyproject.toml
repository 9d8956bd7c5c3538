[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "duckyland"
version = "0.1.0"
description = "A small 2D pygame game: a pixel-art duck walking around a wrapping world, with splash, title, menus and pause."
requires-python = ">=3.10"
keywords = ["game", "2d", "pygame", "pixel-art"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
duckyland = "duckyland.app:main"

[tool.hatch.build.targets.wheel]
packages = ["duckyland"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
