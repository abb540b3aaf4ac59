[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mythonkit"
version = "0.1.0"
description = "Runtime objects and an executable syntax tree for Mython, a small Python-like language, plus a singly linked list"
requires-python = ">=3.10"
dependencies = []
keywords = ["interpreter", "mython", "ast", "runtime", "linked list"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mythonkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
