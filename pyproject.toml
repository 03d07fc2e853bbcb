[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tinysh"
version = "0.1.0"
description = "A small interactive command shell with aliases, pipes, tab completion and history"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "repl", "command-line", "readline", "aliases", "pipes"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tinysh = "tinysh.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tinysh"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
