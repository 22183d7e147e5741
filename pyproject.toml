[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rmlite"
version = "0.1.0"
description = "Building blocks of a small relational database engine: record ids, typed values, errors, result printing, transactions and two-phase locking."
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "rdbms", "transactions", "locking", "two-phase-locking"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rmlite"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
