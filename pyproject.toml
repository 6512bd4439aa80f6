[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gemdb"
version = "0.1.0"
description = "A tiny in-memory table store with packed row layout and one-to-many relations"
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "in-memory", "table", "relations", "storage"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Intended Audience :: Developers",
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

[project.scripts]
gemdb = "gemdb.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gemdb"]

[tool.pytest.ini_options]
addopts = "-ra"
