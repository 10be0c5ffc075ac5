[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rivetdb"
version = "0.1.0"
description = "Table cache storage backends, HTTP API error and model types, and column-to-JSON encoding for a query service"
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "cache", "parquet", "storage", "s3", "json", "api"]
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
    "Topic :: Database",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rivetdb"]

[tool.pytest.ini_options]
addopts = "-ra"
