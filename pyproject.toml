[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fastmap"
version = "0.1.0"
description = "Hash map built from an extensible directory of fixed-size tables with 8-bit top-hash groups and tombstones"
requires-python = ">=3.10"
dependencies = []
keywords = ["hash map", "hash table", "extendible hashing", "open addressing", "tombstones"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fastmap"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
