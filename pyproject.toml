[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "masterdata"
version = "0.1.0"
description = "Loaders and lookup catalogs for game master-data tables stored as JSON"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "master data", "catalog", "json", "rpg"]
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
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["masterdata"]

[tool.pytest.ini_options]
addopts = "-ra"
