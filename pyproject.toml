[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "seqprims"
version = "0.1.0"
description = "Sequence primitives: delayed sequences, monoids, scans, packs, sample sort, collect-reduce and group-by"
requires-python = ">=3.10"
dependencies = []
keywords = ["sequence", "monoid", "scan", "reduce", "sort", "group-by", "histogram"]
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
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["seqprims"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
