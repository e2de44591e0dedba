[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "effalg"
version = "0.1.0"
description = "Finite effect algebras: MV-blocks, lattice effect algebras pasted from blocks, and filters of table-given lattice effect algebras"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "effect algebra",
    "lattice effect algebra",
    "MV-algebra",
    "quantum structures",
    "filters",
    "algebra",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
effalg = "effalg.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["effalg"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
