[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bnsl"
version = "0.1.0"
description = "Bayesian network structure learning by genetic search over variable orderings"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "bayesian-network",
    "structure-learning",
    "genetic-algorithm",
    "local-search",
    "ordering-search",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bnsl-search = "bnsl.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["bnsl"]

[tool.pytest.ini_options]
addopts = "-ra"
