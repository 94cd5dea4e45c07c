[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mbfea"
version = "0.1.0"
description = "Contact detection, FIRE energy minimisation and text output for multi-body finite-element simulations of soft 2D particles"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "finite elements",
    "contact mechanics",
    "FIRE",
    "energy minimisation",
    "hermite interpolation",
    "node-to-segment contact",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["mbfea"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
