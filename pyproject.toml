[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cropgrid"
version = "0.1.0"
description = "Building blocks for a daily crop growth model: Penman evaporation, soil water balance, N/P/K nutrient status, parameter-file parsing and result formatting"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "crop model",
    "agronomy",
    "evapotranspiration",
    "penman",
    "penman-monteith",
    "water balance",
    "nutrients",
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
    "Topic :: Scientific/Engineering :: Atmospheric Science",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cropgrid"]

[tool.pytest.ini_options]
addopts = "-ra"
