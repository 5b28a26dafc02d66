[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "touchkit"
version = "0.1.0"
description = "Resistive touch panel handling: orientation, calibration, hold acceleration and touch state tracking."
requires-python = ">=3.10"
dependencies = []
keywords = ["touch", "touchscreen", "resistive", "calibration", "embedded"]
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
    "Typing :: Typed",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["touchkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
