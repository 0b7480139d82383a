[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "meterdsp"
version = "0.1.0"
description = "Audio level metering, meter layout geometry and sample-buffer utilities"
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "meter", "dsp", "rms", "peak", "envelope", "level"]
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
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["meterdsp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
