[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lumos"
version = "0.1.0"
description = "Control laptop backlight and external monitor brightness from the command line"
requires-python = ">=3.10"
keywords = ["backlight", "brightness", "ddc", "ddc-ci", "sysfs", "udev", "monitor"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware",
    "Topic :: Utilities",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lumos = "lumos.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["lumos"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
