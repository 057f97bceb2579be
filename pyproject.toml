[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "picsim"
version = "0.1.0"
description = "A small simulator for a PIC16-style microcontroller core with banked memory"
requires-python = ">=3.10"
dependencies = []
keywords = ["pic", "microcontroller", "simulator", "emulator", "pic16"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
picsim = "picsim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["picsim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
