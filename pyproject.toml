[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wireapi"
version = "0.1.0"
description = "Microcontroller-style Print, Stream, serial settings, DMA buffer pools and pluggable USB modules in pure Python"
requires-python = ">=3.10"
dependencies = []
keywords = ["embedded", "serial", "stream", "print", "usb", "dma", "firmware", "simulation"]
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
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["wireapi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
