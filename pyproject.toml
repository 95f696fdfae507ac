[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pngtools"
version = "0.1.0"
description = "PNG scanline filtering, big-endian chunk I/O and text metadata chunks (tEXt, zTXt, iTXt)"
requires-python = ">=3.10"
dependencies = []
keywords = ["png", "filter", "scanline", "chunk", "metadata", "text"]
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
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pngtools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
