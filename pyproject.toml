[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "deskkit"
version = "0.1.0"
description = "Small desktop utilities: a daily Bing image downloader, a serial run-record logger, a framed message protocol and helpers."
requires-python = ">=3.10"
dependencies = [
    "pyserial",
]
keywords = [
    "wallpaper",
    "bing",
    "serial",
    "protocol",
    "logging",
    "desktop",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
deskkit-wallpaper = "deskkit.wallpaper:main"
deskkit-recordlog = "deskkit.recordlog:main"

[tool.hatch.build.targets.wheel]
packages = ["deskkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
