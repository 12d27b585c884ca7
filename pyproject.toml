[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aviatorgame"
version = "0.1.0"
description = "A small networked crash-style betting game: a TCP server that runs a betting round and a terminal client that places a bet"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "aviator", "tcp", "socket", "client-server", "betting"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
aviator-server = "aviatorgame.server:main"
aviator-client = "aviatorgame.client:main"

[tool.hatch.build.targets.wheel]
packages = ["aviatorgame"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
