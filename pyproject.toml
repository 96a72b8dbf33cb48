[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slowclient"
version = "0.1.0"
description = "Client for the SLOW session-based transport protocol carried over UDP"
requires-python = ">=3.10"
dependencies = []
keywords = ["udp", "transport", "protocol", "networking", "client", "slow"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
slowclient = "slowclient.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["slowclient"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
