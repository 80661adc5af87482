[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "akiutils"
version = "0.1.0"
description = "Errors with their place of origin, a terminal logger, IP address patterns and values, and UNIX socket helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["ip", "ipv4", "ipv6", "cidr", "regex", "logger", "errors", "sockets", "unix-socket"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["akiutils"]

[tool.pytest.ini_options]
addopts = "-ra"
