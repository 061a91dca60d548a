[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pkapps"
version = "0.1.0"
description = "Small user-space tools: a fixed-point neural network, a tagged heap allocator, a window-server protocol, file utilities, a minimal shell and a socket counter service"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "fixed-point",
    "neural-network",
    "allocator",
    "shell",
    "coreutils",
    "unix-socket",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pknn = "pkapps.nn:main"
pkwin = "pkapps.pkwin:main"
pkutils = "pkapps.coreutils:main"
pksh = "pkapps.shell:main"
pkcounter = "pkapps.counter:main"

[tool.hatch.build.targets.wheel]
packages = ["pkapps"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
