[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "snap2zombie"
version = "0.1.0"
description = "Write storage entries as hex snapshot lines, merge hex snapshots into raw chain spec files and pad files to a target size."
requires-python = ">=3.10"
dependencies = []
keywords = ["chain-spec", "snapshot", "zombienet", "storage", "genesis", "xxhash"]
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
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
snap2zombie = "snap2zombie.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["snap2zombie"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
