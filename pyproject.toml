[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "raftkit"
version = "0.7.0"
description = "Building blocks of the Raft consensus algorithm: quorum arithmetic and the unstable log."
requires-python = ">=3.10"
dependencies = []
keywords = ["raft", "consensus", "distributed-systems", "quorum", "replication"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["raftkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
