[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "anchorlib"
version = "0.1.0"
description = "Small embedded-style building blocks: a table-driven state machine, a formatting logging core and SONAR attribute and error-counter types"
requires-python = ">=3.10"
dependencies = []
keywords = ["fsm", "state machine", "logging", "embedded", "sonar", "attributes"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["anchorlib"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
