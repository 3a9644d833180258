[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "surveykit"
version = "0.1.0"
description = "Interactive terminal prompts: a filterable select list, validators, transformers and answer collection"
requires-python = ">=3.10"
dependencies = []
keywords = ["terminal", "prompt", "cli", "select", "interactive", "survey"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: User Interfaces",
    "Topic :: Terminals",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["surveykit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
