[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "semweaver"
version = "0.1.0"
description = "Shared tooling for semantic convention registries: loggers, diagnostics, policy violations, directory diffs and generated-module assembly."
requires-python = ">=3.10"
dependencies = []
keywords = ["semantic-conventions", "code-generation", "diagnostics", "diff", "policy"]
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
    "Topic :: Software Development :: Code Generators",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["semweaver"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
