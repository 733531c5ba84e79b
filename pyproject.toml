[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bookcheck"
version = "0.1.0"
description = "Word, page and diagram metrics, badge updates and a custom linter for Markdown book sources"
requires-python = ">=3.10"
keywords = ["markdown", "lint", "book", "metrics", "svg", "badges"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Markup :: Markdown",
    "Topic :: Documentation",
]
dependencies = [
    "termcolor",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
bookcheck = "bookcheck.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["bookcheck"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
