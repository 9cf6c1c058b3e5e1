[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kodecd"
version = "0.1.0"
description = "Building blocks for static security analysis: a query language, built-in security queries, query metadata and finding reports"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "sast",
    "static-analysis",
    "security",
    "query-language",
    "owasp",
    "cwe",
]
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
    "Topic :: Software Development :: Quality Assurance",
    "Topic :: Security",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["kodecd"]

[tool.hatch.build.targets.sdist]
include = [
    "kodecd",
    "tests",
    "pyproject.toml",
    "README.md",
]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
