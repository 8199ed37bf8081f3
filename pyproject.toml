[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sqlgen"
version = "0.2.3"
description = "Generate Rust model structs and enums from a SQL database schema"
requires-python = ">=3.10"
keywords = ["sql", "codegen", "rust", "sqlx", "postgres", "models"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: Software Development :: Code Generators",
]
dependencies = [
    "sqlalchemy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["sqlgen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
