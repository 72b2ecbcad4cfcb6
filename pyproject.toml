[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fontkeeper"
version = "0.1.0"
description = "Install and uninstall user fonts in a managed font directory, tracked by a JSON registry of full names."
requires-python = ">=3.10"
dependencies = []
keywords = ["fonts", "truetype", "opentype", "ttc", "font-installer", "font-registry"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Fonts",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
fontkeeper = "fontkeeper.client:main"

[tool.hatch.build.targets.wheel]
packages = ["fontkeeper"]

[tool.hatch.build.targets.sdist]
include = ["fontkeeper", "tests", "README.md", "pyproject.toml"]

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
