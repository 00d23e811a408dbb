[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coltty"
version = "0.1.0"
description = "Switch terminal color schemes automatically based on the current directory"
requires-python = ">=3.11"
keywords = ["terminal", "color-scheme", "theme", "shell", "osc", "ghostty", "iterm2", "tmux"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Operating System :: MacOS",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Terminal Emulators/X Terminals",
    "Topic :: Utilities",
]
dependencies = [
    "pyyaml",
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
coltty = "coltty.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["coltty"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
