[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "koder"
version = "0.1.0"
description = "Editor support library: settings, find/replace history, .editorconfig matching, colour themes and language definitions"
requires-python = ">=3.10"
keywords = ["editor", "editorconfig", "syntax-highlighting", "preferences", "themes"]
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
    "Topic :: Text Editors",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["koder"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
