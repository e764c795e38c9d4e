[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "containertest"
version = "0.20.0"
description = "Building blocks for tests that run throwaway containers: image and registry parsing, socket discovery, build-context archives, lifecycle hooks and log handling."
requires-python = ">=3.10"
dependencies = []
keywords = ["containers", "docker", "testing", "integration-tests", "lifecycle", "tar"]
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
    "Topic :: Software Development :: Testing",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["containertest"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
