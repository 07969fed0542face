[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "actionlint_core"
version = "0.1.0"
description = "Core analyses for GitHub Actions workflows: expression parsing, template-injection safety, environment-file writes and ignore configuration"
requires-python = ">=3.10"
dependencies = ["pyyaml"]
keywords = ["github-actions", "static-analysis", "security", "workflows"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["actionlint_core"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
