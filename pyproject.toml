[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vulnscout"
version = "1.3.2"
description = "Version comparison across package ecosystems, lockfile and SBOM reading, vulnerability grouping and ignore-list configuration"
requires-python = ">=3.11"
dependencies = []
keywords = [
    "vulnerability",
    "security",
    "sbom",
    "lockfile",
    "semver",
    "version-comparison",
    "cyclonedx",
    "spdx",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vulnscout"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
