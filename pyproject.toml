[build-system]
requires = ["hatchling>=1.18"]
build-backend = "hatchling.build"

[project]
name = "searchctl"
version = "0.1.0"
description = "Toolkit for managing Elasticsearch and OpenSearch clusters: indices, data streams, templates, lifecycle policies, cluster settings and configuration cloning."
requires-python = ">=3.10"
dependencies = [
    "pyyaml>=6.0",
]
keywords = [
    "elasticsearch",
    "opensearch",
    "cluster",
    "index-templates",
    "lifecycle-policies",
    "data-streams",
    "administration",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[tool.hatch.build.targets.wheel]
packages = ["searchctl"]

[tool.hatch.build.targets.sdist]
include = ["searchctl", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
