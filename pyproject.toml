[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minisearch"
version = "0.1.0"
description = "A small article search service: authors, tags and articles in SQLite, full-text search through Meilisearch, served over HTTP with Flask."
requires-python = ">=3.10"
keywords = ["search", "meilisearch", "articles", "tags", "sqlite", "flask", "http-api"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
]
dependencies = [
    "flask>=2.2",
    "requests>=2.28",
    "backoff>=2.2",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[project.scripts]
minisearch = "minisearch.app:main"

[tool.hatch.build.targets.wheel]
packages = ["minisearch"]

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
warn_redundant_casts = true
