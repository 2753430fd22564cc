[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rumbling"
version = "0.1.0"
description = "Same-domain web crawler that stores page text in SQLite and extracts keywords with RAKE"
requires-python = ">=3.10"
keywords = ["crawler", "rake", "keywords", "search", "indexing", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: Flask",
    "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
    "Topic :: Text Processing :: Linguistic",
]
dependencies = [
    "flask",
    "python-dotenv",
    "beautifulsoup4",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
rumbling = "rumbling.server:main"

[tool.hatch.build.targets.wheel]
packages = ["rumbling"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
