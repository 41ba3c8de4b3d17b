[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tagstream"
version = "0.1.6"
description = "Streaming processor for model output that dispatches the text inside XML-style tags to streaming or buffered callbacks, with tags matched across chunk boundaries."
requires-python = ">=3.10"
dependencies = []
keywords = ["llm", "streaming", "tags", "parser", "tokens", "callbacks"]
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
    "Framework :: AsyncIO",
    "Topic :: Text Processing :: Filters",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
tagstream-demo = "tagstream.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["tagstream"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
