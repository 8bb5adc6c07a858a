[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "logerr"
version = "0.1.0"
description = "Thread-safe logging helpers: background log file writer, line-based log stream, stack traces, crash dumps and a concurrent queue"
requires-python = ">=3.10"
dependencies = []
keywords = ["logging", "stack trace", "crash dump", "concurrent queue", "threading", "rwlock"]
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
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["logerr"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
