[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "teletrace"
version = "0.1.0"
description = "Distributed tracing SDK with spans, samplers, span processors and W3C, B3 and binary context propagation"
requires-python = ">=3.10"
dependencies = []
keywords = ["tracing", "distributed-tracing", "spans", "b3", "traceparent", "telemetry"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["teletrace"]

[tool.pytest.ini_options]
addopts = "-ra"
