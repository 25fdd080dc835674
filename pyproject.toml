[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voda"
version = "0.1.0"
description = "Core of a shared exchange-diary service: room turns, members, alarms, task payloads, tables and clients."
requires-python = ">=3.10"
keywords = ["diary", "exchange-diary", "rooms", "push-notifications", "scheduling"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]
dependencies = [
    "sqlalchemy>=2.0",
    "pyyaml>=6.0",
    "pyjwt>=2.4",
    "requests>=2.28",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[tool.hatch.build.targets.wheel]
packages = ["voda"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
