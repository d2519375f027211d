[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "foccuss"
version = "1.0.0"
description = "Application blocker that stops chosen programs from running during scheduled focus hours"
requires-python = ">=3.10"
keywords = ["focus", "productivity", "blocker", "schedule", "systemd"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]
dependencies = [
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
foccuss = "foccuss.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["foccuss"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
