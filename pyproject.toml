[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "btcarpad"
version = "0.1.0"
description = "Console remote control for a Bluetooth RFCOMM car: joypad, speed dials and a simple line protocol"
requires-python = ">=3.10"
dependencies = []
keywords = ["bluetooth", "rfcomm", "rc-car", "joypad", "remote-control"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Home Automation",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
btcarpad = "btcarpad.app:main"

[tool.hatch.build.targets.wheel]
packages = ["btcarpad"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
