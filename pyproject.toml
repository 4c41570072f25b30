[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kltekit"
version = "0.1.0"
description = "Device support utilities: target detection, message queue, config reader, timers, LED, power and recovery-key handling"
requires-python = ">=3.10"
dependencies = []
keywords = ["gps", "sysfs", "leds", "message-queue", "configuration", "timer"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kltekit"]

[tool.pytest.ini_options]
addopts = "-ra"
