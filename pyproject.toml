[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ravenctl"
version = "0.1.0"
description = "Control-loop building blocks for a two-arm cable-driven surgical robot: data structures, state estimation, trajectories, torque-to-DAC conversion and runlevel handling."
requires-python = ">=3.10"
dependencies = []
keywords = ["robotics", "surgical robot", "control loop", "trajectory", "state estimation", "low-pass filter"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ravenctl"]

[tool.pytest.ini_options]
addopts = "-ra"
