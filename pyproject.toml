[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sphfluid"
version = "1.0.0"
description = "Two-dimensional smoothed particle hydrodynamics fluid simulation with rigid boundaries and an interactive viewer"
requires-python = ">=3.10"
keywords = ["sph", "fluid", "simulation", "physics", "particles", "hydrodynamics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Scientific/Engineering :: Visualization",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
sphfluid-demo = "sphfluid.demo:main"
sphfluid-sandbox = "sphfluid.sandbox:main"

[tool.hatch.build.targets.wheel]
packages = ["sphfluid"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
