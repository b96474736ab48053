[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "matgen"
version = "0.1.0"
description = "Sparse COO and CSR matrices, a CSR builder, and nearest-neighbour and bilinear rescaling of sparse matrices"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "sparse matrix",
    "coo",
    "csr",
    "matrix scaling",
    "nearest neighbor",
    "bilinear interpolation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["matgen"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
