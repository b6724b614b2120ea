[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hpckernels"
version = "0.1.0"
description = "Reference kernels for sparse matrix-vector products, streaming k-median clustering and Heath-Jarrow-Morton rate models"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "spmv",
    "sparse matrix",
    "csr",
    "matrix market",
    "k-median",
    "clustering",
    "streamcluster",
    "HJM",
    "inverse normal",
    "benchmark",
]
classifiers = [
    "Development Status :: 4 - Beta",
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
    "Topic :: Office/Business :: Financial :: Investment",
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
hpc-spmv = "hpckernels.spmv_cli:main"
hpc-streamcluster = "hpckernels.streamcluster:main"

[tool.hatch.build.targets.wheel]
packages = ["hpckernels"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
