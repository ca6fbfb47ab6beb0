[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "atombar"
version = "0.1.0"
description = "A small networked atom warehouse, molecule supplier and drinks bar with matching TCP and UDP clients"
requires-python = ">=3.10"
dependencies = []
keywords = ["tcp", "udp", "socket", "server", "client", "select", "chemistry"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
atom-warehouse = "atombar.cli:warehouse_main"
molecule-supplier = "atombar.cli:molecule_supplier_main"
drinks-bar = "atombar.cli:drinks_bar_main"
atom-supplier = "atombar.cli:atom_supplier_main"
molecule-requester = "atombar.cli:molecule_requester_main"

[tool.hatch.build.targets.wheel]
packages = ["atombar"]

[tool.hatch.build.targets.sdist]
include = ["atombar", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
