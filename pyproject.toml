[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "celerity"
version = "0.1.0"
description = "Building blocks for a Minecraft Java Edition server: byte buffers, VarInts, NBT, compression, encryption, configuration and task scheduling."
requires-python = ">=3.11"
dependencies = [
    "cryptography",
]
keywords = ["minecraft", "nbt", "varint", "protocol", "server", "scheduler"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["celerity"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
