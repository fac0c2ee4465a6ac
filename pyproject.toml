[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blockwire"
version = "0.1.0"
description = "Data structures and wire encodings for the Minecraft network protocol: VarInts, NBT, registries, text components and chunk data."
requires-python = ">=3.10"
dependencies = []
keywords = ["minecraft", "protocol", "nbt", "varint", "packets", "text-components"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["blockwire"]

[tool.pytest.ini_options]
addopts = "-ra"
