[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ocelot"
version = "0.1.0"
description = "Minecraft Java Edition protocol codecs, packets and a minimal asyncio server"
requires-python = ">=3.10"
dependencies = []
keywords = ["minecraft", "protocol", "server", "asyncio", "codec", "packets"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[project.scripts]
ocelot = "ocelot.server:main"

[tool.hatch.build.targets.wheel]
packages = ["ocelot"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
