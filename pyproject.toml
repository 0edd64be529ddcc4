[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gamewire"
version = "0.1.0"
description = "FlatBuffers-compatible game messages (monsters, request envelopes) and a small TCP backend that decodes them"
requires-python = ">=3.10"
dependencies = []
keywords = ["flatbuffers", "serialization", "game", "backend", "tcp"]
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
    "Topic :: Internet",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gamewire-demo = "gamewire.demo:main"
gamewire-server = "gamewire.server:main"
gamewire-client = "gamewire.client:main"

[tool.hatch.build.targets.wheel]
packages = ["gamewire"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
