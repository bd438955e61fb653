[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jailxml"
version = "4.0.4"
description = "Minimal XML-RPC request parsing, XML escaping and UTF-8 cleaning"
requires-python = ">=3.10"
dependencies = []
keywords = ["xml", "xml-rpc", "parser", "escaping", "utf-8"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Markup :: XML",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jailxml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
