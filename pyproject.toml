[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tunnelsrv"
version = "0.1.0"
description = "Bookkeeping for a reverse tunnelling proxy server: port allocation, proxy and client-control registries, and metrics counters."
requires-python = ">=3.10"
dependencies = []
keywords = ["proxy", "tunnel", "reverse-proxy", "port-manager", "registry"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Proxy Servers",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tunnelsrv"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
