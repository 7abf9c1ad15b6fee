[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ftpwire"
version = "0.1.0"
description = "An FTP client library: control and data connections, directory listing parsing and remote tree walking"
requires-python = ">=3.10"
dependencies = []
keywords = ["ftp", "ftps", "client", "rfc959", "rfc3659", "mlsd", "file-transfer"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: File Transfer Protocol (FTP)",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ftpwire"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
