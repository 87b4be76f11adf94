[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fenris"
version = "0.1.0"
description = "Building blocks for an encrypted remote file server: framing, compression, ECDH/AES-GCM, messages, caching and file operations"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = ["file server", "ecdh", "aes-gcm", "protocol", "lru cache", "compression"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: File Sharing",
    "Topic :: Security :: Cryptography",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["fenris"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
