[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tenv"
version = "4.0.0"
description = "Building blocks for managing versions of OpenTofu, Terraform, Terragrunt and Atmos: configuration, mirror URL rewriting, downloads, checksum and cosign checks, safe unzipping, lock files and command proxying."
requires-python = ">=3.10"
keywords = [
    "terraform",
    "opentofu",
    "terragrunt",
    "atmos",
    "version-manager",
    "infrastructure-as-code",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
    "Topic :: System :: Installation/Setup",
]
dependencies = [
    "requests>=2.28",
    "beautifulsoup4>=4.11",
    "pyyaml>=6.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[tool.hatch.build.targets.wheel]
packages = ["tenv"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
