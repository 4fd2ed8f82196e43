[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pagewright"
version = "0.1.0"
description = "Building blocks for writing PDF documents: page objects, images, soft masks, font helpers, outlines and RC4 protection."
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["pdf", "document", "truetype", "outline", "rc4", "image", "cmap"]
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
    "Topic :: Printing",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pillow",
]

[tool.hatch.build.targets.wheel]
packages = ["pagewright"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
