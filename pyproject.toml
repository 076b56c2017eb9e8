[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pommet"
version = "0.1.0"
description = "A terminal dashboard that installs and runs a local PHP web development stack: Apache, MariaDB, PHP and phpMyAdmin"
requires-python = ">=3.10"
keywords = ["php", "apache", "mariadb", "phpmyadmin", "tui", "webdev"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: Microsoft :: Windows",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Software Development",
]
dependencies = [
    "requests",
    "blessed",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
pommet = "pommet.app:main"

[tool.hatch.build.targets.wheel]
packages = ["pommet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
