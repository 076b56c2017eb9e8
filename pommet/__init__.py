"""Terminal dashboard that installs and runs a local Apache, MariaDB, PHP and phpMyAdmin stack."""

__version__ = "0.1.0"