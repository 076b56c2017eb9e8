"""phpMyAdmin web application installed into Apache's document root."""

from __future__ import annotations

from pathlib import Path

from pommet.apache import DEFAULT_ROOT, _ArchivePlugin

PMA_DIRNAME = "phpMyAdmin-5.2.2-english"


class PhpMyAdmin(_ArchivePlugin):
    """phpMyAdmin 5.2; served by Apache, so it cannot be toggled."""

    name = "PHPMyAdmin v5.2.2"
    download_url = "https://files.phpmyadmin.net/phpMyAdmin/5.2.2/phpMyAdmin-5.2.2-english.zip"
    archive_name = "phpmyadmin.zip"
    install_subdir = "bin/Apache24/htdocs"
    marker_parts = (PMA_DIRNAME,)
    config_parts = (PMA_DIRNAME, "config.inc.php")

    def __init__(self, root: str | Path = DEFAULT_ROOT, config: bytes | None = None) -> None:
        super().__init__(root, config)

    @property
    def app_dir(self) -> Path:
        return self.install_dir / PMA_DIRNAME

    def install(self) -> None:
        """Download and unpack phpMyAdmin into htdocs and write config.inc.php."""
        super().install()

    def toggle(self) -> None:
        """phpMyAdmin is served by Apache; there is nothing to start or stop."""