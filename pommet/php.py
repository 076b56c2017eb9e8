"""PHP interpreter installed alongside Apache."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from pommet.apache import DEFAULT_ROOT, _ArchivePlugin
from pommet.plugin import PluginStatus


class PHP(_ArchivePlugin):
    """PHP 8.4; not a separate service, so it cannot be toggled."""

    name = "PHP v8.4.7"
    download_url = "https://windows.php.net/downloads/releases/php-8.4.7-Win32-vs17-x64.zip"
    archive_name = "php.zip"
    install_subdir = "bin/php8"
    marker_parts = ("php.exe",)
    config_parts = ("php.ini",)

    def __init__(self, root: str | Path = DEFAULT_ROOT, config: bytes | None = None) -> None:
        super().__init__(root, config)
        self.status = PluginStatus.ON if self.is_installed else PluginStatus.OFF

    def install(self) -> None:
        """Download and unpack PHP, write php.ini and create its logs and tmp dirs."""
        super().install()

    def _configure(self, config: bytes) -> None:
        super()._configure(config)
        (self.install_dir / "logs").mkdir()
        tmp_dir = self.install_dir / "tmp"
        tmp_dir.mkdir()
        if os.name == "nt":
            os.chmod(tmp_dir, tmp_dir.stat().st_mode | stat.S_IWRITE)

    def toggle(self) -> None:
        """PHP runs inside Apache; there is nothing to start or stop."""