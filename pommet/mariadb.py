"""MariaDB database server managed as a toggleable plugin."""

from __future__ import annotations

import subprocess
from pathlib import Path

from pommet.apache import DEFAULT_ROOT, _ServerPlugin
from pommet.plugin import PluginError
from pommet.utils import write_conf

MARIADB_DIRNAME = "mariadb-11.4.7-winx64"


class Mariadb(_ServerPlugin):
    """MariaDB 11.4 server, started as a child process listening on port 3306."""

    name = "MariaDB v11.4.7"
    service = "MariaDB"
    download_url = (
        "https://mirror.citrahost.com/mariadb//mariadb-11.4.7/winx64-packages/"
        "mariadb-11.4.7-winx64.zip"
    )
    archive_name = "mariadb.zip"
    marker_parts = (MARIADB_DIRNAME, "bin", "mysqld.exe")
    config_parts = (MARIADB_DIRNAME, "my.ini")
    installed_message = "{name} is installed!"
    port = 3306

    def __init__(self, root: str | Path = DEFAULT_ROOT, config: bytes | None = None) -> None:
        super().__init__(root, config)

    @property
    def home(self) -> Path:
        return self.install_dir / MARIADB_DIRNAME

    @property
    def admin_executable(self) -> Path:
        return self.home / "bin" / "mysqladmin"

    @property
    def data_dir(self) -> Path:
        return self.home / "data"

    def is_running(self) -> bool:
        """Return True if something accepts connections on port 3306."""
        return super().is_running()

    def wait_for_start(self, max_attempts: int) -> None:
        """Wait until MariaDB accepts connections; raise PluginError on timeout."""
        super().wait_for_start(max_attempts)

    def initialize_db(self) -> None:
        """Create the data directory and run the server's insecure initialisation."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        command = [
            str(self.home / "bin" / "mysqld"),
            "--initialize-insecure",
            "--user=root",
            f"--datadir={self.data_dir}",
        ]
        try:
            subprocess.run(command, cwd=self.home, check=False)
        except OSError as exc:
            raise PluginError(f"Failed to initialize MariaDB database: {exc}") from exc

    def install(self) -> None:
        """Download and unpack MariaDB, initialise its data and write my.ini."""
        super().install()

    def toggle(self) -> None:
        """Start MariaDB if it is stopped, shut it down if it is running."""
        super().toggle()

    def _configure(self, config: bytes) -> None:
        print("Intializing database")
        self.initialize_db()
        print(f"Writing configuration for {self.name}")
        write_conf(config, self.config_path)

    def _launch_args(self) -> list[str]:
        return [str(self.executable), f"--defaults-file={self.config_path}"]

    def _stop(self, child: subprocess.Popen) -> None:
        try:
            subprocess.run([str(self.admin_executable), "-u", "root", "shutdown"], check=False)
        except OSError:
            child.kill()
        child.wait()