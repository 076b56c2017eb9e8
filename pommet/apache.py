"""Apache HTTP server, plus the install and process handling shared by all plugins."""

from __future__ import annotations

import subprocess
from pathlib import Path

from pommet.plugin import Plugin, PluginError, PluginStatus, port_is_open, wait_for_port
from pommet.utils import download_plugin, unzip, write_conf

DEFAULT_ROOT = Path("C:/pommet")


class _ArchivePlugin(Plugin):
    """A plugin installed by downloading a zip archive and writing a config file.

    Subclasses describe themselves with class attributes: where the archive
    comes from, where it unpacks to, which file proves it is installed and
    where its configuration goes.
    """

    name = ""
    download_url = ""
    archive_name = ""
    install_subdir = "bin"
    marker_parts: tuple[str, ...] = ()
    config_parts: tuple[str, ...] = ()
    installed_message = "{name} is installed"
    is_toggleable = False

    def __init__(self, root: str | Path = DEFAULT_ROOT, config: bytes | None = None) -> None:
        self.root = Path(root)
        self.config = config
        self.status = PluginStatus.OFF
        self.is_installed = self.executable.exists()

    @property
    def install_dir(self) -> Path:
        return self.root / self.install_subdir

    @property
    def executable(self) -> Path:
        """The file whose presence means the plugin is installed."""
        return self.install_dir.joinpath(*self.marker_parts)

    @property
    def config_path(self) -> Path:
        return self.install_dir.joinpath(*self.config_parts)

    def install(self) -> None:
        if self.config is None:
            raise PluginError(f"No configuration available for {self.name}")
        print(f"Downloading {self.name}")
        download_plugin(self.download_url, self.archive_name)

        print(f"Extracting {self.name} to {self.install_dir}")
        unzip(self.archive_name, self.install_dir)

        self._configure(self.config)
        self.is_installed = True
        print(self.installed_message.format(name=self.name))

    def _configure(self, config: bytes) -> None:
        print(f"Installing {self.name}")
        write_conf(config, self.config_path)

    def toggle(self) -> None:
        """Plugins served by another process have nothing to start or stop."""


class _ServerPlugin(_ArchivePlugin):
    """A plugin run as a child process that listens on a local TCP port."""

    service = ""
    host = "127.0.0.1"
    port = 0
    poll_interval = 0.5
    start_attempts = 10
    is_toggleable = True

    def __init__(self, root: str | Path = DEFAULT_ROOT, config: bytes | None = None) -> None:
        super().__init__(root, config)
        self.child_process: subprocess.Popen | None = None

    def is_running(self) -> bool:
        """Return True if something accepts connections on the service's port."""
        return port_is_open(self.host, self.port)

    def wait_for_start(self, max_attempts: int) -> None:
        """Wait until the service accepts connections; raise PluginError on timeout."""
        wait_for_port(
            self.host,
            self.port,
            max_attempts=max_attempts,
            interval=self.poll_interval,
            service=self.service,
        )

    def toggle(self) -> None:
        if not self.is_installed:
            raise PluginError(f"{self.service} is not installed")

        if self.status is PluginStatus.ON:
            child, self.child_process = self.child_process, None
            if child is not None:
                self._stop(child)
                self.status = PluginStatus.OFF
            return

        self._start()

    def _launch_args(self) -> list[str]:
        return [str(self.executable)]

    def _stop(self, child: subprocess.Popen) -> None:
        child.kill()
        child.wait()

    def _start(self) -> None:
        if not self.executable.exists():
            raise PluginError(f"{self.service} executable not found at: {self.executable}")
        try:
            self.child_process = subprocess.Popen(self._launch_args())
        except OSError as exc:
            raise PluginError(f"Failed to start {self.service}: {exc}") from exc

        try:
            self.wait_for_start(self.start_attempts)
        except PluginError:
            child, self.child_process = self.child_process, None
            if child is not None:
                try:
                    child.kill()
                    child.wait()
                except OSError:
                    pass
            raise

        self.status = PluginStatus.ON


class Apache(_ServerPlugin):
    """Apache 2.4 web server, started as a child process listening on port 80."""

    name = "Apache Server v2.4.63"
    service = "Apache"
    download_url = (
        "https://www.apachelounge.com/download/VS17/binaries/"
        "httpd-2.4.63-250207-win64-VS17.zip"
    )
    archive_name = "apache.zip"
    marker_parts = ("Apache24", "bin", "httpd.exe")
    config_parts = ("Apache24", "conf", "httpd.conf")
    port = 80

    def __init__(self, root: str | Path = DEFAULT_ROOT, config: bytes | None = None) -> None:
        super().__init__(root, config)

    def is_running(self) -> bool:
        """Return True if something accepts connections on port 80."""
        return super().is_running()

    def wait_for_start(self, max_attempts: int) -> None:
        """Wait until Apache accepts connections; raise PluginError on timeout."""
        super().wait_for_start(max_attempts)

    def install(self) -> None:
        """Download and unpack Apache, then write its httpd.conf."""
        super().install()

    def toggle(self) -> None:
        """Start Apache if it is stopped, stop it if it is running."""
        super().toggle()