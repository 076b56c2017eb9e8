"""Interactive application that installs and controls the web stack."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from pommet.apache import Apache
from pommet.dashboard import Dashboard
from pommet.mariadb import Mariadb
from pommet.php import PHP
from pommet.phpmyadmin import PhpMyAdmin
from pommet.plugin import Plugin, PluginError, PluginStatus
from pommet.utils import DownloadError

DEFAULT_ROOT = Path("C:/pommet")
DEFAULT_CONFIG_DIR = Path("config")

_UP_KEYS = {"k"}
_DOWN_KEYS = {"j"}
_UP_NAMES = {"KEY_UP"}
_DOWN_NAMES = {"KEY_DOWN"}


class App:
    """Holds the plugins and the selection, and reacts to key presses."""

    def __init__(self, plugins: Sequence[Plugin]) -> None:
        self.plugins = list(plugins)
        self.should_exit = False
        self.selected_index = 0

    @property
    def toggleable_indices(self) -> list[int]:
        return [i for i, plugin in enumerate(self.plugins) if plugin.is_toggleable]

    def ensure_installation(self) -> None:
        """Install every plugin that is not installed yet."""
        for plugin in self.plugins:
            if not plugin.is_installed:
                plugin.install()

    def exit(self) -> None:
        """Stop running services and leave the main loop."""
        self.shutdown_running_plugins()
        self.should_exit = True

    def shutdown_running_plugins(self) -> None:
        """Toggle off every toggleable plugin that is running."""
        for plugin in self.plugins:
            if plugin.is_toggleable and plugin.status is PluginStatus.ON:
                try:
                    plugin.toggle()
                except (PluginError, OSError) as exc:
                    print(f"Failed to stop plugin {plugin.name}: {exc}", file=sys.stderr)

    def run(self, term) -> None:
        """Draw the dashboard and handle keys until the user quits."""
        with term.fullscreen(), term.cbreak(), term.hidden_cursor():
            while not self.should_exit:
                screen = Dashboard(self.plugins, self.selected_index).render(term)
                print(screen, end="", flush=True)
                self.handle_key(term.inkey())

    def handle_key(self, key) -> None:
        """React to one key: a blessed keystroke or a plain character."""
        name = getattr(key, "name", None)
        is_sequence = getattr(key, "is_sequence", False)
        char = "" if is_sequence else str(key)
        if char == "q":
            self.exit()
        elif char in _UP_KEYS or name in _UP_NAMES:
            self.move_up()
        elif char in _DOWN_KEYS or name in _DOWN_NAMES:
            self.move_down()
        elif char == " ":
            self.toggle_selected_plugin()

    def move_up(self) -> None:
        if self.toggleable_indices and self.selected_index > 0:
            self.selected_index -= 1

    def move_down(self) -> None:
        count = len(self.toggleable_indices)
        if count > 0 and self.selected_index < count - 1:
            self.selected_index += 1

    def toggle_selected_plugin(self) -> None:
        """Toggle the plugin under the cursor, reporting failures on stderr."""
        indices = self.toggleable_indices
        if self.selected_index >= len(indices):
            return
        try:
            self.plugins[indices[self.selected_index]].toggle()
        except (PluginError, OSError) as exc:
            print(f"Failed to toggle plugin: {exc}", file=sys.stderr)


def _read_config(config_dir: Path, filename: str) -> bytes | None:
    path = config_dir / filename
    return path.read_bytes() if path.is_file() else None


def default_plugins(
    root: str | Path = DEFAULT_ROOT, config_dir: str | Path = DEFAULT_CONFIG_DIR
) -> list[Plugin]:
    """The standard stack: Apache, PHP, MariaDB and phpMyAdmin."""
    config_path = Path(config_dir)
    return [
        Apache(root, _read_config(config_path, "httpd.conf")),
        PHP(root, _read_config(config_path, "php.ini")),
        Mariadb(root, _read_config(config_path, "my.ini")),
        PhpMyAdmin(root, _read_config(config_path, "config.inc.php")),
    ]


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="pommet",
        description="Terminal dashboard for a local Apache, MariaDB, PHP and phpMyAdmin stack.",
    )
    parser.add_argument("--root", type=Path, default=DEFAULT_ROOT, help="installation root")
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=DEFAULT_CONFIG_DIR,
        help="directory holding httpd.conf, php.ini, my.ini and config.inc.php",
    )
    args = parser.parse_args(argv)

    app = App(default_plugins(args.root, args.config_dir))
    try:
        app.ensure_installation()
    except (PluginError, DownloadError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    import blessed

    app.run(blessed.Terminal())
    return 0


if __name__ == "__main__":
    sys.exit(main())