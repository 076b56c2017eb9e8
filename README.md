# pommet

A small terminal dashboard for a local PHP development stack. On start it
checks for, and if needed downloads and installs:

- Apache Server v2.4.63
- PHP v8.4.7
- MariaDB v11.4.7
- PHPMyAdmin v5.2.2

Everything is installed under an installation root (`C:/pommet` by default):
Apache, MariaDB and PHP under `<root>/bin`, phpMyAdmin under
`<root>/bin/Apache24/htdocs`. Once everything is installed, an interactive
dashboard opens.

## Installation

```
pip install .
```

## Usage

```
pommet [--root ROOT] [--config-dir CONFIG_DIR]
```

- `--root` – installation root (default `C:/pommet`).
- `--config-dir` – directory holding `httpd.conf`, `php.ini`, `my.ini` and
  `config.inc.php` (default `config`, relative to the current directory).

For each component that is not installed yet, `pommet` downloads its zip
archive into the current directory, shows download and extraction progress,
unpacks it, deletes the archive and writes the matching configuration file
from the config directory next to the component. MariaDB's data directory is
initialised with `mysqld --initialize-insecure --user=root`; PHP gets `logs`
and `tmp` directories. If an installation step fails, the error is printed
and `pommet` exits with status 1.

### The dashboard

The dashboard lists the services that can be started and stopped (Apache
and MariaDB) and shows whether each one is `RUNNING` or `STOPPED`. PHP and
phpMyAdmin are served through Apache and are not listed.

| Key            | Action                                  |
|----------------|-----------------------------------------|
| `↑` / `k`      | move the selection up                   |
| `↓` / `j`      | move the selection down                 |
| `Space`        | start or stop the selected service      |
| `q`            | stop all running services and quit      |

Apache listens on port 80, so the site is at `http://localhost` and
phpMyAdmin under `http://localhost/` in Apache's document root. MariaDB is
started with `--defaults-file` pointing at its `my.ini` and listens on port
3306; it is stopped with `mysqladmin -u root shutdown`, or killed if that
cannot be run.

A service counts as started once its port accepts connections. If the port
does not open after ten checks half a second apart, the process is killed
and the failure is printed on standard error.

## Using it as a library

`pommet.app.default_plugins(root, config_dir)` builds the four plugins, and
`pommet.app.App` drives them (`ensure_installation()`, `toggle_selected_plugin()`,
`shutdown_running_plugins()`, `run(term)` with a `blessed.Terminal`). Each
plugin (`pommet.apache.Apache`, `pommet.mariadb.Mariadb`, `pommet.php.PHP`,
`pommet.phpmyadmin.PhpMyAdmin`) has `install()`, `toggle()`, `name`,
`status`, `is_installed` and `is_toggleable`. Failures raise
`pommet.plugin.PluginError` or `pommet.utils.DownloadError`.

## What it does not do

The package ships no configuration files. `httpd.conf`, `php.ini`, `my.ini`
and `config.inc.php` must be supplied in the config directory; installing a
component whose file is missing fails with "No configuration available".
It does not upgrade or remove components that are already installed.

## Running the tests

```
pip install .[test]
pytest
```