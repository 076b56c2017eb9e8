import io
import zipfile

import pytest
import responses

from pommet.phpmyadmin import PhpMyAdmin
from pommet.plugin import PluginError, PluginStatus
from pommet.utils import DownloadError

APP = "phpMyAdmin-5.2.2-english"


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_defaults_and_toggle_noop(tmp_path):
    pma = PhpMyAdmin(root=tmp_path)
    pma.toggle()
    assert pma.name == "PHPMyAdmin v5.2.2"
    assert (pma.is_installed, pma.is_toggleable) == (False, False)
    assert pma.status is PluginStatus.OFF
    assert pma.app_dir == tmp_path / "bin" / "Apache24" / "htdocs" / APP


def test_detects_existing_installation(tmp_path):
    (tmp_path / "bin" / "Apache24" / "htdocs" / APP).mkdir(parents=True)
    assert PhpMyAdmin(root=tmp_path).is_installed is True


def test_install_without_config_raises(tmp_path):
    with pytest.raises(PluginError, match="No configuration available"):
        PhpMyAdmin(root=tmp_path).install()


def test_install_writes_config_into_app(workdir):
    root = workdir / "pommet"
    config = b"<?php\n$cfg = [];\n"
    page = b"<?php\n" + b"#" * 1500
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        zf.writestr(f"{APP}/index.php", page)
    pma = PhpMyAdmin(root=root, config=config)
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, PhpMyAdmin.download_url, body=buf.getvalue())
        pma.install()
    assert pma.is_installed is True
    assert (pma.app_dir / "config.inc.php").read_bytes() == config
    assert (pma.app_dir / "index.php").read_bytes() == page
    assert not (workdir / "phpmyadmin.zip").exists()
    assert PhpMyAdmin(root=root).is_installed is True


def test_install_rejects_tiny_download(workdir):
    pma = PhpMyAdmin(root=workdir / "pommet", config=b"conf")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, PhpMyAdmin.download_url, body=b"tiny")
        with pytest.raises(DownloadError):
            pma.install()
    assert pma.is_installed is False