import io
import socket
import subprocess
import sys
import zipfile

import pytest
import responses

from pommet.apache import Apache
from pommet.plugin import PluginError, PluginStatus
from pommet.utils import DownloadError

PAYLOAD = b"\0" * 1500


@pytest.fixture
def root(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path / "pommet"


def _serve(rsps, **kwargs):
    rsps.add(responses.GET, Apache.download_url, **kwargs)


def _zipped(members):
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, data in members.items():
            zf.writestr(name, data)
    return buf.getvalue()


def test_fresh_root(root):
    apache = Apache(root=root)
    assert apache.name == "Apache Server v2.4.63"
    assert (apache.is_installed, apache.is_toggleable) == (False, True)
    assert apache.status is PluginStatus.OFF


def test_detects_existing_installation(root):
    exe = root / "bin" / "Apache24" / "bin" / "httpd.exe"
    exe.parent.mkdir(parents=True)
    exe.touch()
    assert Apache(root=root).is_installed is True


@pytest.mark.parametrize(
    "installed, message",
    [(False, "Apache is not installed"), (True, "Apache executable not found at")],
)
def test_toggle_refuses_to_start(root, installed, message):
    apache = Apache(root=root)
    apache.is_installed = installed
    with pytest.raises(PluginError, match=message):
        apache.toggle()
    assert apache.status is PluginStatus.OFF


def test_toggle_stops_running_child(root):
    apache = Apache(root=root)
    apache.is_installed = True
    child = subprocess.Popen([sys.executable, "-c", "import time; time.sleep(30)"])
    apache.child_process, apache.status = child, PluginStatus.ON
    apache.toggle()
    assert apache.status is PluginStatus.OFF
    assert apache.child_process is None
    assert child.returncode is not None


def test_is_running_and_wait_for_start():
    apache = Apache()
    apache.poll_interval = 0.01
    with socket.socket() as server:
        server.bind(("127.0.0.1", 0))
        server.listen()
        apache.port = server.getsockname()[1]
        assert apache.is_running() is True
        apache.wait_for_start(1)
    assert apache.is_running() is False
    with pytest.raises(PluginError, match="Apache failed to start after 2 attempts"):
        apache.wait_for_start(2)


def test_install_without_config_raises(root):
    apache = Apache(root=root)
    with pytest.raises(PluginError, match="No configuration available"):
        apache.install()
    assert apache.is_installed is False


def test_install_extracts_and_writes_config(root, tmp_path):
    config = b"ServerRoot test\n"
    apache = Apache(root=root, config=config)
    body = _zipped({"Apache24/bin/httpd.exe": PAYLOAD, "Apache24/conf/httpd.conf": b"original"})
    with responses.RequestsMock() as rsps:
        _serve(rsps, body=body, content_type="application/zip")
        apache.install()
    home = root / "bin" / "Apache24"
    assert apache.is_installed is True
    assert (home / "conf" / "httpd.conf").read_bytes() == config
    assert (home / "bin" / "httpd.exe").read_bytes() == PAYLOAD
    assert not (tmp_path / "apache.zip").exists()
    assert Apache(root=root).is_installed is True


def test_install_fails_on_http_error(root):
    apache = Apache(root=root, config=b"conf")
    with responses.RequestsMock() as rsps:
        _serve(rsps, status=404)
        with pytest.raises(DownloadError):
            apache.install()
    assert apache.is_installed is False