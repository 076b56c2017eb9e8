import socket

import pytest

from pommet.plugin import (
    Plugin,
    PluginError,
    port_is_open,
    wait_for_port,
)


@pytest.fixture
def listening_port():
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(5)
    try:
        yield server.getsockname()[1]
    finally:
        server.close()


@pytest.fixture
def closed_port():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


def test_plugin_is_abstract():
    with pytest.raises(TypeError):
        Plugin()


def test_port_is_open_true_for_listener(listening_port):
    assert port_is_open("127.0.0.1", listening_port) is True


def test_port_is_open_false_for_closed(closed_port):
    assert port_is_open("127.0.0.1", closed_port) is False


def test_wait_for_port_returns_when_listening(listening_port):
    assert wait_for_port("127.0.0.1", listening_port, max_attempts=3, interval=0) is None


def test_wait_for_port_raises_after_attempts(closed_port):
    with pytest.raises(PluginError) as info:
        wait_for_port("127.0.0.1", closed_port, max_attempts=2, interval=0, service="Apache")
    assert str(info.value) == "Apache failed to start after 2 attempts"


def test_wait_for_port_zero_attempts_raises(listening_port):
    with pytest.raises(PluginError):
        wait_for_port("127.0.0.1", listening_port, max_attempts=0, interval=0)