"""Common plugin interface and helpers for services managed by pommet."""

from __future__ import annotations

import socket
import time
from abc import ABC, abstractmethod
from enum import Enum


class PluginStatus(Enum):
    """Whether a managed service is currently running."""

    ON = "on"
    OFF = "off"


class PluginError(Exception):
    """Raised when a plugin cannot be installed, started or stopped."""


class Plugin(ABC):
    """A component of the web stack that can be installed and possibly toggled."""

    name: str
    status: PluginStatus = PluginStatus.OFF
    is_installed: bool = False
    is_toggleable: bool = False

    @abstractmethod
    def install(self) -> None:
        """Download, extract and configure the component."""

    @abstractmethod
    def toggle(self) -> None:
        """Start the component if it is stopped, stop it if it is running."""


def port_is_open(host: str, port: int) -> bool:
    """Return True if a TCP connection to ``host:port`` succeeds."""
    try:
        with socket.create_connection((host, port), timeout=1.0):
            return True
    except OSError:
        return False


def wait_for_port(
    host: str,
    port: int,
    max_attempts: int = 10,
    interval: float = 0.5,
    service: str = "Service",
) -> None:
    """Poll ``host:port`` until it accepts connections.

    Raises PluginError if it is still closed after ``max_attempts`` tries.
    """
    for _ in range(max_attempts):
        if port_is_open(host, port):
            return
        time.sleep(interval)
    raise PluginError(f"{service} failed to start after {max_attempts} attempts")