"""Locating the Docker daemon socket and detecting a containerised environment."""

from __future__ import annotations

import os
import subprocess
from urllib.parse import urlsplit

DOCKER_SOCKET_OVERRIDE_ENV = "TESTCONTAINERS_DOCKER_SOCKET_OVERRIDE"
DEFAULT_DOCKER_SOCKET = "/var/run/docker.sock"
DOCKER_ENV_FILE = "/.dockerenv"

_GATEWAY_COMMAND = "ip route|awk '/default/ { print $3 }'"


def default_gateway_ip() -> str:
    """Return the IP address of the default gateway, as reported by ``ip route``.

    Raises RuntimeError when the command fails or prints nothing.
    """
    try:
        completed = subprocess.run(
            ["sh", "-c", _GATEWAY_COMMAND],
            capture_output=True,
            check=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        raise RuntimeError("failed to detect docker host") from exc

    ip = (completed.stdout or "").strip()
    if not ip:
        raise RuntimeError("failed to parse default gateway IP")
    return ip


def extract_docker_host(docker_host: str | None = None) -> str:
    """Return the path of the Docker socket.

    The override environment variable wins; otherwise a ``unix://`` URL in
    ``docker_host`` gives the path, and anything else yields the default socket.
    """
    override = os.environ.get(DOCKER_SOCKET_OVERRIDE_ENV, "")
    if override:
        return override

    if not isinstance(docker_host, str) or not docker_host:
        return DEFAULT_DOCKER_SOCKET

    try:
        parts = urlsplit(docker_host)
    except ValueError:
        return DEFAULT_DOCKER_SOCKET

    if parts.scheme == "unix":
        return parts.path
    return DEFAULT_DOCKER_SOCKET


def in_a_container(path: str | os.PathLike[str] = DOCKER_ENV_FILE) -> bool:
    """Tell whether the marker file that Docker puts in containers exists."""
    try:
        os.stat(path)
    except OSError:
        return False
    return True