"""Container log records, log consumers and the library's logger."""

from __future__ import annotations

import sys
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, TextIO, runtime_checkable

PACKAGE_PATH = "containertest"


class LogType(str, Enum):
    """The stream a log line was written to."""

    STDOUT = "STDOUT"
    STDERR = "STDERR"


@dataclass(frozen=True)
class Log:
    """A message produced by a process inside a container."""

    log_type: LogType
    content: bytes


@runtime_checkable
class LogConsumer(Protocol):
    """Anything that can handle a container log line."""

    def accept(self, log: Log) -> None:
        """Handle one log line; what to do with it is up to the consumer."""


@runtime_checkable
class Logging(Protocol):
    """The logger interface used throughout the package."""

    def printf(self, fmt: str, *args: Any) -> None:
        """Log a message built from a printf-style format and its arguments."""


def _format(fmt: str, args: tuple[Any, ...]) -> str:
    template = fmt.replace("%v", "%s")
    try:
        return template % args
    except (TypeError, ValueError):
        return " ".join([fmt, *map(str, args)]) if args else fmt


class StandardLogger:
    """Writes timestamped lines to a text stream, standard error by default."""

    def __init__(self, stream: TextIO | None = None, prefix: str = "") -> None:
        self.stream = stream
        self.prefix = prefix
        self._lock = threading.Lock()

    def printf(self, fmt: str, *args: Any) -> None:
        """Format the message and write it on its own line with a timestamp."""
        message = _format(fmt, args)
        if not message.endswith("\n"):
            message += "\n"
        stamp = time.strftime("%Y/%m/%d %H:%M:%S ")
        out = self.stream if self.stream is not None else sys.stderr
        with self._lock:
            out.write(self.prefix + stamp + message)
            out.flush()


DEFAULT_LOGGER: Logging = StandardLogger()

_INFO_MESSAGE = (
    "%s - Connected to docker: \n"
    "  Server Version: %s\n"
    "  API Version: %s\n"
    "  Operating System: %s\n"
    "  Total Memory: %s MB\n"
)


def log_docker_server_info(client: Any, logger: Logging) -> None:
    """Log the Docker server information.

    ``client`` must offer ``info()``, returning a mapping with ``ServerVersion``,
    ``OperatingSystem`` and ``MemTotal``, and ``client_version()``.
    """
    try:
        info = client.info()
    except Exception as exc:  # any failure talking to the daemon is only logged
        logger.printf("failed getting information about docker server: %s", exc)
        return

    logger.printf(
        _INFO_MESSAGE,
        PACKAGE_PATH,
        info.get("ServerVersion", ""),
        client.client_version(),
        info.get("OperatingSystem", ""),
        int(info.get("MemTotal", 0)) // 1024 // 1024,
    )