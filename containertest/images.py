"""Helpers for Docker image names: base images of a Dockerfile and registry detection."""

from __future__ import annotations

import os
import re
import string
from collections.abc import Mapping
from urllib.parse import urlsplit

INDEX_DOCKER_IO = "https://index.docker.io/v1/"

_MAX_URL_RUNE_COUNT = 2083
_MIN_URL_RUNE_COUNT = 3

URL_SCHEMA = r"((ftp|tcp|udp|wss?|https?):\/\/)"
URL_USERNAME = r"(\S+(:\S*)?@)"
URL_IP = (
    r"([1-9]\d?|1\d\d|2[01]\d|22[0-3]|24\d|25[0-5])"
    r"(\.(\d{1,2}|1\d\d|2[0-4]\d|25[0-5])){2}"
    r"(?:\.([0-9]\d?|1\d\d|2[0-4]\d|25[0-5]))"
)
IP = (
    r"(([0-9a-fA-F]{1,4}:){7,7}[0-9a-fA-F]{1,4}|([0-9a-fA-F]{1,4}:){1,7}:|"
    r"([0-9a-fA-F]{1,4}:){1,6}:[0-9a-fA-F]{1,4}|([0-9a-fA-F]{1,4}:){1,5}(:[0-9a-fA-F]{1,4}){1,2}|"
    r"([0-9a-fA-F]{1,4}:){1,4}(:[0-9a-fA-F]{1,4}){1,3}|([0-9a-fA-F]{1,4}:){1,3}(:[0-9a-fA-F]{1,4}){1,4}|"
    r"([0-9a-fA-F]{1,4}:){1,2}(:[0-9a-fA-F]{1,4}){1,5}|[0-9a-fA-F]{1,4}:((:[0-9a-fA-F]{1,4}){1,6})|"
    r":((:[0-9a-fA-F]{1,4}){1,7}|:)|fe80:(:[0-9a-fA-F]{0,4}){0,4}%[0-9a-zA-Z]{1,}|"
    r"::(ffff(:0{1,4}){0,1}:){0,1}((25[0-5]|(2[0-4]|1{0,1}[0-9]){0,1}[0-9])\.){3,3}"
    r"(25[0-5]|(2[0-4]|1{0,1}[0-9]){0,1}[0-9])|([0-9a-fA-F]{1,4}:){1,4}:"
    r"((25[0-5]|(2[0-4]|1{0,1}[0-9]){0,1}[0-9])\.){3,3}(25[0-5]|(2[0-4]|1{0,1}[0-9]){0,1}[0-9]))"
)
URL_SUBDOMAIN = r"((www\.)|([a-zA-Z0-9]+([-_\.]?[a-zA-Z0-9])*[a-zA-Z0-9]\.[a-zA-Z0-9]+))"
URL_PATH = r"((\/|\?|#)[^\s]*)"
URL_PORT = r"(:(\d{1,5}))"

_LABEL_CHAR = r"[a-zA-Z\u00a1-\uffff0-9]"
# Host labels: runs of label characters separated by at most two hyphens.
# Written without nested quantifiers so that backtracking stays polynomial.
_HOST_LABEL = "(" + _LABEL_CHAR + "+(?:-{1,2}" + _LABEL_CHAR + "+)*)"

URL = (
    "^"
    + URL_SCHEMA
    + "?"
    + URL_USERNAME
    + "?"
    + r"(("
    + URL_IP
    + r"|(\["
    + IP
    + r"\])|(([a-zA-Z0-9]([a-zA-Z0-9-_]+)?[a-zA-Z0-9]([-\.][a-zA-Z0-9]+)*)|("
    + URL_SUBDOMAIN
    + r"?))?"
    + _HOST_LABEL
    + r"(?:\.([a-zA-Z\u00a1-\uffff]{1,}))?))\.?"
    + URL_PORT
    + "?"
    + URL_PATH
    + r"?\Z"
)

_URL_RE = re.compile(URL, re.ASCII)

_REGISTRY_RE = re.compile(
    r"^(?:(?P<registry>(https?://)?[^/]+)(?::(?P<port>\d+))?/)?"
    r"(?:(?P<repository>[^/]+)/)?(?P<image>[^:]+)(?::(?P<tag>.+))?\Z",
    re.ASCII,
)


def extract_images_from_dockerfile(
    dockerfile: str | os.PathLike[str],
    build_args: Mapping[str, str | None] | None = None,
) -> list[str]:
    """Return the image of every FROM line in a Dockerfile, with build args substituted.

    Raises OSError when the file cannot be read.
    """
    with open(dockerfile, encoding="utf-8") as handle:
        lines = handle.read().splitlines()

    images: list[str] = []
    for raw in lines:
        line = raw.strip()
        if not line.upper().startswith("FROM"):
            continue
        if line.startswith("FROM"):
            line = line[len("FROM"):]
        image = line.strip().split(" ")[0]
        for name, value in (build_args or {}).items():
            if value is not None:
                image = image.replace("${" + name + "}", value)
        images.append(image)
    return images


def extract_registry(image: str, fallback: str) -> str:
    """Return the registry part of an image name, or ``fallback`` if it is not a URL.

    An image name that cannot be parsed at all yields an empty string.
    """
    match = _REGISTRY_RE.match(image)
    if match is None:
        return ""
    registry = match.group("registry") or ""
    return registry if is_url(registry) else fallback


def is_url(value: str) -> bool:
    """Tell whether a string looks like a URL, a host name or an IP address."""
    if (
        not value
        or len(value) >= _MAX_URL_RUNE_COUNT
        or len(value.encode("utf-8")) <= _MIN_URL_RUNE_COUNT
        or value.startswith(".")
    ):
        return False

    candidate = value
    if ":" in value and "://" not in value:
        # allow a bare host:port by giving it a scheme for parsing only
        candidate = "http://" + value

    parsed = _parse_url(candidate)
    if parsed is None:
        return False
    host, path = parsed
    if host.startswith("."):
        return False
    if not host and path and "." not in path:
        return False
    return _URL_RE.match(value) is not None


def _parse_url(candidate: str) -> tuple[str, str] | None:
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in candidate):
        return None
    try:
        parts = urlsplit(candidate)
    except ValueError:
        return None
    if not parts.scheme and ":" in candidate.split("/", 1)[0]:
        return None
    host = parts.netloc.rpartition("@")[2]
    if host and not _valid_host(host):
        return None
    return host, parts.path


def _valid_host(host: str) -> bool:
    if any(ch.isspace() for ch in host):
        return False
    if host.startswith("["):
        end = host.find("]")
        if end < 0:
            return False
        rest = host[end + 1:]
    else:
        colon = host.rfind(":")
        rest = host[colon:] if colon >= 0 else ""
    if not rest:
        return True
    return rest[0] == ":" and all(ch in string.digits for ch in rest[1:])