"""Post-processing of the output stream returned by running a command in a container."""

from __future__ import annotations

import io
import struct
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import BinaryIO

_HEADER = struct.Struct(">B3xI")


class StreamType(IntEnum):
    """Stream identifiers used in the header of a multiplexed Docker stream."""

    STDIN = 0
    STDOUT = 1
    STDERR = 2
    SYSTEMERR = 3


@dataclass
class ProcessOptions:
    """Options applied to the reader of a command's output."""

    reader: BinaryIO


ProcessOption = Callable[[ProcessOptions], None]


def _read_exactly(reader: BinaryIO, size: int) -> bytes:
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = reader.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def demultiplex(stream: bytes | BinaryIO) -> tuple[bytes, bytes]:
    """Split a multiplexed Docker stream into its stdout and stderr content.

    A truncated trailing frame is dropped. Raises ValueError on an unknown
    stream type and RuntimeError when the daemon reports an error in the stream.
    """
    reader: BinaryIO = io.BytesIO(stream) if isinstance(stream, (bytes, bytearray)) else stream
    stdout = bytearray()
    stderr = bytearray()
    while True:
        header = _read_exactly(reader, _HEADER.size)
        if len(header) < _HEADER.size:
            return bytes(stdout), bytes(stderr)
        kind, size = _HEADER.unpack(header)
        try:
            stream_type = StreamType(kind)
        except ValueError:
            raise ValueError(f"Unrecognized input header: {kind}") from None
        payload = _read_exactly(reader, size)
        if len(payload) < size:
            return bytes(stdout), bytes(stderr)
        if stream_type is StreamType.SYSTEMERR:
            raise RuntimeError(f"error from daemon in stream: {payload.decode(errors='replace')}")
        if stream_type is StreamType.STDERR:
            stderr += payload
        else:
            stdout += payload


def multiplexed() -> ProcessOption:
    """Return an option that replaces the reader with the demultiplexed stdout."""

    def apply(options: ProcessOptions) -> None:
        stdout, _ = demultiplex(options.reader)
        options.reader = io.BytesIO(stdout)

    return apply


def apply_options(reader: BinaryIO, *args: ProcessOption) -> BinaryIO:
    """Apply the given options, in order, to ``reader`` and return the resulting reader."""
    options = ProcessOptions(reader)
    for option in args:
        option(options)
    return options.reader