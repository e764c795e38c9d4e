"""Packing files and directories into gzip-compressed tar archives."""

from __future__ import annotations

import io
import os
import stat
import tarfile
from collections.abc import Iterator


def is_dir(path: str | os.PathLike[str]) -> bool:
    """Tell whether ``path`` is a directory; raises OSError if it does not exist."""
    return stat.S_ISDIR(os.stat(path).st_mode)


def tar_dir(src: str | os.PathLike[str], file_mode: int) -> bytes:
    """Archive a directory as tar + gzip, with entry names relative to its parent.

    Every entry gets ``file_mode`` as its mode; symbolic links are skipped.
    """
    source = os.path.abspath(os.fspath(src))
    print(f">> creating TAR file from directory: {source}")

    base_dir = os.path.basename(source)
    # keep the path relative to the parent directory
    index = source.rfind(base_dir)

    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as archive:
        for path, info in _walk(source):
            if stat.S_ISLNK(info.st_mode):
                print(f">> skipping symlink: {path}")
                continue

            arcname = path[index:].replace(os.sep, "/")
            entry = archive.gettarinfo(path, arcname=arcname)
            if entry is None:
                raise ValueError(f"unsupported file type: {path}")
            entry.mode = file_mode

            if entry.isreg():
                with open(path, "rb") as data:
                    archive.addfile(entry, data)
            else:
                archive.addfile(entry)
    return buffer.getvalue()


def tar_file(content: bytes, base_path: str | os.PathLike[str], file_mode: int) -> bytes:
    """Archive a single file's content as tar + gzip under the base name of ``base_path``."""
    entry = tarfile.TarInfo(_base_name(os.fspath(base_path)))
    entry.mode = file_mode
    entry.size = len(content)

    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as archive:
        archive.addfile(entry, io.BytesIO(content))
    return buffer.getvalue()


def _walk(root: str) -> Iterator[tuple[str, os.stat_result]]:
    """Yield ``root`` and everything below it in lexical order, without following links."""
    info = os.lstat(root)
    yield root, info
    if stat.S_ISDIR(info.st_mode):
        for name in sorted(os.listdir(root)):
            yield from _walk(os.path.join(root, name))


def _base_name(path: str) -> str:
    if not path:
        return "."
    separators = "/" + os.sep
    stripped = path.rstrip(separators)
    if not stripped:
        return os.sep
    return os.path.basename(stripped)