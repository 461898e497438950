"""Filesystem boundary: read a document at startup, write it back on save."""

from __future__ import annotations

import errno
import os
import tempfile
from contextlib import suppress

from modal_editor.runtime import telemetry


class StorageError(RuntimeError):
    """Base class for failures at the filesystem boundary."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path = path


class LoadError(StorageError):
    """The editor cannot start on ``path`` (a directory, unreadable, ...)."""


class SaveError(StorageError):
    """Writing ``path`` failed; the target file is left untouched."""


def read_document(path: str | os.PathLike[str]) -> bytes:
    """Return the bytes stored at ``path``, or ``b""`` when it does not exist."""

    target = os.fspath(path)
    if os.path.isdir(target):
        raise LoadError(f"{target} is a directory", path=target)
    try:
        with open(target, "rb") as handle:
            content = handle.read()
    except FileNotFoundError:
        telemetry.record_event("storage.new_file", data={"path": target})
        return b""
    except OSError as exc:
        raise LoadError(_describe(exc, target, verb="read"), path=target) from exc

    telemetry.record_event(
        "storage.load", data={"path": target, "bytes": len(content)}
    )
    return content


def write_document(path: str | os.PathLike[str], data: bytes) -> int:
    """Atomically replace ``path`` with ``data`` and return the bytes written.

    The data goes to a temporary file next to the target, is flushed to disk,
    then renamed over the target, so a failed save never truncates the file.
    """

    target = os.fspath(path)
    directory = os.path.dirname(os.path.abspath(target))
    temp_name: str | None = None
    with telemetry.span(
        "storage::save", component="storage", metadata={"path": target}
    ) as handle:
        try:
            with tempfile.NamedTemporaryFile(
                mode="wb",
                dir=directory,
                prefix=f".{os.path.basename(target)}.",
                suffix=".tmp",
                delete=False,
            ) as temp_file:
                temp_name = temp_file.name
                temp_file.write(data)
                temp_file.flush()
                os.fsync(temp_file.fileno())
            _copy_mode(target, temp_name)
            os.replace(temp_name, target)
        except OSError as exc:
            if temp_name is not None:
                with suppress(OSError):
                    os.remove(temp_name)
            handle.add_metadata("errno", exc.errno)
            raise SaveError(_describe(exc, target, verb="write"), path=target) from exc

    telemetry.record_event("storage.save", data={"path": target, "bytes": len(data)})
    return len(data)


def _copy_mode(source: str, destination: str) -> None:
    try:
        mode = os.stat(source).st_mode
    except FileNotFoundError:
        return
    os.chmod(destination, mode & 0o7777)


def _describe(exc: OSError, path: str, *, verb: str) -> str:
    if isinstance(exc, PermissionError):
        return f"Permission denied: cannot {verb} {path}"
    if exc.errno == errno.ENOSPC:
        return "No space left on device"
    if isinstance(exc, (FileNotFoundError, NotADirectoryError)):
        return f"No such directory for {path}"
    if isinstance(exc, IsADirectoryError):
        return f"{path} is a directory"
    return f"Cannot {verb} {path}: {exc.strerror or exc}"
