"""Plain-text load/save for buffers."""

from __future__ import annotations

import os
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]

ENCODING = "utf-8"


class BufferIOError(OSError):
    """A load or save failed; carries the path and the underlying error."""

    def __init__(self, action: str, path: PathLike, reason: str) -> None:
        self.action = action
        self.path = os.fspath(path)
        self.reason = reason
        super().__init__(f"cannot {action} {self.path}: {reason}")


def read_text(path: PathLike) -> str:
    try:
        with open(path, "r", encoding=ENCODING) as handle:
            return handle.read()
    except UnicodeDecodeError as exc:
        raise BufferIOError("read", path, f"not valid {ENCODING} ({exc.reason})") from exc
    except OSError as exc:
        raise BufferIOError("read", path, exc.strerror or str(exc)) from exc


def write_text(path: PathLike, text: str) -> int:
    try:
        with open(path, "w", encoding=ENCODING, newline="\n") as handle:
            return handle.write(text)
    except OSError as exc:
        raise BufferIOError("write", path, exc.strerror or str(exc)) from exc


__all__ = ["BufferIOError", "read_text", "write_text"]
