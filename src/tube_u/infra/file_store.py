"""Local filesystem implementation of :class:`~tube_u.core.protocols.OutputStore`.

Rules
-----
* Existence of a non-empty file is the only "already downloaded" marker.
* Writes overwrite in place with a fixed permission mode.
* ``OSError`` is re-raised as :class:`~tube_u.exceptions.FileWriteError`.
"""

from __future__ import annotations

import os

from tube_u.exceptions import FileWriteError


class LocalFileStore:
    """Concrete :class:`OutputStore` writing below the working directory."""

    def __init__(self, *, file_mode: int = 0o644) -> None:
        self._file_mode = file_mode

    def existing_size(self, path: str) -> int:
        """Return the size of *path*, or ``0`` when it is missing."""
        try:
            return os.stat(path).st_size
        except FileNotFoundError:
            return 0
        except OSError as exc:
            raise FileWriteError(f"stat {path}: {exc.strerror or exc}") from exc

    def write(self, path: str, data: bytes) -> None:
        """Create or truncate *path* and write *data* to it.

        The mode applies when the file is created; the process umask is
        honoured.
        """
        flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_BINARY", 0)
        try:
            fd = os.open(path, flags, self._file_mode)
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
        except OSError as exc:
            raise FileWriteError(
                f"write {path}: {exc.strerror or exc}",
                hint="Check that the output directory exists and is writable.",
            ) from exc
