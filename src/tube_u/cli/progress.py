"""Rich-based progress display driven by stream-fetch callbacks.

:class:`RichProgressHook` is passed as ``progress_callback`` to
:meth:`~tube_u.core.download_service.DownloadService.download`; the
stream provider calls it with ``(bytes_downloaded, total_or_None)``
after every chunk.

Design
------
* One hook per video; the task label is set at construction.
* Shutdown-safe: if the progress bar is already stopped, calls are
  silently ignored.
* No ``print()`` — Rich handles all rendering.
"""

from __future__ import annotations

from typing import Any

from tube_u.cli.console import get_rich_console
from tube_u.exceptions import EnvironmentError

_LABEL_MAX = 50


class RichProgressHook:
    """Callable progress-hook adapter for Rich.

    Usage::

        with RichProgressHook(label) as hook:
            download_service.download(ref, progress_callback=hook)
    """

    def __init__(self, label: str = "Downloading") -> None:
        try:
            from rich.progress import (
                BarColumn,
                DownloadColumn,
                Progress,
                SpinnerColumn,
                TextColumn,
                TimeRemainingColumn,
                TransferSpeedColumn,
            )
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "rich is not installed. Install with: pip install rich",
            ) from exc

        self._progress: Any = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TransferSpeedColumn(),
            TimeRemainingColumn(),
            console=get_rich_console(),
            transient=True,
        )
        self._label: str = _shorten(label)
        self._task_id: Any = None
        self._started: bool = False

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> RichProgressHook:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the Rich progress display."""
        if not self._started:
            self._progress.start()
            self._started = True

    def stop(self) -> None:
        """Stop the Rich progress display (idempotent)."""
        if self._started:
            self._progress.stop()
            self._started = False

    # ------------------------------------------------------------------
    # Hook callback
    # ------------------------------------------------------------------

    def __call__(self, downloaded: int, total: int | None) -> None:
        """Record that *downloaded* of *total* bytes have arrived."""
        if not self._started:
            return

        if self._task_id is None:
            self._task_id = self._progress.add_task(self._label, total=total)

        if total is not None:
            self._progress.update(self._task_id, total=total, completed=downloaded)
        else:
            self._progress.update(self._task_id, completed=downloaded)


# ---------------------------------------------------------------------------
# Utility
# ---------------------------------------------------------------------------

def _shorten(label: str) -> str:
    """Keep the base filename and cap it for display."""
    display = label.rsplit("/", 1)[-1].rsplit("\\", 1)[-1]
    if len(display) > _LABEL_MAX:
        display = display[: _LABEL_MAX - 3] + "..."
    return display
