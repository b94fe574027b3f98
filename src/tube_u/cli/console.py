"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.  Everything is rendered on
stderr; stdout stays free for nothing but ``--help``/``--version``.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from tube_u.exceptions import EnvironmentError, TubeUError

_MARKUP_RE = re.compile(r"\[/?[a-z ]+\]")


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True, highlight=False)


def escape(text: str) -> str:
    """Escape *text* so titles and paths are never read as Rich markup."""
    try:
        from rich.markup import escape as rich_escape
    except ModuleNotFoundError:
        return text
    return rich_escape(text)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with a plain-stderr fallback.

    Markup tags are stripped when Rich is unavailable.
    """

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            plain = [_MARKUP_RE.sub("", o) if isinstance(o, str) else o for o in objects]
            print(*plain, file=sys.stderr)
            return
        rich_console.print(*objects)

    def print_error(self, exc: TubeUError) -> None:
        """Render a domain error and its optional hint."""
        self.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            self.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")


console = _ConsoleProxy()
