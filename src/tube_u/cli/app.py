"""CLI application entry point and command routing for tube-u.

This module is the **sole error boundary** for the entire application.
It catches :class:`~tube_u.exceptions.TubeUError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* ``print()`` is forbidden outside the CLI layer; Rich console is used
  exclusively.
* Per-video failures are reported and counted here; the run continues
  with the next video.
"""

from __future__ import annotations

import argparse
import contextlib
import logging
import sys
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING, Any, NoReturn

from tube_u.cli import exit_codes
from tube_u.cli.console import console, escape
from tube_u.config import DEFAULT_CONFIG_PATH, Settings
from tube_u.core.models import MediaMode, VideoRef
from tube_u.exceptions import EnvironmentError, TubeUError
from tube_u.logging_config import setup_logging
from tube_u.version import __version__

if TYPE_CHECKING:
    import requests

logger = logging.getLogger(__name__)

USAGE: str = (
    "usage: tube-u youtube-url [output-name-prefix]\n"
    "youtube-url can be a youtube video or playlist url"
)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

class _ArgumentParser(argparse.ArgumentParser):
    """Parser whose usage errors exit with :data:`exit_codes.USAGE_ERROR`."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(exit_codes.USAGE_ERROR, f"{self.prog}: error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``tube-u <url> [prefix]`` — download one video or a whole playlist
    * ``tube-u --video <url>`` — fetch the best mp4/avc1 video stream
    * ``tube-u --version``
    """
    parser = _ArgumentParser(
        prog="tube-u",
        description="Download YouTube audio/video streams for a video or playlist.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug diagnostics to stderr.",
    )
    parser.add_argument(
        "--video",
        action="store_true",
        help="Download the best mp4 video stream instead of audio.",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        default=None,
        help=f"Key file read when $YtKey is unset (default: {DEFAULT_CONFIG_PATH}).",
    )
    parser.add_argument(
        "url",
        nargs="?",
        default=None,
        help="YouTube video or playlist URL.",
    )
    parser.add_argument(
        "prefix",
        nargs="?",
        default="",
        help="Prepended to every output file name.",
    )
    return parser


# ---------------------------------------------------------------------------
# Download loop
# ---------------------------------------------------------------------------

@contextlib.contextmanager
def _progress(label: str) -> Iterator[Any]:
    """Yield a Rich progress hook, or ``None`` when Rich is unavailable."""
    from tube_u.cli.progress import RichProgressHook

    try:
        hook = RichProgressHook(label)
    except EnvironmentError:
        yield None
        return
    with hook as active:
        yield active


def _resolve_videos(
    url: str,
    prefix: str,
    settings: Settings,
    session: requests.Session,
) -> list[VideoRef]:
    """Classify *url* and expand playlists into video refs."""
    from tube_u.core.playlist_service import PlaylistService
    from tube_u.core.url_classifier import classify_url
    from tube_u.infra.playlist_api import YouTubePlaylistApi

    classified = classify_url(url, prefix)
    if classified.playlist_id is None:
        if classified.is_empty:
            logger.warning("no YouTube video or playlist id found in %s", url)
        return list(classified.videos)

    api = YouTubePlaylistApi(
        settings.api_key,
        session=session,
        page_size=settings.page_size,
        timeout=settings.http_timeout,
    )
    console.print(f"[bold]Expanding playlist…[/bold]  {escape(classified.playlist_id)}")
    videos = PlaylistService(api).expand(classified.playlist_id, prefix)
    console.print(f"{len(videos)} videos in playlist")
    return videos


def _handle_download(url: str, prefix: str, settings: Settings) -> int:
    """Download every video named by *url*.

    Flow:
    1. Classify the URL; expand a playlist via the Data API.
    2. Instantiate infra providers + core services.
    3. Download each video, reporting (not raising) per-video errors.
    """
    import requests

    from tube_u.core.download_service import DownloadService
    from tube_u.core.metadata_service import MetadataService
    from tube_u.infra.file_store import LocalFileStore
    from tube_u.infra.stream_provider import HttpStreamProvider
    from tube_u.infra.ytdlp_provider import YtDlpMetadataProvider

    with requests.Session() as session:
        videos = _resolve_videos(url, prefix, settings, session)

        download_service = DownloadService(
            MetadataService(YtDlpMetadataProvider(timeout=settings.http_timeout)),
            HttpStreamProvider(session=session, timeout=settings.http_timeout),
            LocalFileStore(file_mode=settings.file_mode),
            mode=settings.mode,
            title_max_len=settings.title_max_len,
        )

        had_errors = False
        for ref in videos:
            try:
                with _progress(f"{ref.name_prefix}{ref.id}") as hook:
                    outcome = download_service.download(ref, progress_callback=hook)
            except TubeUError as exc:
                console.print_error(exc)
                had_errors = True
                continue

            if outcome.skipped:
                console.print(f"[dim]exists[/dim]  {escape(outcome.path)}")
            else:
                console.print(f"[green]saved[/green]   {escape(outcome.path)}")

    return exit_codes.GENERAL_ERROR if had_errors else exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: Sequence[str] | None = None) -> int:
    """Run the tube-u CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.

    Raises
    ------
    TubeUError
        For run-level failures (missing API key, playlist fetch); mapped
        to an exit code by :func:`cli`.
    """
    parser = _build_parser()
    args, extras = parser.parse_known_args(argv)
    unknown_options = [arg for arg in extras if arg.startswith("-")]
    if unknown_options:
        parser.error(f"unrecognized arguments: {' '.join(unknown_options)}")
    setup_logging(args.verbose)
    if extras:
        logger.warning("ignoring extra arguments: %s", " ".join(extras))

    if args.url is None:
        console.print(escape(USAGE))
        return exit_codes.USAGE_ERROR

    settings = Settings.from_environment(
        config_path=args.config,
        mode=MediaMode.VIDEO if args.video else MediaMode.AUDIO,
    )
    return _handle_download(args.url, args.prefix, settings)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except TubeUError as exc:
        console.print_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
