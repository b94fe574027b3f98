"""Custom exception hierarchy for tube-u.

All exceptions that cross layer boundaries must inherit from
:class:`TubeUError`.  Raw third-party exceptions (yt-dlp, requests,
``OSError``) must NEVER propagate beyond the infrastructure layer — they
must be caught and re-raised as a typed subclass defined here.

Hierarchy
---------
TubeUError
├── ConfigError
│   └── ApiKeyNotFoundError
├── PlaylistFetchError
├── MetadataExtractionError
├── VideoUnavailableError
├── FormatSelectionError
│   └── NoStreamFoundError
├── DownloadFailedError
│   ├── StreamFetchError
│   ├── EmptyStreamError
│   └── FileWriteError
└── EnvironmentError
"""

from __future__ import annotations


class TubeUError(Exception):
    """Base exception for all tube-u errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Configuration ---------------------------------------------------------

class ConfigError(TubeUError):
    """Raised when the runtime configuration cannot be assembled."""


class ApiKeyNotFoundError(ConfigError):
    """Raised when no YouTube Data API key is found in env or config file."""


# --- Playlist expansion ----------------------------------------------------

class PlaylistFetchError(TubeUError):
    """Raised when a playlist page cannot be fetched or decoded."""


# --- Metadata / extraction -------------------------------------------------

class MetadataExtractionError(TubeUError):
    """Raised when yt-dlp fails to extract video metadata."""


class VideoUnavailableError(TubeUError):
    """Raised when the target video is unavailable (private, removed, etc.)."""


# --- Format handling -------------------------------------------------------

class FormatSelectionError(TubeUError):
    """Raised when no suitable format can be determined."""


class NoStreamFoundError(FormatSelectionError):
    """Raised when no stream matches the requested media family."""


# --- Download --------------------------------------------------------------

class DownloadFailedError(TubeUError):
    """Raised when a single video download fails."""


class StreamFetchError(DownloadFailedError):
    """Raised when the selected stream cannot be fetched."""


class EmptyStreamError(DownloadFailedError):
    """Raised when the selected stream yields zero bytes."""


class FileWriteError(DownloadFailedError):
    """Raised when the downloaded stream cannot be written to disk."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(TubeUError):
    """Raised when a required runtime dependency is not available."""


def append_ytdlp_upgrade_suggestion(hint: str) -> str:
    """Append yt-dlp upgrade guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Also try updating yt-dlp:"
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    pip install --upgrade yt-dlp",
        )
    )
