"""Domain models for tube-u.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and must remain pure across the entire lifecycle.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class MediaMode(enum.Enum):
    """Which stream family a download targets."""

    AUDIO = "audio"
    VIDEO = "video"


# ---------------------------------------------------------------------------
# Download targets
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class VideoRef:
    """One video to download, paired with its output name prefix."""

    id: str
    """YouTube video ID (e.g. ``dQw4w9WgXcQ``)."""

    name_prefix: str
    """Prepended verbatim to the output filename."""


# ---------------------------------------------------------------------------
# Playlist API records
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Thumbnails:
    """Thumbnail URLs of a playlist item; empty string when absent."""

    medium: str = ""
    high: str = ""
    standard: str = ""
    maxres: str = ""


@dataclass(frozen=True, slots=True)
class PlaylistItemSnippet:
    """The ``snippet`` record the Data API returns per playlist entry."""

    title: str
    description: str
    published_at: str
    """RFC 3339 timestamp; compared as a plain string."""

    position: int
    video_id: str
    thumbnails: Thumbnails = field(default_factory=Thumbnails)


@dataclass(frozen=True, slots=True)
class PlaylistPage:
    """One decoded ``playlistItems`` response."""

    next_page_token: str
    total_results: int
    results_per_page: int
    snippets: tuple[PlaylistItemSnippet, ...]


# ---------------------------------------------------------------------------
# Stream formats
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class StreamFormat:
    """A single selectable stream reported by the extraction backend."""

    itag: str
    """Backend item tag distinguishing this encoding (yt-dlp ``format_id``)."""

    mime_type: str
    """E.g. ``audio/mp4; codecs="mp4a.40.2"``."""

    bitrate: int
    """Bits per second; ``0`` when unknown."""

    quality_label: str
    """E.g. ``1080p60`` for video, ``medium`` for audio."""

    url: str
    """Direct media URL."""

    http_headers: tuple[tuple[str, str], ...] = ()
    """Headers the backend requires when fetching :attr:`url`."""

    filesize: int | None = None
    """Size in bytes, or ``None`` if unknown."""

    @property
    def container(self) -> str:
        """Return the mime subtype, e.g. ``mp4`` for ``audio/mp4; ...``."""
        essence = self.mime_type.split(";", 1)[0].strip()
        return essence.partition("/")[2]


@dataclass(frozen=True, slots=True)
class VideoInfo:
    """Metadata needed to name and download one video."""

    id: str
    title: str
    formats: tuple[StreamFormat, ...]


# ---------------------------------------------------------------------------
# Download result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DownloadOutcome:
    """What the downloader did for one :class:`VideoRef`."""

    path: str
    skipped: bool
    size: int
