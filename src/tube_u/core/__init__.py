"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O; both go through :mod:`tube_u.core.protocols`.
* No imports from ``cli`` or ``infra``.
"""

from tube_u.core.download_service import DownloadService
from tube_u.core.metadata_service import MetadataService
from tube_u.core.models import (
    DownloadOutcome,
    MediaMode,
    PlaylistItemSnippet,
    PlaylistPage,
    StreamFormat,
    VideoInfo,
    VideoRef,
)
from tube_u.core.playlist_service import PlaylistService
from tube_u.core.protocols import (
    MetadataProvider,
    OutputStore,
    PlaylistProvider,
    StreamProvider,
)
from tube_u.core.url_classifier import ClassifiedURL, classify_url

__all__: list[str] = [
    "ClassifiedURL",
    "DownloadOutcome",
    "DownloadService",
    "MediaMode",
    "MetadataProvider",
    "MetadataService",
    "OutputStore",
    "PlaylistItemSnippet",
    "PlaylistPage",
    "PlaylistProvider",
    "PlaylistService",
    "StreamFormat",
    "StreamProvider",
    "VideoInfo",
    "VideoRef",
    "classify_url",
]
