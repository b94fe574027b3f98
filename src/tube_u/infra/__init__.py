"""Infrastructure layer — external system integration.

This layer wraps all interaction with yt-dlp, the YouTube Data API, the
media CDN, and the local filesystem.  Every raw third-party exception
must be caught here and re-raised as a
:class:`~tube_u.exceptions.TubeUError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from tube_u.infra.file_store import LocalFileStore
from tube_u.infra.playlist_api import YouTubePlaylistApi
from tube_u.infra.stream_provider import HttpStreamProvider
from tube_u.infra.ytdlp_provider import YtDlpMetadataProvider

__all__: list[str] = [
    "HttpStreamProvider",
    "LocalFileStore",
    "YouTubePlaylistApi",
    "YtDlpMetadataProvider",
]
