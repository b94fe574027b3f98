"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from tube_u.core.models import StreamFormat

ProgressCallback = Callable[[int, int | None], None]
"""Called with ``(bytes_downloaded, total_bytes_or_None)``."""


class MetadataProvider(Protocol):
    """Contract for metadata extraction backends.

    Any object that implements :meth:`fetch_info` with the correct
    signature satisfies this protocol structurally (no explicit
    inheritance required).
    """

    def fetch_info(self, video_id: str) -> dict[str, Any]:
        """Fetch raw metadata for *video_id* and return a provider-specific dict.

        The returned dict must contain at least:

        * ``"id"`` — video identifier (``str``)
        * ``"title"`` — video title (``str``)
        * ``"formats"`` — list of format dicts (``list[dict]``)

        Raises
        ------
        MetadataExtractionError
            When the backend fails to extract metadata.
        VideoUnavailableError
            When the target video is confirmed unavailable.
        """
        ...  # pragma: no cover


class PlaylistProvider(Protocol):
    """Contract for the paginated playlist-items REST endpoint."""

    def fetch_page(self, playlist_id: str, page_token: str) -> dict[str, Any]:
        """Return one decoded JSON page for *playlist_id*.

        An empty *page_token* requests the first page.

        Raises
        ------
        PlaylistFetchError
            On any network, HTTP-status or JSON decoding failure.
        """
        ...  # pragma: no cover


class StreamProvider(Protocol):
    """Contract for fetching a selected stream fully into memory."""

    def fetch(
        self,
        fmt: StreamFormat,
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> bytes:
        """Download the bytes behind *fmt*.

        Raises
        ------
        StreamFetchError
            When the request fails or is interrupted.
        """
        ...  # pragma: no cover


class OutputStore(Protocol):
    """Contract for the destination filesystem."""

    def existing_size(self, path: str) -> int:
        """Return the size of *path*, or ``0`` when it does not exist."""
        ...  # pragma: no cover

    def write(self, path: str, data: bytes) -> None:
        """Create or overwrite *path* with *data*.

        Raises
        ------
        FileWriteError
            When the file cannot be written.
        """
        ...  # pragma: no cover
