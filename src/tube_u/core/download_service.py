"""Core download service — orchestrates the per-video download pipeline.

Pipeline for one :class:`~tube_u.core.models.VideoRef`:

1. Fetch metadata (title, formats) via :class:`MetadataService`.
2. Sanitise the title.
3. Select the best stream for the configured :class:`MediaMode`.
4. Compose the destination path.
5. Skip when a non-empty file already sits at that path.
6. Fetch the whole stream into memory and write it out.

Guarantees
----------
* Filesystem and network access go through injected protocols only.
* Only :class:`~tube_u.exceptions.TubeUError` subclasses escape.
"""

from __future__ import annotations

import logging

from tube_u.core.format_filter import mime_prefix_for, select_best_format
from tube_u.core.metadata_service import MetadataService
from tube_u.core.models import (
    DownloadOutcome,
    MediaMode,
    StreamFormat,
    VideoInfo,
    VideoRef,
)
from tube_u.core.naming import DEFAULT_TITLE_MAX_LEN, output_filename, sanitize_title
from tube_u.core.protocols import OutputStore, ProgressCallback, StreamProvider
from tube_u.exceptions import (
    EmptyStreamError,
    NoStreamFoundError,
    StreamFetchError,
    TubeUError,
    append_ytdlp_upgrade_suggestion,
)

logger = logging.getLogger(__name__)


class DownloadService:
    """Stateless service that drives the download pipeline.

    Parameters
    ----------
    metadata:
        Service used to look up title and formats.
    streams:
        Any object satisfying the :class:`StreamProvider` protocol.
    store:
        Any object satisfying the :class:`OutputStore` protocol.
    mode:
        Audio-only (default) or video.
    title_max_len:
        Cap applied to the sanitised title.
    """

    def __init__(
        self,
        metadata: MetadataService,
        streams: StreamProvider,
        store: OutputStore,
        *,
        mode: MediaMode = MediaMode.AUDIO,
        title_max_len: int = DEFAULT_TITLE_MAX_LEN,
    ) -> None:
        self._metadata = metadata
        self._streams = streams
        self._store = store
        self._mode = mode
        self._title_max_len = title_max_len

    # ------------------------------------------------------------------
    # Path construction (pure)
    # ------------------------------------------------------------------

    def destination(self, ref: VideoRef, info: VideoInfo) -> tuple[str, StreamFormat]:
        """Return ``(path, selected_format)`` for *info*.

        Raises
        ------
        NoStreamFoundError
            When no format of the configured family exists.
        """
        fmt = select_best_format(info.formats, self._mode)
        if fmt is None or not fmt.itag:
            raise NoStreamFoundError(
                f"{ref.id}: no {mime_prefix_for(self._mode)} stream found",
                hint=append_ytdlp_upgrade_suggestion(
                    "The video may not offer this stream type.",
                ),
            )
        safe_title = sanitize_title(info.title, self._title_max_len)
        if not safe_title:
            safe_title = sanitize_title(ref.id, self._title_max_len)
        return output_filename(ref.name_prefix, safe_title, fmt, self._mode), fmt

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def download(
        self,
        ref: VideoRef,
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> DownloadOutcome:
        """Download a single video, skipping it when already on disk.

        Raises
        ------
        MetadataExtractionError, VideoUnavailableError
            When metadata cannot be fetched.
        NoStreamFoundError
            When no stream of the requested family exists.
        StreamFetchError, EmptyStreamError
            When the stream cannot be fetched or is empty.
        FileWriteError
            When the destination cannot be written.
        """
        info = self._metadata.get_video(ref.id)
        path, fmt = self.destination(ref, info)

        existing = self._store.existing_size(path)
        if existing > 0:
            logger.info("%s: %s already exists, skipping", ref.id, path)
            return DownloadOutcome(path=path, skipped=True, size=existing)

        logger.debug("%s: fetching itag %s into %s", ref.id, fmt.itag, path)
        data = self._fetch_stream(ref, fmt, progress_callback)
        if not data:
            raise EmptyStreamError(f"{ref.id}: stream itag {fmt.itag} is empty")

        self._store.write(path, data)
        return DownloadOutcome(path=path, skipped=False, size=len(data))

    # ------------------------------------------------------------------
    # Provider delegation (safe boundary)
    # ------------------------------------------------------------------

    def _fetch_stream(
        self,
        ref: VideoRef,
        fmt: StreamFormat,
        progress_callback: ProgressCallback | None,
    ) -> bytes:
        try:
            return self._streams.fetch(fmt, progress_callback=progress_callback)
        except TubeUError:
            raise
        except Exception as exc:
            raise StreamFetchError(
                f"{ref.id}: unexpected stream error: {exc}",
            ) from exc
