"""Video metadata through the yt-dlp extractor.

yt-dlp is used for extraction only: ``fetch_info`` resolves a video id
to the raw info dict (title plus every format with its direct URL) and
never writes media.  The stream itself is fetched later by
:mod:`tube_u.infra.stream_provider`.

``yt_dlp`` is imported on first use so ``--help`` and ``--version`` run
without it.
"""

from __future__ import annotations

import logging
from typing import Any

from tube_u.exceptions import EnvironmentError, MetadataExtractionError, VideoUnavailableError

logger = logging.getLogger(__name__)

WATCH_URL: str = "https://www.youtube.com/watch?v={video_id}"

# Lower-cased fragments of yt-dlp ``DownloadError`` text that mean the
# video cannot be served to anyone, not that extraction hit a snag.
UNAVAILABLE_MARKERS: tuple[str, ...] = (
    "video unavailable",
    "private video",
    "has been removed",
    "no longer available",
    "available in your country",
    "account associated with this video has been terminated",
    "confirm your age",
    "members-only",
)


def is_unavailable(message: str) -> bool:
    """True when a yt-dlp error *message* names a permanently missing video."""
    lowered = message.lower()
    return any(marker in lowered for marker in UNAVAILABLE_MARKERS)


class YtDlpMetadataProvider:
    """:class:`~tube_u.core.protocols.MetadataProvider` over ``yt_dlp.YoutubeDL``.

    Parameters
    ----------
    timeout:
        Socket timeout handed to yt-dlp, in seconds.  ``None`` keeps
        yt-dlp's own default.
    """

    def __init__(self, *, timeout: float | None = None) -> None:
        self._timeout = timeout

    def options(self) -> dict[str, Any]:
        """yt-dlp parameters for a silent, single-video, no-download lookup."""
        opts: dict[str, Any] = {
            "quiet": True,
            "no_warnings": True,
            "no_color": True,
            "skip_download": True,
            "noplaylist": True,
        }
        if self._timeout is not None:
            opts["socket_timeout"] = self._timeout
        return opts

    def fetch_info(self, video_id: str) -> dict[str, Any]:
        """Return yt-dlp's info dict for *video_id*.

        Raises
        ------
        EnvironmentError
            yt-dlp is not installed.
        VideoUnavailableError
            The video is private, removed, region-locked or age-gated.
        MetadataExtractionError
            Any other extractor failure or an unusable result.
        """
        try:
            import yt_dlp
            import yt_dlp.utils
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "yt-dlp is not installed. Install with: pip install yt-dlp",
            ) from exc

        url = WATCH_URL.format(video_id=video_id)
        logger.debug("extracting %s", url)
        try:
            with yt_dlp.YoutubeDL(self.options()) as ydl:
                info: Any = ydl.extract_info(url, download=False)
        except yt_dlp.utils.DownloadError as exc:
            if is_unavailable(str(exc)):
                raise VideoUnavailableError(
                    f"{video_id}: {exc}",
                    hint="Check the video plays in a browser; it may be private or removed.",
                ) from exc
            raise MetadataExtractionError(f"{video_id}: {exc}") from exc
        except Exception as exc:
            raise MetadataExtractionError(
                f"{video_id}: unexpected yt-dlp error: {exc}",
            ) from exc

        if info is None:
            raise MetadataExtractionError(
                f"{video_id}: yt-dlp returned no metadata",
                hint="The id may not point to a valid video.",
            )
        if not isinstance(info, dict):
            raise MetadataExtractionError(
                f"{video_id}: yt-dlp returned an unexpected data structure "
                f"({type(info).__name__})",
            )
        return dict(info)
