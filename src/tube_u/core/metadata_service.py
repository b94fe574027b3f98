"""Core metadata service — turns raw extractor output into domain models.

This service depends on a :class:`~tube_u.core.protocols.MetadataProvider`
injected at construction time (dependency inversion), keeping the core
free of any external-system imports.

Guarantees
----------
* Pure orchestration — no I/O, no ``print()``, no filesystem access.
* Only :class:`~tube_u.exceptions.TubeUError` subclasses escape.
* All parsing logic is deterministic and stateless.
"""

from __future__ import annotations

import logging
from typing import Any

from tube_u.core.models import StreamFormat, VideoInfo
from tube_u.core.protocols import MetadataProvider
from tube_u.exceptions import MetadataExtractionError, TubeUError

logger = logging.getLogger(__name__)

# yt-dlp reports the file extension; mime types name the container.
_CONTAINER_BY_EXT: dict[str, str] = {
    "m4a": "mp4",
    "mp4": "mp4",
    "webm": "webm",
    "3gp": "3gpp",
}

_DIRECT_PROTOCOLS: frozenset[str] = frozenset({"http", "https"})


class MetadataService:
    """Stateless service that fetches and parses per-video metadata.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`MetadataProvider` protocol.
    """

    def __init__(self, provider: MetadataProvider) -> None:
        self._provider: MetadataProvider = provider

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_video(self, video_id: str) -> VideoInfo:
        """Fetch title and directly downloadable formats for *video_id*.

        Raises
        ------
        MetadataExtractionError
            If *video_id* is empty or the backend fails.
        VideoUnavailableError
            If the video is confirmed unavailable.
        """
        if not video_id.strip():
            raise MetadataExtractionError("Video id must not be empty.")
        info = self._fetch(video_id)
        formats = self._parse_formats(self._extract_raw_formats(info))
        logger.debug("%s: %d usable formats", video_id, len(formats))
        return VideoInfo(
            id=str(info.get("id") or video_id),
            title=str(info.get("title") or ""),
            formats=tuple(formats),
        )

    # ------------------------------------------------------------------
    # Provider delegation (safe boundary)
    # ------------------------------------------------------------------

    def _fetch(self, video_id: str) -> dict[str, Any]:
        """Call the provider and ensure only our exceptions escape."""
        try:
            return self._provider.fetch_info(video_id)
        except TubeUError:
            raise
        except Exception as exc:
            raise MetadataExtractionError(
                f"{video_id}: unexpected provider error: {exc}",
            ) from exc

    # ------------------------------------------------------------------
    # Raw-dict → domain-model parsers (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def _extract_raw_formats(info: dict[str, Any]) -> list[dict[str, Any]]:
        """Safely pull the ``formats`` list from a raw info dict."""
        raw: object = info.get("formats")
        if not isinstance(raw, list):
            return []
        return [entry for entry in raw if isinstance(entry, dict)]

    @staticmethod
    def _codec(raw: dict[str, Any], key: str) -> str | None:
        value = raw.get(key)
        if not value or value == "none":
            return None
        return str(value)

    @classmethod
    def _mime_type(cls, raw: dict[str, Any]) -> str | None:
        """Build ``<kind>/<container>; codecs="..."`` or ``None`` for non-media."""
        vcodec = cls._codec(raw, "vcodec")
        acodec = cls._codec(raw, "acodec")
        if vcodec is None and acodec is None:
            return None

        ext = str(raw.get("ext") or "")
        container = _CONTAINER_BY_EXT.get(ext, ext)
        if vcodec is None:
            return f'audio/{container}; codecs="{acodec}"'
        codecs = vcodec if acodec is None else f"{vcodec}, {acodec}"
        return f'video/{container}; codecs="{codecs}"'

    @staticmethod
    def _bitrate(raw: dict[str, Any]) -> int:
        """yt-dlp reports kbit/s floats; convert to integer bit/s."""
        for key in ("tbr", "abr", "vbr"):
            value = raw.get(key)
            if isinstance(value, (int, float)) and value > 0:
                return int(round(value * 1000))
        return 0

    @staticmethod
    def _quality_label(raw: dict[str, Any]) -> str:
        note = raw.get("format_note")
        if note:
            return str(note)
        height = raw.get("height")
        if isinstance(height, int):
            return f"{height}p"
        return ""

    @staticmethod
    def _headers(raw: dict[str, Any]) -> tuple[tuple[str, str], ...]:
        headers: object = raw.get("http_headers")
        if not isinstance(headers, dict):
            return ()
        return tuple((str(k), str(v)) for k, v in headers.items())

    @classmethod
    def _parse_single_format(cls, raw: dict[str, Any]) -> StreamFormat | None:
        """Convert one raw format dict, or ``None`` when it is not fetchable."""
        url = raw.get("url")
        if not url or raw.get("protocol", "https") not in _DIRECT_PROTOCOLS:
            return None
        mime_type = cls._mime_type(raw)
        if mime_type is None:
            return None

        raw_size = raw.get("filesize")
        if raw_size is None:
            raw_size = raw.get("filesize_approx")
        filesize: int | None = int(raw_size) if raw_size is not None else None

        return StreamFormat(
            itag=str(raw.get("format_id", "")),
            mime_type=mime_type,
            bitrate=cls._bitrate(raw),
            quality_label=cls._quality_label(raw),
            url=str(url),
            http_headers=cls._headers(raw),
            filesize=filesize,
        )

    @classmethod
    def _parse_formats(
        cls,
        raw_formats: list[dict[str, Any]],
    ) -> list[StreamFormat]:
        """Convert raw format dicts to domain models, dropping unusable ones."""
        parsed = (cls._parse_single_format(entry) for entry in raw_formats)
        return [fmt for fmt in parsed if fmt is not None]
