"""Tests for MetadataService (core/metadata_service.py).

The :class:`MetadataProvider` dependency is **mocked** — no internet
access, no yt-dlp invocation.  These tests verify:

* Raw yt-dlp dict → :class:`VideoInfo` / :class:`StreamFormat` parsing
* Mime-type synthesis from codec fields
* Non-fetchable formats (manifests, storyboards) are dropped
* Exception mapping (provider errors → our hierarchy)
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from tube_u.core.metadata_service import MetadataService
from tube_u.core.models import VideoInfo
from tube_u.exceptions import MetadataExtractionError, VideoUnavailableError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _fake_provider(info: dict[str, Any] | Exception) -> MagicMock:
    """Return a mock MetadataProvider.

    If *info* is a dict, ``fetch_info`` returns it.
    If *info* is an exception, ``fetch_info`` raises it.
    """
    provider = MagicMock()
    if isinstance(info, Exception):
        provider.fetch_info.side_effect = info
    else:
        provider.fetch_info.return_value = info
    return provider


def _sample_info(
    *,
    formats: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Minimal valid info dict."""
    return {
        "id": "abc123",
        "title": "Sample Video",
        "formats": formats or [],
    }


def _raw_format(**overrides: Any) -> dict[str, Any]:
    """Factory for a raw format dict matching yt-dlp output shape."""
    d: dict[str, Any] = {
        "format_id": "140",
        "ext": "m4a",
        "vcodec": "none",
        "acodec": "mp4a.40.2",
        "tbr": 129.5,
        "format_note": "medium",
        "protocol": "https",
        "url": "https://rr1.googlevideo.com/videoplayback?itag=140",
        "http_headers": {"User-Agent": "Mozilla/5.0"},
        "filesize": 3_400_000,
    }
    d.update(overrides)
    return d


# ---------------------------------------------------------------------------
# get_video — parsing
# ---------------------------------------------------------------------------

class TestGetVideo:
    def test_parses_id_and_title(self) -> None:
        svc = MetadataService(_fake_provider(_sample_info()))
        info = svc.get_video("abc123")
        assert isinstance(info, VideoInfo)
        assert info.id == "abc123"
        assert info.title == "Sample Video"
        assert info.formats == ()

    def test_calls_provider_with_id(self) -> None:
        provider = _fake_provider(_sample_info())
        MetadataService(provider).get_video("abc123")
        provider.fetch_info.assert_called_once_with("abc123")

    def test_missing_id_falls_back_to_requested(self) -> None:
        raw = _sample_info()
        del raw["id"]
        info = MetadataService(_fake_provider(raw)).get_video("zzz")
        assert info.id == "zzz"

    def test_missing_title_is_empty(self) -> None:
        raw = _sample_info()
        del raw["title"]
        info = MetadataService(_fake_provider(raw)).get_video("abc123")
        assert info.title == ""

    def test_empty_id_rejected(self) -> None:
        provider = _fake_provider(_sample_info())
        with pytest.raises(MetadataExtractionError, match="empty"):
            MetadataService(provider).get_video("  ")
        provider.fetch_info.assert_not_called()

    def test_non_list_formats_ignored(self) -> None:
        raw = _sample_info()
        raw["formats"] = "garbage"
        info = MetadataService(_fake_provider(raw)).get_video("abc123")
        assert info.formats == ()


# ---------------------------------------------------------------------------
# get_video — format parsing
# ---------------------------------------------------------------------------

class TestFormatParsing:
    def _single(self, **overrides: Any):
        raw = _sample_info(formats=[_raw_format(**overrides)])
        return MetadataService(_fake_provider(raw)).get_video("abc123").formats

    def test_audio_mp4(self) -> None:
        (fmt,) = self._single()
        assert fmt.itag == "140"
        assert fmt.mime_type == 'audio/mp4; codecs="mp4a.40.2"'
        assert fmt.bitrate == 129_500
        assert fmt.quality_label == "medium"
        assert fmt.http_headers == (("User-Agent", "Mozilla/5.0"),)
        assert fmt.filesize == 3_400_000
        assert fmt.container == "mp4"

    def test_audio_webm(self) -> None:
        (fmt,) = self._single(format_id="251", ext="webm", acodec="opus")
        assert fmt.mime_type == 'audio/webm; codecs="opus"'

    def test_video_only(self) -> None:
        (fmt,) = self._single(
            format_id="137",
            ext="mp4",
            vcodec="avc1.640028",
            acodec="none",
            format_note="1080p",
        )
        assert fmt.mime_type == 'video/mp4; codecs="avc1.640028"'
        assert fmt.quality_label == "1080p"

    def test_muxed_lists_both_codecs(self) -> None:
        (fmt,) = self._single(format_id="18", ext="mp4", vcodec="avc1.42001E")
        assert fmt.mime_type == 'video/mp4; codecs="avc1.42001E, mp4a.40.2"'

    def test_quality_label_from_height(self) -> None:
        (fmt,) = self._single(
            vcodec="avc1", acodec="none", ext="mp4", format_note=None, height=720,
        )
        assert fmt.quality_label == "720p"

    def test_bitrate_falls_back_to_abr(self) -> None:
        (fmt,) = self._single(tbr=None, abr=48.0)
        assert fmt.bitrate == 48_000

    def test_unknown_bitrate_is_zero(self) -> None:
        (fmt,) = self._single(tbr=None)
        assert fmt.bitrate == 0

    def test_filesize_approx_used(self) -> None:
        (fmt,) = self._single(filesize=None, filesize_approx=1234)
        assert fmt.filesize == 1234

    def test_manifest_protocol_dropped(self) -> None:
        assert self._single(protocol="m3u8_native") == ()

    def test_missing_url_dropped(self) -> None:
        assert self._single(url=None) == ()

    def test_storyboard_dropped(self) -> None:
        assert self._single(ext="mhtml", vcodec="none", acodec="none") == ()


# ---------------------------------------------------------------------------
# get_video — exception mapping
# ---------------------------------------------------------------------------

class TestGetVideoExceptions:
    def test_provider_domain_error_propagates(self) -> None:
        svc = MetadataService(_fake_provider(VideoUnavailableError("gone")))
        with pytest.raises(VideoUnavailableError, match="gone"):
            svc.get_video("abc123")

    def test_provider_unexpected_error_wrapped(self) -> None:
        svc = MetadataService(_fake_provider(RuntimeError("boom")))
        with pytest.raises(MetadataExtractionError, match="unexpected") as exc_info:
            svc.get_video("abc123")
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert "abc123" in str(exc_info.value)
