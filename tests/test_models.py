"""Tests for domain models (core/models.py).

All models are frozen dataclasses — these tests verify immutability,
equality semantics, and the derived ``container`` property.
"""

from __future__ import annotations

import dataclasses

import pytest

from tube_u.core.models import (
    MediaMode,
    PlaylistItemSnippet,
    StreamFormat,
    Thumbnails,
    VideoInfo,
    VideoRef,
)


def _make_format(**overrides: object) -> StreamFormat:
    """Factory with sensible defaults for concise tests."""
    defaults: dict[str, object] = {
        "itag": "140",
        "mime_type": 'audio/mp4; codecs="mp4a.40.2"',
        "bitrate": 130_000,
        "quality_label": "medium",
        "url": "https://media.example/140",
    }
    defaults.update(overrides)
    return StreamFormat(**defaults)  # type: ignore[arg-type]


class TestVideoRef:
    def test_equality(self) -> None:
        assert VideoRef("a", "1.") == VideoRef(id="a", name_prefix="1.")

    def test_frozen(self) -> None:
        ref = VideoRef("a", "")
        with pytest.raises(dataclasses.FrozenInstanceError):
            ref.id = "b"  # type: ignore[misc]


class TestStreamFormat:
    def test_defaults(self) -> None:
        fmt = _make_format()
        assert fmt.http_headers == ()
        assert fmt.filesize is None

    @pytest.mark.parametrize(
        ("mime", "container"),
        [
            ('audio/mp4; codecs="mp4a.40.2"', "mp4"),
            ('audio/webm; codecs="opus"', "webm"),
            ("video/mp4", "mp4"),
            ("", ""),
        ],
    )
    def test_container(self, mime: str, container: str) -> None:
        assert _make_format(mime_type=mime).container == container

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            _make_format().bitrate = 1  # type: ignore[misc]


class TestPlaylistItemSnippet:
    def test_thumbnails_default_empty(self) -> None:
        snippet = PlaylistItemSnippet(
            title="t", description="", published_at="2020", position=0, video_id="v",
        )
        assert snippet.thumbnails == Thumbnails()
        assert snippet.thumbnails.maxres == ""


class TestVideoInfo:
    def test_formats_is_tuple(self) -> None:
        info = VideoInfo(id="a", title="t", formats=(_make_format(),))
        assert isinstance(info.formats, tuple)
        assert len(info.formats) == 1


class TestMediaMode:
    def test_values(self) -> None:
        assert MediaMode("audio") is MediaMode.AUDIO
        assert MediaMode("video") is MediaMode.VIDEO
