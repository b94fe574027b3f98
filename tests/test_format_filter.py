"""Tests for the pure format selection pipeline (core/format_filter.py).

Every test is a pure function call — no I/O, no mocking, no side
effects.  These tests exercise:

* Mime-family filtering for audio and video modes
* Strict arg-max over bitrate (first wins on ties, zero never wins)
* End-to-end pipeline via ``select_best_format``
"""

from __future__ import annotations

from typing import Any

from tube_u.core.format_filter import (
    filter_by_mode,
    highest_bitrate,
    mime_prefix_for,
    select_best_format,
)
from tube_u.core.models import MediaMode, StreamFormat

AAC = 'audio/mp4; codecs="mp4a.40.2"'
OPUS = 'audio/webm; codecs="opus"'
AVC = 'video/mp4; codecs="avc1.640028"'
AV1 = 'video/mp4; codecs="av01.0.08M.08"'
VP9 = 'video/webm; codecs="vp9"'


# ---------------------------------------------------------------------------
# Factory helper
# ---------------------------------------------------------------------------

def _fmt(**overrides: Any) -> StreamFormat:
    defaults: dict[str, Any] = {
        "itag": "140",
        "mime_type": AAC,
        "bitrate": 130_000,
        "quality_label": "medium",
        "url": "https://media.example/140",
    }
    defaults.update(overrides)
    return StreamFormat(**defaults)


# ---------------------------------------------------------------------------
# filter_by_mode
# ---------------------------------------------------------------------------

class TestFilterByMode:
    def test_audio_keeps_every_audio_container(self) -> None:
        formats = [
            _fmt(itag="140", mime_type=AAC),
            _fmt(itag="251", mime_type=OPUS),
            _fmt(itag="137", mime_type=AVC),
        ]
        result = filter_by_mode(formats, MediaMode.AUDIO)
        assert [f.itag for f in result] == ["140", "251"]

    def test_video_keeps_only_mp4_avc1(self) -> None:
        formats = [
            _fmt(itag="137", mime_type=AVC),
            _fmt(itag="399", mime_type=AV1),
            _fmt(itag="248", mime_type=VP9),
            _fmt(itag="140", mime_type=AAC),
        ]
        result = filter_by_mode(formats, MediaMode.VIDEO)
        assert [f.itag for f in result] == ["137"]

    def test_empty_input(self) -> None:
        assert filter_by_mode([], MediaMode.AUDIO) == []

    def test_prefixes(self) -> None:
        assert mime_prefix_for(MediaMode.AUDIO) == "audio/"
        assert mime_prefix_for(MediaMode.VIDEO) == 'video/mp4; codecs="avc1'


# ---------------------------------------------------------------------------
# highest_bitrate
# ---------------------------------------------------------------------------

class TestHighestBitrate:
    def test_picks_maximum(self) -> None:
        formats = [
            _fmt(itag="a", bitrate=50_000),
            _fmt(itag="b", bitrate=160_000),
            _fmt(itag="c", bitrate=130_000),
        ]
        best = highest_bitrate(formats)
        assert best is not None
        assert best.itag == "b"

    def test_first_wins_on_tie(self) -> None:
        formats = [
            _fmt(itag="first", bitrate=128_000),
            _fmt(itag="second", bitrate=128_000),
        ]
        best = highest_bitrate(formats)
        assert best is not None
        assert best.itag == "first"

    def test_zero_bitrate_never_selected(self) -> None:
        assert highest_bitrate([_fmt(bitrate=0)]) is None

    def test_empty_input(self) -> None:
        assert highest_bitrate([]) is None


# ---------------------------------------------------------------------------
# select_best_format (full pipeline)
# ---------------------------------------------------------------------------

class TestSelectBestFormat:
    def test_audio_ignores_higher_bitrate_video(self) -> None:
        formats = [
            _fmt(itag="137", mime_type=AVC, bitrate=4_000_000),
            _fmt(itag="140", mime_type=AAC, bitrate=130_000),
            _fmt(itag="251", mime_type=OPUS, bitrate=150_000),
        ]
        best = select_best_format(formats, MediaMode.AUDIO)
        assert best is not None
        assert best.itag == "251"

    def test_video_picks_best_avc1(self) -> None:
        formats = [
            _fmt(itag="136", mime_type=AVC, bitrate=2_000_000),
            _fmt(itag="137", mime_type=AVC, bitrate=4_000_000),
            _fmt(itag="248", mime_type=VP9, bitrate=9_000_000),
        ]
        best = select_best_format(formats, MediaMode.VIDEO)
        assert best is not None
        assert best.itag == "137"

    def test_none_when_no_family_match(self) -> None:
        formats = [_fmt(mime_type=OPUS)]
        assert select_best_format(formats, MediaMode.VIDEO) is None

    def test_selected_bitrate_is_strict_maximum(self) -> None:
        bitrates = [3, 9, 1, 9, 4]
        formats = [
            _fmt(itag=str(i), bitrate=b) for i, b in enumerate(bitrates)
        ]
        best = select_best_format(formats, MediaMode.AUDIO)
        assert best is not None
        assert best.bitrate == max(bitrates)
        assert best.itag == "1"
