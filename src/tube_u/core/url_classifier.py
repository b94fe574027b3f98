"""Classify a command-line URL as a playlist, a single video, or neither.

Patterns are tried in a fixed order: the playlist pattern first (so a
``watch?v=...&list=...`` URL expands the whole playlist), then every
known single-video URL shape.  An unrecognised string is not an error;
it simply yields nothing to download.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from tube_u.core.models import VideoRef

_ID = r"([0-9A-Za-z_-]+)"

PLAYLIST_RE: re.Pattern[str] = re.compile(rf"youtube\.com/.*[?&]list={_ID}$")

VIDEO_RES: tuple[re.Pattern[str], ...] = (
    re.compile(rf"youtube\.com/watch\?(?:[^#]*&)?v={_ID}"),
    re.compile(rf"youtu\.be/{_ID}(?:[?#].*)?$"),
    re.compile(rf"youtube\.com/shorts/{_ID}"),
    re.compile(rf"youtube\.com/live/{_ID}"),
)


@dataclass(frozen=True, slots=True)
class ClassifiedURL:
    """Result of :func:`classify_url`.

    At most one of :attr:`playlist_id` and :attr:`videos` is populated.
    """

    playlist_id: str | None = None
    videos: tuple[VideoRef, ...] = ()

    @property
    def is_playlist(self) -> bool:
        return self.playlist_id is not None

    @property
    def is_empty(self) -> bool:
        return self.playlist_id is None and not self.videos


def classify_url(url: str, name_prefix: str = "") -> ClassifiedURL:
    """Match *url* against the playlist and single-video patterns."""
    match = PLAYLIST_RE.search(url)
    if match:
        return ClassifiedURL(playlist_id=match.group(1))

    for pattern in VIDEO_RES:
        match = pattern.search(url)
        if match:
            return ClassifiedURL(
                videos=(VideoRef(id=match.group(1), name_prefix=name_prefix),),
            )

    return ClassifiedURL()
