"""Pure stream-format filtering and selection logic.

Every function in this module is a **pure** transformation — no I/O,
no side effects, fully deterministic, and trivially unit-testable.

Pipeline order (enforced by :func:`select_best_format`):

1. **Filter** — keep only formats of the requested media family.
2. **Select** — linear arg-max over bitrate; the first format wins ties.
"""

from __future__ import annotations

from collections.abc import Sequence

from tube_u.core.models import MediaMode, StreamFormat

AUDIO_MIME_PREFIX: str = "audio/"
VIDEO_MIME_PREFIX: str = 'video/mp4; codecs="avc1'


# ---------------------------------------------------------------------------
# 1. Filter
# ---------------------------------------------------------------------------

def mime_prefix_for(mode: MediaMode) -> str:
    """Return the mime-type prefix a format must carry for *mode*."""
    if mode is MediaMode.VIDEO:
        return VIDEO_MIME_PREFIX
    return AUDIO_MIME_PREFIX


def filter_by_mode(
    formats: Sequence[StreamFormat],
    mode: MediaMode,
) -> list[StreamFormat]:
    """Return only formats whose mime type matches *mode*."""
    prefix = mime_prefix_for(mode)
    return [fmt for fmt in formats if fmt.mime_type.startswith(prefix)]


# ---------------------------------------------------------------------------
# 2. Select
# ---------------------------------------------------------------------------

def highest_bitrate(formats: Sequence[StreamFormat]) -> StreamFormat | None:
    """Return the format with strictly maximum bitrate.

    A format must beat the running best (starting from zero), so a
    zero-bitrate format is never selected.
    """
    best: StreamFormat | None = None
    best_bitrate = 0
    for fmt in formats:
        if fmt.bitrate > best_bitrate:
            best = fmt
            best_bitrate = fmt.bitrate
    return best


# ---------------------------------------------------------------------------
# Composite pipeline
# ---------------------------------------------------------------------------

def select_best_format(
    formats: Sequence[StreamFormat],
    mode: MediaMode,
) -> StreamFormat | None:
    """Run the filter → arg-max pipeline.

    Returns ``None`` when no format of the requested family remains.
    """
    return highest_bitrate(filter_by_mode(formats, mode))
