"""Pure filename helpers: title sanitising and sequence prefixes.

Every function in this module is deterministic and free of I/O.
"""

from __future__ import annotations

import math
import re

from tube_u.core.models import MediaMode, StreamFormat

FILLER: str = "."

DEFAULT_TITLE_MAX_LEN: int = 50

_FILLER_RUN_RE = re.compile(re.escape(FILLER) + "{2,}")


def sanitize_title(title: str, max_len: int = DEFAULT_TITLE_MAX_LEN) -> str:
    """Reduce *title* to letters, digits and single filler characters.

    Steps: every non-letter/non-digit becomes :data:`FILLER`, runs of
    filler collapse to one, the result is capped at *max_len* characters
    and leading/trailing filler is stripped.  Applying the function to
    its own output returns it unchanged.
    """
    replaced = "".join(
        ch if ch.isalpha() or ch.isdecimal() else FILLER for ch in title
    )
    collapsed = _FILLER_RUN_RE.sub(FILLER, replaced)
    return collapsed[:max_len].strip(FILLER)


def sequence_width(count: int) -> int:
    """Digits needed to print *count*, i.e. ``floor(log10(count)) + 1``."""
    if count < 1:
        return 1
    return int(math.log10(count)) + 1


def sequence_prefixes(name_prefix: str, count: int) -> list[str]:
    """Return ``count`` prefixes like ``name_prefix + "001."``.

    Zero padding keeps lexicographic order equal to numeric order.
    """
    width = sequence_width(count)
    return [f"{name_prefix}{index:0{width}d}." for index in range(1, count + 1)]


def audio_extension(fmt: StreamFormat) -> str:
    """Map an audio container to a file extension (``mp4`` → ``m4a``)."""
    container = fmt.container
    if container == "mp4":
        return "m4a"
    return container or "bin"


def output_filename(
    name_prefix: str,
    safe_title: str,
    fmt: StreamFormat,
    mode: MediaMode,
) -> str:
    """Compose the destination filename for *fmt*.

    * audio: ``<prefix><title>.<ext>``
    * video: ``<prefix><title>..<quality-label>..mp4``
    """
    if mode is MediaMode.VIDEO:
        quality = sanitize_title(fmt.quality_label) or fmt.itag
        return f"{name_prefix}{safe_title}..{quality}..mp4"
    return f"{name_prefix}{safe_title}.{audio_extension(fmt)}"
