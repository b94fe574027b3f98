"""HTTP implementation of :class:`~tube_u.core.protocols.StreamProvider`.

The selected format's direct URL is fetched with ``requests`` in
consecutive ``Range`` requests and the body is buffered entirely in
memory.  A server that answers ``200`` instead of ``206`` has sent the
whole body, which ends the loop.  Any ``requests`` failure is
re-raised as :class:`~tube_u.exceptions.StreamFetchError`.
"""

from __future__ import annotations

import io
import logging

import requests

from tube_u.core.models import StreamFormat
from tube_u.core.protocols import ProgressCallback
from tube_u.exceptions import StreamFetchError

logger = logging.getLogger(__name__)

CHUNK_SIZE: int = 1 << 16

# googlevideo throttles long single responses; yt-dlp requests YouTube
# https formats in ranges of this size.
RANGE_SIZE: int = 10 << 20


class HttpStreamProvider:
    """Concrete :class:`StreamProvider` backed by a shared session.

    Parameters
    ----------
    range_size:
        Bytes requested per ``Range`` request.  ``None`` fetches the body
        with one plain GET.
    """

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        timeout: float = 30.0,
        range_size: int | None = RANGE_SIZE,
    ) -> None:
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout
        self._range_size = range_size

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def fetch(
        self,
        fmt: StreamFormat,
        *,
        progress_callback: ProgressCallback | None = None,
    ) -> bytes:
        """Download the whole stream behind *fmt*.

        Raises
        ------
        StreamFetchError
            On connection errors, non-2xx responses, or a truncated body.
        """
        buffer = io.BytesIO()
        total = fmt.filesize
        try:
            while True:
                start = buffer.tell()
                with self._session.get(
                    fmt.url,
                    headers=self._request_headers(fmt, start),
                    stream=True,
                    timeout=self._timeout,
                ) as response:
                    response.raise_for_status()
                    partial = response.status_code == 206
                    if partial:
                        total = _range_total(response) or total
                    else:
                        # Range ignored: this response is the whole body.
                        buffer.seek(0)
                        buffer.truncate()
                        total = _content_length(response) or total
                    logger.debug(
                        "itag %s: offset %d, %s bytes announced", fmt.itag, start, total,
                    )

                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if not chunk:
                            continue
                        buffer.write(chunk)
                        if progress_callback is not None:
                            progress_callback(buffer.tell(), total)

                if not partial or self._range_size is None:
                    break
                if buffer.tell() - start < self._range_size:
                    break
                if total is not None and buffer.tell() >= total:
                    break
        except requests.exceptions.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else "?"
            raise StreamFetchError(f"itag {fmt.itag}: HTTP {status}") from exc
        except requests.exceptions.RequestException as exc:
            raise StreamFetchError(f"itag {fmt.itag}: {exc}") from exc

        return buffer.getvalue()

    def _request_headers(self, fmt: StreamFormat, start: int) -> dict[str, str]:
        headers = dict(fmt.http_headers)
        if self._range_size is not None:
            headers["Range"] = f"bytes={start}-{start + self._range_size - 1}"
        return headers


# ---------------------------------------------------------------------------
# Utility
# ---------------------------------------------------------------------------

def _content_length(response: requests.Response) -> int | None:
    """Return the ``Content-Length`` header as ``int`` or ``None``."""
    value = response.headers.get("Content-Length")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _range_total(response: requests.Response) -> int | None:
    """Return the full length from ``Content-Range: bytes a-b/N`` or ``None``."""
    value = response.headers.get("Content-Range", "")
    _, _, length = value.rpartition("/")
    try:
        return int(length)
    except ValueError:
        return None
