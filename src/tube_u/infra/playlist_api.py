"""YouTube Data API v3 client for the ``playlistItems`` endpoint.

Implements :class:`~tube_u.core.protocols.PlaylistProvider` on top of a
shared :class:`requests.Session`.  Every ``requests`` or JSON decoding
failure is re-raised as :class:`~tube_u.exceptions.PlaylistFetchError`.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from tube_u.exceptions import PlaylistFetchError

logger = logging.getLogger(__name__)

PLAYLIST_ITEMS_URL: str = "https://www.googleapis.com/youtube/v3/playlistItems"


class YouTubePlaylistApi:
    """Concrete :class:`PlaylistProvider` backed by ``requests``.

    Parameters
    ----------
    api_key:
        YouTube Data API key.
    session:
        Shared HTTP session; a fresh one is created when omitted.
    page_size:
        ``maxResults`` sent with every request (the API caps it at 50).
    timeout:
        Per-request timeout in seconds.
    """

    def __init__(
        self,
        api_key: str,
        *,
        session: requests.Session | None = None,
        page_size: int = 50,
        timeout: float = 30.0,
    ) -> None:
        self._api_key = api_key
        self._session = session if session is not None else requests.Session()
        self._page_size = page_size
        self._timeout = timeout

    def build_params(self, playlist_id: str, page_token: str) -> dict[str, str]:
        """Return the query parameters for one page request."""
        return {
            "maxResults": str(self._page_size),
            "part": "snippet",
            "playlistId": playlist_id,
            "key": self._api_key,
            "pageToken": page_token,
        }

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def fetch_page(self, playlist_id: str, page_token: str) -> dict[str, Any]:
        """GET one page and return the decoded JSON object.

        Raises
        ------
        PlaylistFetchError
            On connection errors, non-2xx responses, or invalid JSON.
        """
        params = self.build_params(playlist_id, page_token)
        logger.debug(
            "GET %s playlistId=%s pageToken=%r",
            PLAYLIST_ITEMS_URL,
            playlist_id,
            page_token,
        )

        try:
            response = self._session.get(
                PLAYLIST_ITEMS_URL,
                params=params,
                timeout=self._timeout,
            )
            response.raise_for_status()
            payload: Any = response.json()
        except requests.exceptions.HTTPError as exc:
            raise PlaylistFetchError(
                f"playlist {playlist_id}: {self._describe_http_error(exc)}",
                hint="Check the playlist id and that the API key is valid.",
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise PlaylistFetchError(
                f"playlist {playlist_id}: {self._redact(str(exc))}",
            ) from exc
        except ValueError as exc:
            raise PlaylistFetchError(
                f"playlist {playlist_id}: invalid JSON response: {exc}",
            ) from exc

        if not isinstance(payload, dict):
            raise PlaylistFetchError(
                f"playlist {playlist_id}: unexpected response shape",
            )
        return payload

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _redact(self, message: str) -> str:
        """Mask the API key, which connection errors echo via the URL."""
        if not self._api_key:
            return message
        return message.replace(self._api_key, "***")

    @staticmethod
    def _describe_http_error(exc: requests.exceptions.HTTPError) -> str:
        """Prefer the API's own error message over the generic status line.

        The API key is part of the request URL, so the generic message is
        never used verbatim.
        """
        response = exc.response
        if response is None:
            return "HTTP error"
        try:
            message = response.json()["error"]["message"]
        except (ValueError, KeyError, TypeError):
            message = response.reason or ""
        return f"HTTP {response.status_code} {message}".strip()
