"""Core playlist service — expands a playlist id into ordered video refs.

The paginated REST endpoint is reached through a
:class:`~tube_u.core.protocols.PlaylistProvider`; this module only
parses pages, decides when pagination ends, orders the entries and
assigns sequence prefixes.

Pagination ends when the returned ``nextPageToken`` is empty or equal to
the token that was just requested.
"""

from __future__ import annotations

import logging
from typing import Any

from tube_u.core.models import PlaylistItemSnippet, PlaylistPage, Thumbnails, VideoRef
from tube_u.core.naming import sequence_prefixes
from tube_u.core.protocols import PlaylistProvider
from tube_u.exceptions import PlaylistFetchError, TubeUError

logger = logging.getLogger(__name__)


class PlaylistService:
    """Stateless service driving playlist pagination.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`PlaylistProvider` protocol.
    """

    def __init__(self, provider: PlaylistProvider) -> None:
        self._provider: PlaylistProvider = provider

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def expand(self, playlist_id: str, name_prefix: str = "") -> list[VideoRef]:
        """Return every video of *playlist_id* in publish-time order.

        Each ref's ``name_prefix`` is *name_prefix* followed by a
        zero-padded 1-based index and a ``.``.

        Raises
        ------
        PlaylistFetchError
            On the first page that cannot be fetched or decoded.
        """
        snippets = sorted(
            self.fetch_all_snippets(playlist_id),
            key=lambda snippet: snippet.published_at,
        )
        prefixes = sequence_prefixes(name_prefix, len(snippets))
        return [
            VideoRef(id=snippet.video_id, name_prefix=prefix)
            for snippet, prefix in zip(snippets, prefixes)
        ]

    def fetch_all_snippets(self, playlist_id: str) -> list[PlaylistItemSnippet]:
        """Collect snippets from every page, in API order."""
        snippets: list[PlaylistItemSnippet] = []
        page_token = ""
        while True:
            page = self.fetch_page(playlist_id, page_token)
            snippets.extend(page.snippets)
            logger.debug(
                "playlist %s: page %r gave %d items (%d/%d)",
                playlist_id,
                page_token,
                len(page.snippets),
                len(snippets),
                page.total_results,
            )
            if not page.next_page_token or page.next_page_token == page_token:
                break
            page_token = page.next_page_token
        return snippets

    def fetch_page(self, playlist_id: str, page_token: str) -> PlaylistPage:
        """Fetch and parse a single page."""
        raw = self._fetch(playlist_id, page_token)
        try:
            return self._parse_page(raw)
        except (TypeError, ValueError, AttributeError) as exc:
            raise PlaylistFetchError(
                f"playlist {playlist_id}: malformed response: {exc}",
            ) from exc

    # ------------------------------------------------------------------
    # Provider delegation (safe boundary)
    # ------------------------------------------------------------------

    def _fetch(self, playlist_id: str, page_token: str) -> dict[str, Any]:
        try:
            return self._provider.fetch_page(playlist_id, page_token)
        except TubeUError:
            raise
        except Exception as exc:
            raise PlaylistFetchError(
                f"playlist {playlist_id}: unexpected provider error: {exc}",
            ) from exc

    # ------------------------------------------------------------------
    # Raw-dict → domain-model parsers (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def _thumbnail_url(thumbnails: dict[str, Any], size: str) -> str:
        entry = thumbnails.get(size)
        if not isinstance(entry, dict):
            return ""
        return str(entry.get("url") or "")

    @classmethod
    def _parse_snippet(cls, raw: dict[str, Any]) -> PlaylistItemSnippet:
        thumbnails = raw.get("thumbnails") or {}
        resource = raw.get("resourceId") or {}
        return PlaylistItemSnippet(
            title=str(raw.get("title") or ""),
            description=str(raw.get("description") or ""),
            published_at=str(raw.get("publishedAt") or ""),
            position=int(raw.get("position") or 0),
            video_id=str(resource.get("videoId") or ""),
            thumbnails=Thumbnails(
                medium=cls._thumbnail_url(thumbnails, "medium"),
                high=cls._thumbnail_url(thumbnails, "high"),
                standard=cls._thumbnail_url(thumbnails, "standard"),
                maxres=cls._thumbnail_url(thumbnails, "maxres"),
            ),
        )

    @classmethod
    def _parse_page(cls, raw: dict[str, Any]) -> PlaylistPage:
        page_info = raw.get("pageInfo") or {}
        items = raw.get("items") or []
        return PlaylistPage(
            next_page_token=str(raw.get("nextPageToken") or ""),
            total_results=int(page_info.get("totalResults") or 0),
            results_per_page=int(page_info.get("resultsPerPage") or 0),
            snippets=tuple(
                cls._parse_snippet(item.get("snippet") or {})
                for item in items
                if isinstance(item, dict)
            ),
        )
