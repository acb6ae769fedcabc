"""
Anime list clients: the full catalog and the recently uploaded feed.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional

import requests

from .client import AnimeListFetcher
from .config import DEFAULT_BASE_URL, DEFAULT_RATE_LIMIT, DEFAULT_TIMEOUT, ClientConfig
from .ratelimit import ElapsedTimeLimiter


logger = logging.getLogger(__name__)


class _WindowedAnimeClient(AnimeListFetcher):
    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        rate_limit: float = DEFAULT_RATE_LIMIT,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(
            limiter=ElapsedTimeLimiter(rate_limit, clock=clock),
            base_url=base_url,
            timeout=timeout,
            session=session,
        )
        self._init_state()

    def _init_state(self) -> None:
        """Set up per-instance cached state."""

    @classmethod
    def _config_kwargs(cls, config: ClientConfig) -> Dict[str, Any]:
        return {"rate_limit": config.rate_limit}


class AnimeCatalogClient(_WindowedAnimeClient):
    """Fetches the complete anime list and keeps the last result for searching.

    `fetch_all_animes` may succeed at most once per `rate_limit` seconds;
    searches and cache reads never touch the network.
    """

    path = "/animes"
    failure_message = "Failed to fetch animes"

    def _init_state(self) -> None:
        self._cached_animes: Optional[List[Dict[str, Any]]] = None

    def fetch_all_animes(self) -> List[Dict[str, Any]]:
        """Fetch the full catalog, replacing the cache on success.

        Raises:
            RateLimitExceeded: Called again before the window elapsed.
            FetchFailed: The request failed or the body was not a list.
        """
        return self._fetch()

    def search_animes(self, query: str) -> List[Dict[str, Any]]:
        """Return cached animes whose title contains `query`, ignoring case."""
        animes = self._cached_animes
        if not animes:
            return []
        term = query.lower()
        return [
            anime
            for anime in animes
            if isinstance(anime.get("title"), str)
            and term in anime["title"].lower()
        ]

    def get_cached_animes(self) -> Optional[List[Dict[str, Any]]]:
        return self._cached_animes

    def _on_success(self, data: List[Dict[str, Any]]) -> None:
        logger.debug("Caching %d animes", len(data))
        self._cached_animes = data


class RecentAnimeClient(_WindowedAnimeClient):
    """Fetches recently uploaded animes (newest first) and tracks the newest one."""

    path = "/recent-animes"
    failure_message = "Unable to fetch recent animes"

    def _init_state(self) -> None:
        self._last_uploaded_anime: Optional[Dict[str, Any]] = None

    def fetch_recent_animes(self) -> List[Dict[str, Any]]:
        """Fetch the recent feed. The full list is returned even when nothing new arrived."""
        return self._fetch()

    def get_most_recent_uploaded_anime(self) -> Optional[Dict[str, Any]]:
        return self._last_uploaded_anime

    def _on_success(self, data: List[Dict[str, Any]]) -> None:
        if not data:
            return
        latest = data[0]
        current = self._last_uploaded_anime
        if current is None or latest.get("id") != current.get("id"):
            logger.debug("New most recent upload: %s", latest.get("id"))
            self._last_uploaded_anime = latest
