"""
Shared core of the Nakamastream clients.

`RateLimitedFetcher` performs one guarded GET against a fixed endpoint:
rate-limit check, single request with timeout, JSON decoding, then a local
state update that only happens when the request succeeded.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional

import requests

from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ClientConfig
from .errors import FetchFailed, NakamastreamError, RateLimitExceeded


logger = logging.getLogger(__name__)


class RateLimitedFetcher:
    """Base class for a rate-limited, single-endpoint API client.

    Subclasses set `path`, build a limiter in `__init__` and override
    `_on_success` to update their cached state.

    Attributes:
        base_url: Base URL of the API, customizable for testing.
        timeout: Per-request HTTP timeout in seconds.
        session: The `requests.Session` used for every call.
    """

    path: str = ""
    failure_message = "Failed to fetch data"

    def __init__(
        self,
        *,
        limiter: Any,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.limiter = limiter
        self._state_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs: Any):
        """Build a client from a `ClientConfig`; extra kwargs are passed through."""
        options = {"base_url": config.base_url, "timeout": config.timeout, **cls._config_kwargs(config)}
        options.update(kwargs)
        return cls(**options)

    @classmethod
    def _config_kwargs(cls, config: ClientConfig) -> Dict[str, Any]:
        return {}

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.path}"

    # --------------------------------------------------------------------- #
    # Internal implementation
    # --------------------------------------------------------------------- #
    def _fetch(self) -> Any:
        if not self.limiter.allows():
            logger.warning("Rate limit exceeded for %s", self.url)
            raise RateLimitExceeded()

        try:
            logger.debug("GET %s", self.url)
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            data = self._parse_response(response)
        except (requests.RequestException, NakamastreamError) as exc:
            logger.error("Request to %s failed: %s", self.url, exc)
            raise self._translate_error(exc) from exc

        with self._state_lock:
            self._on_success(data)
            self.limiter.record()
        return data

    def _parse_response(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise FetchFailed("Response is not valid JSON") from exc

    def _translate_error(self, exc: Exception) -> NakamastreamError:
        return FetchFailed(self.failure_message)

    def _on_success(self, data: Any) -> None:
        """Hook called with the decoded body after a successful request."""

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class AnimeListFetcher(RateLimitedFetcher):
    """Fetcher for endpoints returning a list of anime records."""

    def _parse_response(self, response: requests.Response) -> List[Dict[str, Any]]:
        return self._ensure_list(super()._parse_response(response))

    def _ensure_list(self, data: Any) -> List[Dict[str, Any]]:
        if not isinstance(data, list):
            raise FetchFailed("Unexpected response format for list endpoint")
        if not all(isinstance(item, dict) for item in data):
            raise FetchFailed("List endpoint returned a non-object record")
        return data
