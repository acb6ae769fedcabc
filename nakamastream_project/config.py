"""
Client configuration and defaults.

Values can be overridden through environment variables (or a `.env` file):

    NAKAMASTREAM_API_URL                 base URL of the API
    NAKAMASTREAM_TIMEOUT                 per-request timeout in seconds
    NAKAMASTREAM_RATE_LIMIT              minimum seconds between catalog fetches
    NAKAMASTREAM_MAX_REQUESTS_PER_MINUTE captcha requests allowed per window
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar, Union

from dotenv import load_dotenv


DEFAULT_BASE_URL = "https://nakamastream.lat/api"
DEFAULT_TIMEOUT = 5.0
DEFAULT_RATE_LIMIT = 60.0
DEFAULT_MAX_REQUESTS_PER_MINUTE = 60
DEFAULT_RESET_INTERVAL = 60.0

T = TypeVar("T")


def _env(name: str, cast: Callable[[str], T], default: T) -> T:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from exc


@dataclass(frozen=True)
class ClientConfig:
    """Immutable settings shared by the three clients.

    Attributes:
        base_url: API root, stored without a trailing slash.
        timeout: Per-request HTTP timeout in seconds.
        rate_limit: Minimum seconds between two successful anime list fetches.
        max_requests_per_minute: Captcha requests allowed per reset window.
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    rate_limit: float = DEFAULT_RATE_LIMIT
    max_requests_per_minute: int = DEFAULT_MAX_REQUESTS_PER_MINUTE

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @classmethod
    def from_env(cls, dotenv_path: Optional[Union[str, os.PathLike]] = None) -> "ClientConfig":
        """Build a config from the environment, loading a `.env` file first if present."""
        load_dotenv(dotenv_path)
        return cls(
            base_url=os.getenv("NAKAMASTREAM_API_URL") or DEFAULT_BASE_URL,
            timeout=_env("NAKAMASTREAM_TIMEOUT", float, DEFAULT_TIMEOUT),
            rate_limit=_env("NAKAMASTREAM_RATE_LIMIT", float, DEFAULT_RATE_LIMIT),
            max_requests_per_minute=_env(
                "NAKAMASTREAM_MAX_REQUESTS_PER_MINUTE", int, DEFAULT_MAX_REQUESTS_PER_MINUTE
            ),
        )
