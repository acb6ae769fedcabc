"""
Nakamastream API client package.

This package contains:
- `animes`: catalog and recent-uploads clients with in-memory caching
- `captcha`: captcha client with a per-minute request budget
- `client`: the shared rate-limited fetch core
- `ratelimit`: elapsed-time and counting-window limiters
- `config` / `errors`: settings and exceptions
"""

from .animes import AnimeCatalogClient, RecentAnimeClient
from .captcha import CaptchaClient
from .config import ClientConfig
from .errors import (
    ApiError,
    ApiNoResponseError,
    ApiRequestSetupError,
    ApiResponseError,
    FetchFailed,
    NakamastreamError,
    RateLimitExceeded,
)

__all__ = [
    "AnimeCatalogClient",
    "RecentAnimeClient",
    "CaptchaClient",
    "ClientConfig",
    "NakamastreamError",
    "RateLimitExceeded",
    "FetchFailed",
    "ApiError",
    "ApiResponseError",
    "ApiNoResponseError",
    "ApiRequestSetupError",
]
