"""
Captcha client, limited by a per-minute request counter.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from .client import RateLimitedFetcher
from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_REQUESTS_PER_MINUTE,
    DEFAULT_RESET_INTERVAL,
    DEFAULT_TIMEOUT,
    ClientConfig,
)
from .errors import ApiError, ApiNoResponseError, ApiRequestSetupError, ApiResponseError
from .ratelimit import CountingWindowLimiter


class CaptchaClient(RateLimitedFetcher):
    """Requests new captchas from the auth endpoint.

    At most `max_requests_per_minute` successful requests are allowed until
    the counter is reset. A background thread started on construction
    resets it every `reset_interval` seconds; call `close()` (or use the
    client as a context manager) to stop it.
    """

    path = "/auth/new-captcha"

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_requests_per_minute: int = DEFAULT_MAX_REQUESTS_PER_MINUTE,
        reset_interval: float = DEFAULT_RESET_INTERVAL,
        session: Optional[requests.Session] = None,
    ) -> None:
        super().__init__(
            limiter=CountingWindowLimiter(max_requests_per_minute, interval=reset_interval),
            base_url=base_url,
            timeout=timeout,
            session=session,
        )
        self.max_requests_per_minute = max_requests_per_minute
        self.limiter.start()

    @classmethod
    def _config_kwargs(cls, config: ClientConfig) -> Dict[str, Any]:
        return {"max_requests_per_minute": config.max_requests_per_minute}

    @property
    def request_count(self) -> int:
        return self.limiter.count

    def get_new_captcha(self) -> Any:
        """Fetch a new captcha payload.

        Raises:
            RateLimitExceeded: The per-minute budget is used up.
            ApiResponseError: The server replied with an error status.
            ApiNoResponseError: No response came back (network or timeout).
            ApiRequestSetupError: The request could not be built or sent.
        """
        return self._fetch()

    def reset_request_count(self) -> None:
        self.limiter.reset()

    def close(self) -> None:
        self.limiter.stop()
        super().close()

    def _translate_error(self, exc: Exception) -> ApiError:
        response = getattr(exc, "response", None)
        if isinstance(exc, requests.HTTPError) and response is not None:
            payload = _safe_json(response)
            message = payload.get("message") if isinstance(payload, dict) else None
            return ApiResponseError(
                f"API error: {message or 'Unknown error'}",
                status_code=response.status_code,
                payload=payload,
            )
        if isinstance(exc, (requests.ConnectionError, requests.Timeout)):
            return ApiNoResponseError()
        if isinstance(exc, requests.RequestException):
            return ApiRequestSetupError()
        # The server answered 2xx with a body that is not JSON.
        return ApiResponseError("API error: Unknown error")


def _safe_json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None
