"""
Exceptions raised by the Nakamastream clients.
"""
from __future__ import annotations

from typing import Any, Optional


RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."


class NakamastreamError(RuntimeError):
    """Base class for every client error."""


class RateLimitExceeded(NakamastreamError):
    """Raised locally, before any request is sent."""

    def __init__(self, message: str = RATE_LIMIT_MESSAGE) -> None:
        super().__init__(message)


class FetchFailed(NakamastreamError):
    """The remote call failed, timed out or returned an unusable response."""


class ApiError(FetchFailed):
    """Captcha endpoint failure, subclassed by cause."""


class ApiResponseError(ApiError):
    """The server answered with an error status."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, payload: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class ApiNoResponseError(ApiError):
    """The request went out but nothing came back."""

    def __init__(
        self,
        message: str = "No response received from the API. Please check your network connection.",
    ) -> None:
        super().__init__(message)


class ApiRequestSetupError(ApiError):
    def __init__(self, message: str = "Error in setting up the API request. Please try again.") -> None:
        super().__init__(message)
