"""
Gateway error taxonomy.

Transient provider errors are retried inside GatewayClient and only surface
as GatewayRetryExhaustedError once the retry policy gives up.
"""

from typing import Any, Optional


class GatewayError(Exception):
    """Base exception for generation gateway errors."""

    def __init__(self, message: str, status_code: int = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class GatewayHTTPError(GatewayError):
    """Non-retryable provider response (any non-2xx other than rate limit / overload)."""


class GatewayRetryExhaustedError(GatewayHTTPError):
    """Transient provider errors persisted past the retry policy."""


class GatewayTimeoutError(GatewayError):
    """A call exceeded its wall-clock budget and was cancelled."""

    def __init__(self, message: str, timeout: Optional[float] = None):
        super().__init__(message)
        self.timeout = timeout


class ResponseParseError(GatewayError):
    """Model output could not be coerced into the expected shape."""

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw
