"""Error types raised by the management API client.

404 responses on lookups never surface here: the client turns them into
``None`` results. Everything else propagates to the caller untouched.
"""

from typing import Any


class HopError(Exception):
    """Base class for all client errors."""


class TransportError(HopError):
    """Connection or I/O failure before a response was received."""


class DecodeError(HopError):
    """Response body did not match the expected shape."""


class ValidationError(HopError, ValueError):
    """Client-side pre-flight check failed; no request was sent."""


class ApiError(HopError):
    """Non-2xx response from the management API.

    Attributes:
        status: HTTP status code.
        reason: Server-provided reason, if the body carried one.
    """

    def __init__(self, message: str, status: int, reason: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.reason = reason


class BadRequestError(ApiError):
    """400 response, usually a server-side validation failure."""


class AuthenticationError(ApiError):
    """401 or 403 response."""


class AwaitTimeoutError(HopError, TimeoutError):
    """Polling gave up before the predicate held.

    Attributes:
        last_result: The last value observed before giving up.
        elapsed: Seconds spent polling.
    """

    def __init__(self, message: str, last_result: Any = None, elapsed: float = 0.0) -> None:
        super().__init__(message)
        self.last_result = last_result
        self.elapsed = elapsed
