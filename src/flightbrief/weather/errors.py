"""Classified failures of a weather fetch.

Every failure is one of four kinds: the request could not be built, the
network was unreachable, the server answered with a non-200 status, or the
body could not be decoded. The kind is kept for diagnostics only; users see
a single generic message.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class WeatherErrorKind(Enum):
    """Diagnostic classification of a failed fetch."""

    INVALID_REQUEST = "invalid_request"
    NETWORK_UNREACHABLE = "network_unreachable"
    SERVER_ERROR = "server_error"
    DECODE_ERROR = "decode_error"


class WeatherAPIError(Exception):
    """Base class for every weather fetch failure.

    ``code`` is the HTTP status, or 0 when no usable response exists.
    ``response`` keeps the decoded error body for debugging.
    """

    kind: WeatherErrorKind = WeatherErrorKind.SERVER_ERROR

    def __init__(
        self, code: int, message: str, response: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(f"[{code}] {message}")
        self.code = code
        self.message = message
        self.response = response

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.code < 500

    @property
    def is_server_error(self) -> bool:
        return self.code >= 500

    @classmethod
    def from_response(
        cls, response: Dict[str, Any], status_code: int = 0
    ) -> WeatherAPIError:
        """Pick the subclass matching a non-200 status.

        Args:
            response: Decoded error body, ``{}`` when the body was not JSON
            status_code: HTTP status of the response

        Returns:
            The error to raise; its message comes from the body when present
        """
        if status_code in _STATUS_ERRORS:
            error_cls, fallback = _STATUS_ERRORS[status_code]
        elif 400 <= status_code < 500:
            error_cls, fallback = ClientError, "Client error"
        elif status_code >= 500:
            error_cls, fallback = ServerError, "Server error"
        else:
            error_cls, fallback = cls, "Unexpected status"
        return error_cls(status_code, response.get("message", fallback), response)


class InvalidRequestError(WeatherAPIError):
    """The request could not be built (bad coordinates, missing API key)."""

    kind = WeatherErrorKind.INVALID_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(0, message)


class _WrappedError(WeatherAPIError):
    """Failure caused by a lower-level exception, kept as ``original_error``."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(0, message)
        self.original_error = original_error


class NetworkError(_WrappedError):
    """No response was received (DNS, connect, timeout)."""

    kind = WeatherErrorKind.NETWORK_UNREACHABLE


class ParseError(_WrappedError):
    """The body was not JSON or did not match the expected schema."""

    kind = WeatherErrorKind.DECODE_ERROR


class ClientError(WeatherAPIError):
    """Any 4xx status without a more specific class."""


class AuthenticationError(ClientError):
    """401/403: the API key was rejected."""


class NotFoundError(ClientError):
    """404: the coordinates returned no data."""


class RateLimitError(ClientError):
    """429: too many calls for this key."""


class ServerError(WeatherAPIError):
    """5xx status from OpenWeather."""


_STATUS_ERRORS: Dict[int, tuple[type[WeatherAPIError], str]] = {
    401: (AuthenticationError, "Authentication failed"),
    403: (AuthenticationError, "Authentication failed"),
    404: (NotFoundError, "Resource not found"),
    429: (RateLimitError, "Rate limit exceeded"),
}
