"""Exception hierarchy for the Coda SDK.

Every error raised by the SDK derives from CodaError. Failed HTTP responses
become CodaAPIError subclasses via error_from_response(); network failures
that never produced a response become TransportError.
"""

from typing import Any, Optional


class CodaError(Exception):
    """Base class for all coda-mcp exceptions."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(CodaError):
    """Raised when required settings (such as the API token) are missing."""
    pass


class InvalidDocIdError(CodaError, ValueError):
    """Raised when a document ID or doc URL cannot be resolved."""
    pass


class TransportError(CodaError):
    """Raised when the request fails before any HTTP response is received."""
    pass


class CodaAPIError(CodaError):
    """Base class for errors reported by the Coda API."""

    default_message = "Coda API request failed"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        response: Any = None,
    ):
        super().__init__(message or self.default_message)
        self.status_code = status_code
        self.response = response

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code!r}, message={self.message!r})"


class AuthenticationError(CodaAPIError):
    """401: the API token is missing, invalid or expired."""

    default_message = "Invalid or expired token"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, 401)


class PermissionDeniedError(CodaAPIError):
    """403: the token is valid but not allowed to perform the operation."""

    default_message = "Permission denied"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, 403)


class NotFoundError(CodaAPIError):
    """404"""

    default_message = "Resource not found"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, 404)


class RateLimitError(CodaAPIError):
    """429: upstream throttled the request.

    retry_after holds the Retry-After header in seconds when it was sent.
    """

    default_message = "Rate limit exceeded"

    def __init__(self, message: Optional[str] = None, retry_after: Optional[int] = None):
        super().__init__(message, 429)
        self.retry_after = retry_after


class ValidationError(CodaAPIError):
    """400: upstream rejected the request parameters."""

    default_message = "Invalid request parameters"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, 400)


class ServerError(CodaAPIError):
    """5xx"""

    default_message = "Coda server error"

    def __init__(self, message: Optional[str] = None, status_code: int = 500):
        super().__init__(message, status_code)


def parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Parse a Retry-After header given in whole seconds."""
    if value is None:
        return None
    try:
        seconds = int(value.strip())
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


def error_from_response(status_code: int, message: str, response: Any = None) -> CodaAPIError:
    """
    Map an HTTP status code and message to the matching CodaAPIError.

    Args:
        status_code: HTTP status of the failed response
        message: Resolved error message (may be empty to use the default)
        response: The raw response; only its headers are consulted (for 429)

    Returns:
        The exception instance; the caller decides whether to raise it.
    """
    if status_code == 401:
        return AuthenticationError(message)
    if status_code == 403:
        return PermissionDeniedError(message)
    if status_code == 404:
        return NotFoundError(message)
    if status_code == 429:
        headers = getattr(response, "headers", None) or {}
        return RateLimitError(message, retry_after=parse_retry_after(headers.get("Retry-After")))
    if status_code == 400:
        return ValidationError(message)
    if status_code >= 500:
        return ServerError(message, status_code)
    return CodaAPIError(message, status_code, response)
