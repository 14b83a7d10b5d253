from __future__ import annotations


class SncfMcpError(Exception):
    """Base exception for all SNCF MCP errors."""


class ApiError(SncfMcpError):
    """Raised when the SNCF API answers with a non-2xx HTTP status.

    Carries the status code and the raw response body.
    """

    def __init__(self, status_code: int, body: str = "", message: str = "") -> None:
        self.status_code = status_code
        self.body = body
        if not message:
            message = f"SNCF API error ({status_code})"
            if body:
                message = f"{message}: {body[:200]}"
        super().__init__(message)


# Name used by callers that think of it as the transit client's error.
TransitApiError = ApiError


class NetworkError(SncfMcpError):
    """Raised when the request never produced an HTTP response (DNS, connect, timeout)."""


class MalformedResponseError(SncfMcpError):
    """Raised when a successful response body is not a JSON object."""


class ValidationError(SncfMcpError):
    """Raised when input parameters fail validation before any network call."""


class ConfigurationError(SncfMcpError):
    """Raised when required settings are missing or malformed."""
