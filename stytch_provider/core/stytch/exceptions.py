"""Stytch Management API exceptions for error handling."""
from typing import Optional


class StytchError(Exception):
    """Base exception for all Stytch Management API operations."""
    pass


class StytchConfigurationError(StytchError):
    """Client is missing credentials or has an unusable base URL."""
    pass


class StytchAPIError(StytchError):
    """HTTP error from Stytch Management API.
    
    Attributes:
        status_code: HTTP status code (0 for transport failures)
        message: Error message from response
        endpoint: API endpoint that failed
        request_id: Platform request ID, when the response carried one
        error_type: Platform error type (e.g. ``project_not_found``)
    """
    
    def __init__(
        self,
        status_code: int,
        message: str,
        endpoint: str,
        request_id: Optional[str] = None,
        error_type: Optional[str] = None,
    ):
        self.status_code = status_code
        self.message = message
        self.endpoint = endpoint
        self.request_id = request_id
        self.error_type = error_type
        text = f"[{status_code}] {endpoint}: {message}"
        if error_type:
            text = f"{text} ({error_type})"
        if request_id:
            text = f"{text} request_id={request_id}"
        super().__init__(text)


class StytchNotFoundError(StytchAPIError):
    """The requested object does not exist (HTTP 404)."""
    pass
