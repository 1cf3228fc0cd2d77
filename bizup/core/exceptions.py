from typing import Optional


class BizupError(Exception):
    """Base class for every error raised by the dashboard."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ApiError(BizupError):
    """The upstream API answered with a non-success status."""

    def __init__(self, message: str, status_code: int, endpoint: str):
        super().__init__(message)
        self.status_code = status_code
        self.endpoint = endpoint


class ApiTransportError(BizupError):
    """The request never reached the server or no response came back."""

    def __init__(self, message: str, endpoint: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.endpoint = endpoint
        self.cause = cause


class ValidationFailed(BizupError):
    """Client-side validation rejected the input before any request was sent."""
