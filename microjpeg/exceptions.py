"""Exception classes for the MicroJPEG SDK."""

from typing import Optional

UNKNOWN_ERROR_CODE = "unknown_error"
DEFAULT_ERROR_MESSAGE = "An error occurred"


class MicroJpegError(Exception):
    """Base exception for all MicroJPEG SDK errors."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        """Initialize exception.

        Args:
            message: Error message
            error_code: Error category code
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class ArgumentError(MicroJpegError, ValueError):
    """Raised when a client or request cannot be constructed from the given arguments."""

    def __init__(self, message: str = "Invalid argument"):
        super().__init__(message, error_code="argument")


class ApiError(MicroJpegError):
    """Raised for any non-2xx response from the MicroJPEG API.

    The service answers failures with ``{"error": ..., "message": ...}`` when it
    can; anything else (plain text, HTML error pages) ends up verbatim in
    ``error_message`` under the ``unknown_error`` code.
    """

    def __init__(self, status_code: int, error_code: str, error_message: str):
        super().__init__(error_message, error_code=error_code)
        self.status_code = status_code
        self.error_message = error_message

    def __reduce__(self):
        return (type(self), (self.status_code, self.error_code, self.error_message))

    def __str__(self) -> str:
        return f"{self.error_code}: {self.error_message} (Status: {self.status_code})"

    def __repr__(self) -> str:
        return (
            f"ApiError(status_code={self.status_code!r}, "
            f"error_code={self.error_code!r}, error_message={self.error_message!r})"
        )

    @property
    def is_limit_reached(self) -> bool:
        """Monthly quota or rate limit exhausted."""
        return self.status_code == 429 or self.error_code == "limit_reached"

    @property
    def is_unauthorized(self) -> bool:
        """API key missing, invalid or revoked."""
        return self.status_code == 401 or self.error_code == "unauthorized"

    @property
    def is_file_too_large(self) -> bool:
        """Upload exceeds the plan's size limit."""
        return self.status_code == 413 or self.error_code == "file_too_large"

    @property
    def is_feature_restricted(self) -> bool:
        """Operation not available on the account's tier."""
        return self.status_code == 403 and self.error_code == "feature_restricted"
