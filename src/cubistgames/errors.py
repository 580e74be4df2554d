"""Custom exceptions for the Cubist Games client"""


class CubistGamesError(Exception):
    """Base exception for all Cubist Games errors."""

    def __init__(self, message: str, cause: Exception = None, **kwargs):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            cause: Optional underlying exception that caused this error
        """
        super().__init__(message, **kwargs)
        self.message = message
        self.cause = cause

    def __str__(self):
        if self.cause:
            return f"{self.message} (caused by: {type(self.cause).__name__}: {str(self.cause)})"
        return self.message


class TransportError(CubistGamesError):
    """Raised when the games API is unreachable or rejects a request."""

    def __init__(self, message: str, status_code: int = None,
                 response_body: str = None, endpoint: str = None,
                 cause: Exception = None):
        """
        Initialize the transport error.

        Args:
            message: Error message
            status_code: HTTP status code from the API
            response_body: Response body from failed request
            endpoint: API endpoint that failed
            cause: Underlying requests exception, if any
        """
        super().__init__(message, cause=cause)
        self.status_code = status_code
        self.response_body = response_body
        self.endpoint = endpoint

    @classmethod
    def from_http_error(cls, request_exception, endpoint: str = None):
        """Create a TransportError from a requests exception."""
        status_code = None
        response_body = ""

        response = getattr(request_exception, 'response', None)
        if response is not None:
            status_code = response.status_code
            response_body = response.text

        return cls(
            message="Error communicating with the games API",
            status_code=status_code,
            response_body=response_body,
            endpoint=endpoint,
            cause=request_exception
        )


class ClassificationAmbiguous(CubistGamesError):
    """Raised when a game's raw state does not map to a known lifecycle state."""

    def __init__(self, message: str, game_id: int = None, reason: str = None):
        """
        Initialize the classification error.

        Args:
            message: Error message
            game_id: Id of the offending game record
            reason: Which raw field made the record ambiguous
        """
        super().__init__(message)
        self.game_id = game_id
        self.reason = reason


class SiteNotConfiguredError(CubistGamesError):
    """Raised when no game stats exist yet for an authority."""

    def __init__(self, message: str, authority: str = None):
        super().__init__(message)
        self.authority = authority


class PaginationInProgressError(CubistGamesError):
    """Raised when a page load is requested while another one is still running."""
