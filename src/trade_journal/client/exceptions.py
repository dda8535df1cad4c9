"""Error taxonomy for calls to the journal API."""


class JournalClientError(Exception):
    """Base class for journal client errors."""


class AuthError(JournalClientError):
    """The API rejected the session token (HTTP 401) or no user is signed in."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)
        self.message = message


class RequestFailed(JournalClientError):
    """Non-2xx response (other than 401) from the journal API.

    Attributes:
        resource: Label of the resource that was requested (e.g. "trades").
        message: Server-supplied message when available, else a default.
        status_code: HTTP status of the response.
    """

    def __init__(self, resource: str, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.resource = resource
        self.message = message
        self.status_code = status_code


class ValidationError(JournalClientError):
    """Client-side input error, raised before any network call."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
