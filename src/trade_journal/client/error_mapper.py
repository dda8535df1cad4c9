"""Maps journal client exceptions to dashboard HTTP responses."""
from dataclasses import dataclass

import httpx

from trade_journal.client.exceptions import RequestFailed, ValidationError


@dataclass(frozen=True)
class ClientErrorMapper:
    """Maps client/backend exceptions to HTTP (status_code, detail).

    AuthError is not mapped here; the app redirects to the login view instead.
    """

    api_name: str = "Journal API"

    def to_http(self, exc: Exception) -> tuple[int, str]:
        """Map a client exception to (status_code, detail) for HTTP responses.

        Args:
            exc: The exception raised by the client or a view.

        Returns:
            (status_code, detail) suitable for HTTPException(status_code=..., detail=...).
        """
        if isinstance(exc, ValidationError):
            return (422, exc.message)
        if isinstance(exc, RequestFailed):
            status = exc.status_code
            if status == 404:
                return (404, exc.message or f"{exc.resource} not found")
            if status is None or status >= 500:
                return (502, exc.message or f"{self.api_name} error")
            return (status, exc.message)
        if isinstance(exc, httpx.TimeoutException):
            return (504, f"Request to {self.api_name} timed out")
        if isinstance(exc, httpx.TransportError):
            return (502, f"{self.api_name} unreachable")
        return (500, "Internal server error")
