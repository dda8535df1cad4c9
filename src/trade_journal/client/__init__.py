"""Journal API client and its error taxonomy."""
from trade_journal.client.api_client import JournalApiClient
from trade_journal.client.error_mapper import ClientErrorMapper
from trade_journal.client.exceptions import (AuthError, JournalClientError,
                                             RequestFailed, ValidationError)

__all__ = [
    "AuthError",
    "ClientErrorMapper",
    "JournalApiClient",
    "JournalClientError",
    "RequestFailed",
    "ValidationError",
]
