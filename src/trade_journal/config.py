"""Runtime settings read from environment variables."""
import os
from pathlib import Path

from pydantic import BaseModel

_DEFAULT_API_URL = "http://localhost:5000/api"
_DEFAULT_SESSION_FILE = Path("~/.trade_journal/session.json")


class Settings(BaseModel):
    """Dashboard settings. The price poll interval is fixed and not configurable."""

    api_url: str = _DEFAULT_API_URL
    session_file: Path = _DEFAULT_SESSION_FILE
    host: str = "127.0.0.1"
    port: int = 8010
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from TRADE_JOURNAL_* environment variables."""
        return cls(
            api_url=os.getenv("TRADE_JOURNAL_API_URL", _DEFAULT_API_URL),
            session_file=Path(
                os.getenv("TRADE_JOURNAL_SESSION_FILE", str(_DEFAULT_SESSION_FILE))
            ).expanduser(),
            host=os.getenv("TRADE_JOURNAL_HOST", "127.0.0.1"),
            port=int(os.getenv("TRADE_JOURNAL_PORT", "8010")),
            log_level=os.getenv("TRADE_JOURNAL_LOG_LEVEL", "INFO").upper(),
        )
