"""Persisted session storage: a single key holding the serialized user."""
import json
import logging
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError as PydanticValidationError

from trade_journal.schemas import User

logger = logging.getLogger(__name__)

SESSION_KEY = "user"


class SessionStorage(Protocol):
    """Load/store interface for the persisted session."""

    def load(self) -> User | None: ...

    def save(self, user: User) -> None: ...

    def clear(self) -> None: ...


class FileSessionStorage:
    """Stores the session as a JSON document on disk.

    The document maps a single key (default "user") to the serialized user,
    including the bearer token.
    """

    def __init__(self, path: Path | str, key: str = SESSION_KEY) -> None:
        self._path = Path(path).expanduser()
        self._key = key

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> User | None:
        """Return the stored user, or None when missing or unreadable."""
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Could not read session file %s: %s", self._path, exc)
            return None
        raw = data.get(self._key) if isinstance(data, dict) else None
        if raw is None:
            return None
        try:
            return User.model_validate(raw)
        except PydanticValidationError as exc:
            logger.warning("Ignoring malformed session in %s: %s", self._path, exc)
            return None

    def save(self, user: User) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = {self._key: user.model_dump(mode="json", by_alias=True)}
        self._path.write_text(json.dumps(payload), encoding="utf-8")

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)


class InMemorySessionStorage:
    """Session storage held in memory (tests, ephemeral runs)."""

    def __init__(self, user: User | None = None) -> None:
        self._user = user
        self.clear_count = 0

    def load(self) -> User | None:
        return self._user

    def save(self, user: User) -> None:
        self._user = user

    def clear(self) -> None:
        self.clear_count += 1
        self._user = None
