"""Session state: persisted user, navigation, and the session store."""
from trade_journal.session.navigation import Navigator, Route
from trade_journal.session.storage import (FileSessionStorage,
                                           InMemorySessionStorage,
                                           SessionStorage)
from trade_journal.session.store import SessionStore

__all__ = [
    "FileSessionStorage",
    "InMemorySessionStorage",
    "Navigator",
    "Route",
    "SessionStorage",
    "SessionStore",
]
