"""Session store: the current user plus login/register/logout side effects."""
import logging
from typing import TYPE_CHECKING

from trade_journal.client.exceptions import ValidationError
from trade_journal.schemas import LoginCredentials, User
from trade_journal.session.navigation import Navigator, Route
from trade_journal.session.storage import SessionStorage

if TYPE_CHECKING:
    from trade_journal.client.api_client import JournalApiClient

logger = logging.getLogger(__name__)


class SessionStore:
    """Holds {user, loading} for the dashboard process.

    Passed explicitly to whatever needs it (routes resolve it from the
    container). Registers itself as the client's unauthorized handler, so a 401
    from any authenticated call clears the session and navigates to login.
    """

    def __init__(
        self,
        client: "JournalApiClient",
        storage: SessionStorage,
        navigator: Navigator,
    ) -> None:
        self._client = client
        self._storage = storage
        self._navigator = navigator
        self.user: User | None = None
        self.loading = True
        client.set_unauthorized_handler(self.invalidate)

    @property
    def is_authenticated(self) -> bool:
        return not self.loading and self.user is not None

    def load(self) -> User | None:
        """Read the persisted session once at startup."""
        self.user = self._storage.load()
        self.loading = False
        if self.user is not None:
            logger.info("Restored session for %s", self.user.username)
        return self.user

    async def login(self, credentials: LoginCredentials) -> User:
        """Sign in; on failure the error propagates and state is untouched."""
        user = await self._client.login(credentials)
        self._start(user)
        return user

    async def register(
        self,
        credentials: LoginCredentials,
        confirm_password: str | None = None,
    ) -> User:
        """Create an account and sign in.

        Raises:
            ValidationError: confirm_password is given and differs from the password.
        """
        if confirm_password is not None and confirm_password != credentials.password:
            raise ValidationError("Passwords do not match")
        user = await self._client.register(credentials)
        self._start(user)
        return user

    def logout(self) -> None:
        self._storage.clear()
        self.user = None
        self._navigator.push(Route.LOGIN)

    def invalidate(self) -> None:
        """Drop the session after the API rejected the token.

        Concurrent requests can all be rejected; only the first one signs out.
        """
        if self.user is None and not self.loading:
            return
        logger.warning("Session rejected by the API; signing out")
        self.logout()

    def _start(self, user: User) -> None:
        self._storage.save(user)
        self.user = user
        self.loading = False
        self._navigator.push(Route.HOME)
