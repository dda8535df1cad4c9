"""FastAPI dependencies: resolve singletons from the container on app.state.

The route guard lives here and is attached once to the router that groups all
protected pages.
"""
from typing import Annotated

from fastapi import Depends, Request

from trade_journal.client import AuthError
from trade_journal.schemas import User
from trade_journal.session import SessionStore
from trade_journal.views import ViewRegistry


def get_session_store(request: Request) -> SessionStore:
    """Resolve the SessionStore created at startup."""
    return request.app.state.container.session_store()


def get_views(request: Request) -> ViewRegistry:
    """Resolve the ViewRegistry created at startup."""
    return request.app.state.container.views()


def require_user(session: Annotated[SessionStore, Depends(get_session_store)]) -> User:
    """Route guard: the signed-in user, or AuthError (redirect to login)."""
    if not session.is_authenticated:
        raise AuthError("Not signed in")
    return session.user


# Type aliases for route injection
SessionDep = Annotated[SessionStore, Depends(get_session_store)]
ViewsDep = Annotated[ViewRegistry, Depends(get_views)]
CurrentUser = Annotated[User, Depends(require_user)]
