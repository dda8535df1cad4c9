"""Session routes: login, register, logout. Not behind the route guard."""
import logging

from fastapi import APIRouter
from fastapi.responses import RedirectResponse

from trade_journal.deps import SessionDep
from trade_journal.schemas import LoginCredentials, LoginPage
from trade_journal.session import Route

logger = logging.getLogger(__name__)
router = APIRouter(tags=["session"])


class RegisterForm(LoginCredentials):
    confirm_password: str | None = None


@router.get("/login", response_model=LoginPage)
async def login_page(session: SessionDep) -> LoginPage:
    """Login view; reports whether a session is already active."""
    user = session.user
    return LoginPage(
        authenticated=session.is_authenticated,
        username=user.username if user else None,
        location=Route.LOGIN.value,
    )


@router.post("/login")
async def login(credentials: LoginCredentials, session: SessionDep) -> RedirectResponse:
    """Sign in and go to the home view. Failures leave the session untouched."""
    await session.login(credentials)
    logger.info("Signed in as %s", credentials.username)
    return RedirectResponse(Route.HOME.value, status_code=303)


@router.post("/register")
async def register(form: RegisterForm, session: SessionDep) -> RedirectResponse:
    """Create an account, sign in, and go to the home view."""
    credentials = LoginCredentials(username=form.username, password=form.password)
    await session.register(credentials, confirm_password=form.confirm_password)
    logger.info("Registered %s", form.username)
    return RedirectResponse(Route.HOME.value, status_code=303)


@router.post("/logout")
async def logout(session: SessionDep) -> RedirectResponse:
    session.logout()
    return RedirectResponse(Route.LOGIN.value, status_code=303)
