"""Main module for the trade journal dashboard."""
import logging
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse

from trade_journal.client import AuthError, JournalClientError
from trade_journal.config import Settings
from trade_journal.container import Container
from trade_journal.routers import auth_router, protected_router
from trade_journal.session import Route

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    """Restore the session at startup; stop polling and close the client on shutdown."""
    container: Container = fastapi_app.state.container
    container.session_store().load()
    container.views()

    yield

    container.views().unmount_all()
    await container.price_poller().stop()
    try:
        await container.api_client().close()
    except Exception as exc:  # pylint: disable=broad-except
        logger.warning("Error closing journal client: %s", exc)


async def _auth_error_handler(_: Request, exc: AuthError) -> RedirectResponse:
    logger.info("Redirecting to login: %s", exc.message)
    return RedirectResponse(Route.LOGIN.value, status_code=303)


async def _client_error_handler(request: Request, exc: Exception) -> JSONResponse:
    mapper = request.app.state.container.error_mapper()
    status_code, detail = mapper.to_http(exc)
    return JSONResponse(status_code=status_code, content={"detail": detail})


def create_app(container: Container | None = None) -> FastAPI:
    """Build the dashboard app around a container (a fresh one by default)."""
    fastapi_app = FastAPI(
        title="Trade Journal Dashboard",
        description="Trades, live prices, alerts and notifications over the journal API",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.container = container or Container()

    fastapi_app.add_exception_handler(AuthError, _auth_error_handler)
    fastapi_app.add_exception_handler(JournalClientError, _client_error_handler)
    fastapi_app.add_exception_handler(httpx.HTTPError, _client_error_handler)

    @fastapi_app.get("/health")
    def health():
        """Return health check status."""
        return {"status": "ok"}

    fastapi_app.include_router(auth_router)
    fastapi_app.include_router(protected_router)
    return fastapi_app


app = create_app()


def run():
    """Run the dashboard (uvicorn). Use for `poetry run start`."""
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("trade_journal.main:app", host=settings.host, port=settings.port)
