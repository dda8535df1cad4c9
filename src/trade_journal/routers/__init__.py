"""API routers. Every page router sits behind the single route guard."""
from fastapi import APIRouter, Depends

from trade_journal.deps import require_user
from trade_journal.routers.alerts import router as alerts_router
from trade_journal.routers.auth import router as auth_router
from trade_journal.routers.dashboard import router as dashboard_router
from trade_journal.routers.notifications import router as notifications_router
from trade_journal.routers.profile import router as profile_router
from trade_journal.routers.stocks import router as stocks_router
from trade_journal.routers.trades import router as trades_router

protected_router = APIRouter(dependencies=[Depends(require_user)])
for _router in (
    dashboard_router,
    trades_router,
    stocks_router,
    alerts_router,
    notifications_router,
    profile_router,
):
    protected_router.include_router(_router)

__all__ = ["auth_router", "protected_router"]
