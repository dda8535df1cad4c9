"""Home page routes."""
from fastapi import APIRouter

from trade_journal.deps import ViewsDep
from trade_journal.schemas import DashboardPage

router = APIRouter(tags=["dashboard"])


@router.get("/", response_model=DashboardPage)
async def get_dashboard(views: ViewsDep) -> DashboardPage:
    """Open positions with live prices plus portfolio stats."""
    view = await views.dashboard()
    return view.snapshot()


@router.post("/positions/{trade_id}/sell", response_model=DashboardPage)
async def sell_position(trade_id: int, views: ViewsDep) -> DashboardPage:
    """Sell a holding at its current price; returns the refetched page."""
    view = await views.dashboard()
    await view.sell(trade_id)
    return view.snapshot()
