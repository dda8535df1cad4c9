"""Trade history routes."""
from fastapi import APIRouter, Query

from trade_journal.deps import ViewsDep
from trade_journal.schemas import TradeFilter, TradesPage

router = APIRouter(prefix="/trades", tags=["trades"])


@router.get("", response_model=TradesPage)
async def get_trades(
    views: ViewsDep,
    trade_filter: TradeFilter | None = Query(
        default=None, alias="filter", description="all, active or closed"
    ),
) -> TradesPage:
    """All trades; holdings carry their live price."""
    view = await views.trades()
    if trade_filter is not None:
        view.set_filter(trade_filter)
    return view.snapshot()


@router.post("/{trade_id}/sell", response_model=TradesPage)
async def sell_trade(trade_id: int, views: ViewsDep) -> TradesPage:
    view = await views.trades()
    await view.sell(trade_id)
    return view.snapshot()


@router.delete("/{trade_id}", response_model=TradesPage)
async def delete_trade(trade_id: int, views: ViewsDep) -> TradesPage:
    """Delete a closed trade."""
    view = await views.trades()
    await view.delete(trade_id)
    return view.snapshot()
