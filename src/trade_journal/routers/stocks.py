"""Market list and stock detail routes."""
from fastapi import APIRouter, Query

from trade_journal.deps import ViewsDep
from trade_journal.schemas import (AlertDirection, CamelModel, MarketPage,
                                   SortDirection, SortKey, StockDetailPage,
                                   TimeRange)

router = APIRouter(prefix="/stocks", tags=["stocks"])


class AlertForm(CamelModel):
    """Alert price as typed by the user; validated by the page, not here."""

    target_price: float | str
    direction: AlertDirection = AlertDirection.ABOVE


@router.get("", response_model=MarketPage)
async def get_stocks(
    views: ViewsDep,
    search: str | None = Query(default=None, description="Match on symbol or name"),
    sort: SortKey | None = Query(default=None),
    direction: SortDirection = Query(default=SortDirection.ASCENDING),
) -> MarketPage:
    """All stocks with live prices and daily change."""
    view = await views.market()
    if search is not None:
        view.set_search(search)
    if sort is not None:
        view.set_sort(sort, direction)
    return view.snapshot()


@router.post("/sort/{key}", response_model=MarketPage)
async def toggle_sort(key: SortKey, views: ViewsDep) -> MarketPage:
    """Sort by key; repeating the request flips the direction."""
    view = await views.market()
    view.request_sort(key)
    return view.snapshot()


@router.get("/{stock_id}", response_model=StockDetailPage)
async def get_stock(
    stock_id: int,
    views: ViewsDep,
    time_range: TimeRange | None = Query(default=None, alias="range"),
) -> StockDetailPage:
    """Stock with live price, 3-day/7-day change and chart data."""
    view = await views.stock_detail(stock_id)
    if time_range is not None:
        view.set_time_range(time_range)
    return view.snapshot()


@router.post("/{stock_id}/buy", response_model=StockDetailPage)
async def buy_stock(stock_id: int, views: ViewsDep) -> StockDetailPage:
    """Open a holding at the displayed price."""
    view = await views.stock_detail(stock_id)
    await view.buy()
    return view.snapshot()


@router.post("/{stock_id}/alerts", response_model=StockDetailPage)
async def create_alert(stock_id: int, form: AlertForm, views: ViewsDep) -> StockDetailPage:
    view = await views.stock_detail(stock_id)
    await view.create_alert(form.target_price, form.direction)
    return view.snapshot()
