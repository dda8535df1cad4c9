"""Row builders shared by trade pages."""
from trade_journal import metrics
from trade_journal.schemas import Trade, TradeRow


def trade_row(trade: Trade) -> TradeRow:
    """Build the display row for a trade.

    A holding can be sold only once its current price is known; only closed
    trades can be deleted.
    """
    return TradeRow(
        trade=trade,
        pnl=metrics.resolve_pnl(trade),
        percent_change=metrics.percent_change(trade),
        can_sell=trade.is_holding and trade.current_price is not None,
        can_delete=not trade.is_holding,
    )
