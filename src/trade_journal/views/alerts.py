"""Price alerts page."""
from trade_journal.client import JournalApiClient
from trade_journal.polling import PricePoller
from trade_journal.schemas import AlertsPage, PriceAlert
from trade_journal.views.base import PageView


class AlertsView(PageView):
    """Alerts are evaluated server-side; this page only lists and deletes them."""

    def __init__(self, client: JournalApiClient, poller: PricePoller) -> None:
        super().__init__(client, poller)
        self.alerts: list[PriceAlert] = []

    async def _load(self) -> list[PriceAlert]:
        return await self._client.list_price_alerts()

    def _apply(self, data: list[PriceAlert]) -> None:
        self.alerts = data

    async def delete(self, alert_id: int) -> None:
        await self._run_action(
            "Failed to delete alert", lambda: self._client.delete_price_alert(alert_id)
        )

    def snapshot(self) -> AlertsPage:
        return AlertsPage(error=self.error, alerts=self.alerts)
